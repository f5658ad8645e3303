"""Routing rule and routing outcome data models."""

from dataclasses import dataclass, field
from enum import Enum


class MatchType(str, Enum):
    """How a rule's match choices are compared against an answer."""
    ANY_OF = "AnyOf"
    ALL_OF = "AllOf"
    NONE_OF = "NoneOf"
    ALWAYS = "Always"


class NextNodeType(str, Enum):
    """Kind of node a rule routes to."""
    QUESTION = "Question"
    GOAL = "Goal"
    END = "End"


@dataclass(frozen=True)
class RoutingRule:
    """A configured mapping from (question, answer pattern) to a next node.

    ``match_type`` and ``next_node_type`` are kept as plain strings when the
    catalog holds a value outside the known enums, so that matching can fail
    closed instead of the rule being rejected at load time.
    """
    id: str
    from_question_id: str
    match_type: MatchType | str
    match_choices: tuple[str, ...] = ()
    next_node_type: NextNodeType | str = NextNodeType.END
    next_question_id: str | None = None
    next_goal_ids: tuple[str, ...] | None = None
    priority: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "RoutingRule":
        """Build a rule from a catalog record using camelCase or snake_case keys."""

        def pick(*keys: str, default=None):
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        next_goal_ids = pick("nextGoalIds", "next_goal_ids")
        return cls(
            id=str(pick("id", default="")),
            from_question_id=str(pick("fromQuestionId", "from_question_id", default="")),
            match_type=_coerce_enum(MatchType, pick("matchType", "match_type", default="")),
            match_choices=tuple(str(c) for c in pick("matchChoices", "match_choices", default=[])),
            next_node_type=_coerce_enum(
                NextNodeType, pick("nextNodeType", "next_node_type", default="End")
            ),
            next_question_id=pick("nextQuestionId", "next_question_id"),
            next_goal_ids=tuple(str(g) for g in next_goal_ids) if next_goal_ids is not None else None,
            priority=int(pick("priority", default=0)),
        )


def _coerce_enum(enum_cls: type[Enum], value: str) -> Enum | str:
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class QuestionOutcome:
    """Advance to another question."""
    question_id: str
    type: str = field(default="question", init=False)


@dataclass(frozen=True)
class GoalOutcome:
    """Resolve to the recommendations of one or more goals."""
    goal_ids: tuple[str, ...] = ()
    type: str = field(default="goal", init=False)


@dataclass(frozen=True)
class EndOutcome:
    """Terminate the flow without recommendations."""
    type: str = field(default="end", init=False)


Outcome = QuestionOutcome | GoalOutcome | EndOutcome


@dataclass(frozen=True)
class Decision:
    """Router outcome together with what produced it."""
    outcome: Outcome | None
    rule_id: str | None
    candidates_evaluated: int
