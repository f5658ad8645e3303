"""Flow state, answers and the nodes returned to callers."""

from dataclasses import dataclass, field
from enum import Enum

from serviceflow.catalog.entities import Goal, Question, Service
from serviceflow.core.errors import FlowError


class FlowState(str, Enum):
    """Position of a flow after a turn."""
    START = "start"
    IN_QUESTION = "in_question"
    RESULT = "result"
    EXHAUSTED = "exhausted"
    ERROR = "error"


@dataclass(frozen=True)
class Answer:
    """An answer given to a question; value is a string or selected values."""
    question_id: str
    value: str | tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            object.__setattr__(self, "value", tuple(self.value))


@dataclass(frozen=True)
class QuestionNode:
    """Next node: a question to ask."""
    question: Question
    type: str = field(default="question", init=False)


@dataclass(frozen=True)
class ResultNode:
    """Terminal node: recommendations for the goals the flow resolved to."""
    summary: str
    services: tuple[Service, ...] = ()
    goals: tuple[Goal, ...] = ()
    type: str = field(default="result", init=False)

    @property
    def goal_ids(self) -> list[str]:
        return [goal.id for goal in self.goals]


FlowNode = QuestionNode | ResultNode


@dataclass(frozen=True)
class FlowTurn:
    """Outcome of one orchestrator turn.

    Exactly one of these holds:
    - ``node`` is set (IN_QUESTION or RESULT)
    - ``node`` and ``error`` are None (EXHAUSTED)
    - ``error`` is set (ERROR)
    """
    state: FlowState
    node: FlowNode | None = None
    error: FlowError | None = None
    rule_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
