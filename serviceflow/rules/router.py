"""Router: select the applicable routing rule and turn it into an outcome.

Routing is a pure function of (current question, answer, rules):
- Rules are filtered to the current question
- Candidates are evaluated in ascending priority (stable on input order)
- The first matching rule wins; later candidates are ignored

NO state is kept between calls.
"""

import logging
from collections.abc import Iterable

from serviceflow.rules.matcher import AnswerValue, matches
from serviceflow.rules.models import (
    Decision,
    EndOutcome,
    GoalOutcome,
    NextNodeType,
    Outcome,
    QuestionOutcome,
    RoutingRule,
)

logger = logging.getLogger(__name__)


def candidate_rules(current_question_id: str, rules: Iterable[RoutingRule]) -> list[RoutingRule]:
    """Rules leaving ``current_question_id`` in evaluation order.

    ``sorted`` is stable, so rules sharing a priority keep their input order.
    """
    candidates = [r for r in rules if r.from_question_id == current_question_id]
    return sorted(candidates, key=lambda r: r.priority)


def derive_outcome(rule: RoutingRule) -> Outcome | None:
    """Convert a matched rule into an outcome.

    Returns:
        The outcome, or None when the rule is misconfigured (a Question
        rule without a target, or an unknown node type)
    """
    if rule.next_node_type == NextNodeType.QUESTION:
        if not rule.next_question_id:
            logger.warning(
                f"Rule {rule.id} routes to a question but has no nextQuestionId",
                extra={"rule_id": rule.id},
            )
            return None
        return QuestionOutcome(question_id=rule.next_question_id)

    if rule.next_node_type == NextNodeType.GOAL:
        return GoalOutcome(goal_ids=tuple(rule.next_goal_ids or ()))

    if rule.next_node_type == NextNodeType.END:
        return EndOutcome()

    logger.warning(
        f"Rule {rule.id} has unknown nextNodeType {rule.next_node_type!r}",
        extra={"rule_id": rule.id},
    )
    return None


def decide_with_trace(
    current_question_id: str,
    answer: AnswerValue,
    rules: Iterable[RoutingRule],
) -> Decision:
    """Route an answer and report which rule fired.

    Args:
        current_question_id: Question the answer belongs to
        answer: Single value or list of selected values
        rules: Full or pre-filtered rule set

    Returns:
        Decision with the outcome (None when nothing matched), the id of the
        fired rule and how many candidates were considered
    """
    candidates = candidate_rules(current_question_id, rules)

    for rule in candidates:
        if not matches(rule, answer):
            continue
        outcome = derive_outcome(rule)
        if outcome is not None:
            return Decision(outcome=outcome, rule_id=rule.id, candidates_evaluated=len(candidates))

    return Decision(outcome=None, rule_id=None, candidates_evaluated=len(candidates))


def decide(
    current_question_id: str,
    answer: AnswerValue,
    rules: Iterable[RoutingRule],
) -> Outcome | None:
    """Compute the next outcome for an answer, or None if no rule applies."""
    return decide_with_trace(current_question_id, answer, rules).outcome
