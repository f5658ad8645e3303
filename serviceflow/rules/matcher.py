"""Rule matcher: does a single routing rule match a given answer?"""

from collections.abc import Sequence

from serviceflow.rules.models import MatchType, RoutingRule

AnswerValue = str | Sequence[str]


def normalize_answer(answer: AnswerValue) -> tuple[str, ...]:
    """Turn a scalar or multi-select answer into an ordered tuple of tokens."""
    if isinstance(answer, str):
        return (answer,)
    return tuple(answer)


def matches(rule: RoutingRule, answer: AnswerValue) -> bool:
    """Check whether ``rule`` matches ``answer``.

    Tokens are compared by exact string equality. An unrecognized
    match type never matches.

    Args:
        rule: Routing rule to test
        answer: Single value or list of selected values

    Returns:
        True if the rule's predicate holds for the answer
    """
    match_type = rule.match_type

    if match_type == MatchType.ALWAYS:
        return True

    tokens = set(normalize_answer(answer))

    if match_type == MatchType.ANY_OF:
        return any(choice in tokens for choice in rule.match_choices)
    elif match_type == MatchType.ALL_OF:
        return all(choice in tokens for choice in rule.match_choices)
    elif match_type == MatchType.NONE_OF:
        return not any(choice in tokens for choice in rule.match_choices)

    return False
