"""Deterministic question routing.

Routing decisions are pure functions of the current question, the answer
given to it and the configured routing rules.
"""

from serviceflow.rules.matcher import matches, normalize_answer
from serviceflow.rules.models import (
    Decision,
    EndOutcome,
    GoalOutcome,
    MatchType,
    NextNodeType,
    Outcome,
    QuestionOutcome,
    RoutingRule,
)
from serviceflow.rules.router import decide, decide_with_trace

__all__ = [
    "RoutingRule",
    "MatchType",
    "NextNodeType",
    "Outcome",
    "QuestionOutcome",
    "GoalOutcome",
    "EndOutcome",
    "Decision",
    "matches",
    "normalize_answer",
    "decide",
    "decide_with_trace",
]
