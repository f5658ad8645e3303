"""Database models for the ServiceFlow catalog."""

from serviceflow.models.goal import GoalRecord
from serviceflow.models.question import QuestionRecord
from serviceflow.models.routing_rule import RoutingRuleRecord
from serviceflow.models.service import ServiceRecord

__all__ = [
    "GoalRecord",
    "QuestionRecord",
    "ServiceRecord",
    "RoutingRuleRecord",
]
