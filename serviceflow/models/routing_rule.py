"""Routing rule model."""

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from serviceflow.db.base import Base, TimestampMixin
from serviceflow.rules.models import RoutingRule


class RoutingRuleRecord(Base, TimestampMixin):
    """Stored routing rule.

    ``position`` records authoring order so that rules sharing a priority
    are always read back in the same sequence.
    """

    __tablename__ = "routing_rules"

    from_question_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )
    match_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    match_choices: Mapped[list] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    next_node_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    next_question_id: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    next_goal_ids: Mapped[list | None] = mapped_column(
        JSON,
        nullable=True,
    )
    priority: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    def to_entity(self) -> RoutingRule:
        return RoutingRule.from_dict(
            {
                "id": self.id,
                "fromQuestionId": self.from_question_id,
                "matchType": self.match_type,
                "matchChoices": self.match_choices or [],
                "nextNodeType": self.next_node_type,
                "nextQuestionId": self.next_question_id,
                "nextGoalIds": self.next_goal_ids,
                "priority": self.priority,
            }
        )

    def __repr__(self) -> str:
        return f"<RoutingRuleRecord {self.id} from={self.from_question_id} p={self.priority}>"
