"""Goal model."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from serviceflow.catalog.entities import Goal
from serviceflow.db.base import Base, TimestampMixin


class GoalRecord(Base, TimestampMixin):
    """A goal a user can select to start a flow."""

    __tablename__ = "goals"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    # Display order on the goal selection page
    display_order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    def to_entity(self) -> Goal:
        return Goal(
            id=self.id,
            title=self.title,
            description=self.description,
            order=self.display_order,
        )

    def __repr__(self) -> str:
        return f"<GoalRecord {self.id} {self.title!r}>"
