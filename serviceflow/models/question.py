"""Question model."""

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from serviceflow.catalog.entities import Question, QuestionOption, QuestionType
from serviceflow.db.base import Base, TimestampMixin


class QuestionRecord(Base, TimestampMixin):
    """A question of the guided flow."""

    __tablename__ = "questions"

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    # single_choice, multi_choice or text
    question_type: Mapped[str] = mapped_column(
        String(50),
        default=QuestionType.SINGLE_CHOICE.value,
        nullable=False,
    )
    # Ordered list of {"value": ..., "label": ...}
    options: Mapped[list] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    # Goal the question belongs to (null = shared by all goals)
    goal_id: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )
    # Catalog ordering; the lowest value starts the flow
    display_order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    def to_entity(self) -> Question:
        try:
            question_type = QuestionType(self.question_type)
        except ValueError:
            question_type = QuestionType.SINGLE_CHOICE

        return Question(
            id=self.id,
            text=self.text,
            type=question_type,
            options=tuple(
                QuestionOption(value=str(o["value"]), label=str(o.get("label", o["value"])))
                for o in self.options or []
            ),
            description=self.description or "",
            goal_id=self.goal_id,
            order=self.display_order,
        )

    def __repr__(self) -> str:
        return f"<QuestionRecord {self.id} order={self.display_order}>"
