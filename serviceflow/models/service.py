"""Service model."""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from serviceflow.catalog.entities import Service
from serviceflow.db.base import Base, TimestampMixin


class ServiceRecord(Base, TimestampMixin):
    """A recommendable service, attached to the goal it serves."""

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    docs_url: Mapped[str | None] = mapped_column(
        String(1000),
        nullable=True,
    )
    tags: Mapped[list] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    goal_id: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )

    def to_entity(self) -> Service:
        return Service(
            id=self.id,
            name=self.name,
            description=self.description,
            docs_url=self.docs_url,
            tags=tuple(self.tags or []),
            goal_id=self.goal_id,
        )

    def __repr__(self) -> str:
        return f"<ServiceRecord {self.id} {self.name!r}>"
