"""Catalog backed by the relational database."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from serviceflow.catalog.base import Catalog
from serviceflow.catalog.entities import Goal, Question, Service
from serviceflow.core.errors import CatalogError
from serviceflow.models import GoalRecord, QuestionRecord, RoutingRuleRecord, ServiceRecord
from serviceflow.rules.models import RoutingRule

logger = logging.getLogger(__name__)


class SqlCatalog(Catalog):
    """Catalog reading goals, questions, services and rules from SQL tables.

    A fresh session is opened per query so that the orchestrator can issue
    independent lookups concurrently.
    """

    source = "sql"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def _scalars(self, statement: Any) -> list[Any]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(statement)
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.warning(f"Catalog query failed: {exc}")
            raise CatalogError(f"Catalog database query failed: {exc}") from exc

    async def list_goals(self) -> list[Goal]:
        records = await self._scalars(
            select(GoalRecord).order_by(GoalRecord.display_order, GoalRecord.id)
        )
        return [r.to_entity() for r in records]

    async def get_goals(self, goal_ids: list[str]) -> dict[str, Goal]:
        if not goal_ids:
            return {}
        records = await self._scalars(select(GoalRecord).where(GoalRecord.id.in_(goal_ids)))
        return {r.id: r.to_entity() for r in records}

    async def list_questions(self, goal_id: str | None = None) -> list[Question]:
        statement = select(QuestionRecord)
        if goal_id is not None:
            statement = statement.where(
                (QuestionRecord.goal_id == goal_id) | (QuestionRecord.goal_id.is_(None))
            )
        records = await self._scalars(
            statement.order_by(QuestionRecord.display_order, QuestionRecord.id)
        )
        return [r.to_entity() for r in records]

    async def get_question(self, question_id: str) -> Question | None:
        records = await self._scalars(
            select(QuestionRecord).where(QuestionRecord.id == question_id)
        )
        return records[0].to_entity() if records else None

    async def list_services(self, goal_id: str | None = None) -> list[Service]:
        statement = select(ServiceRecord)
        if goal_id is not None:
            statement = statement.where(ServiceRecord.goal_id == goal_id)
        records = await self._scalars(statement.order_by(ServiceRecord.name))
        return [r.to_entity() for r in records]

    async def list_rules(self, from_question_id: str | None = None) -> list[RoutingRule]:
        statement = select(RoutingRuleRecord)
        if from_question_id is not None:
            statement = statement.where(RoutingRuleRecord.from_question_id == from_question_id)
        records = await self._scalars(statement.order_by(RoutingRuleRecord.position, RoutingRuleRecord.id))
        try:
            return [r.to_entity() for r in records]
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"Malformed routing rule in database: {exc}") from exc
