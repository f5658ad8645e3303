"""Database initialization utilities."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from serviceflow.catalog.static import StaticCatalog
from serviceflow.db.base import Base
from serviceflow.models import GoalRecord, QuestionRecord, RoutingRuleRecord, ServiceRecord

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop all database tables (use with caution)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database tables dropped")


async def seed_catalog(session: AsyncSession, catalog: StaticCatalog) -> int:
    """Copy a catalog snapshot into empty catalog tables.

    Args:
        session: Database session
        catalog: Catalog to copy (usually loaded from YAML)

    Returns:
        Number of records inserted (0 if the catalog tables already hold data)
    """
    existing = await session.scalar(select(func.count()).select_from(QuestionRecord))
    if existing:
        logger.info("Catalog tables already populated, skipping seed")
        return 0

    records = []
    for goal in catalog.goals:
        records.append(
            GoalRecord(
                id=goal.id,
                title=goal.title,
                description=goal.description,
                display_order=goal.order,
            )
        )
    for question in catalog.questions:
        records.append(
            QuestionRecord(
                id=question.id,
                text=question.text,
                description=question.description or None,
                question_type=question.type.value,
                options=[{"value": o.value, "label": o.label} for o in question.options],
                goal_id=question.goal_id,
                display_order=question.order,
            )
        )
    for service in catalog.services:
        records.append(
            ServiceRecord(
                id=service.id,
                name=service.name,
                description=service.description,
                docs_url=service.docs_url,
                tags=list(service.tags),
                goal_id=service.goal_id,
            )
        )
    # position preserves authoring order for equal priorities
    for position, rule in enumerate(catalog.rules):
        records.append(
            RoutingRuleRecord(
                id=rule.id,
                from_question_id=rule.from_question_id,
                match_type=str(getattr(rule.match_type, "value", rule.match_type)),
                match_choices=list(rule.match_choices),
                next_node_type=str(getattr(rule.next_node_type, "value", rule.next_node_type)),
                next_question_id=rule.next_question_id,
                next_goal_ids=list(rule.next_goal_ids) if rule.next_goal_ids is not None else None,
                priority=rule.priority,
                position=position,
            )
        )

    session.add_all(records)
    await session.commit()
    logger.info(f"Seeded catalog tables with {len(records)} records")
    return len(records)


async def init_db(engine: AsyncEngine, session: AsyncSession, catalog: StaticCatalog) -> None:
    """Create tables and seed them from ``catalog`` when empty."""
    await create_tables(engine)
    await seed_catalog(session, catalog)
    logger.info("Database initialization complete")
