"""Catalog browsing endpoints (goals, questions, services)."""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from serviceflow.api.deps import CatalogDep
from serviceflow.core.config import settings
from serviceflow.core.errors import CatalogError
from serviceflow.fixtures import FALLBACK_GOALS
from serviceflow.schemas.catalog import (
    GoalListResponse,
    GoalRead,
    QuestionListResponse,
    QuestionRead,
    ServiceListResponse,
    ServiceRead,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _fallback_goals(source: str) -> GoalListResponse:
    goals = [GoalRead.from_entity(g) for g in FALLBACK_GOALS]
    return GoalListResponse(goals=goals, source=source, count=len(goals))


@router.get("/goals", response_model=GoalListResponse)
async def list_goals(catalog: CatalogDep) -> GoalListResponse:
    """List goals for the selection page.

    When fallback is enabled, fixture goals are served if the catalog is
    empty (source=fallback_empty) or unreachable (source=fallback_error).
    """
    try:
        goals = await catalog.list_goals()
    except CatalogError as exc:
        logger.warning(f"Goal listing failed: {exc.message}")
        if settings.goals_fallback_enabled:
            return _fallback_goals("fallback_error")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch goals from catalog",
        ) from exc

    if not goals and settings.goals_fallback_enabled:
        return _fallback_goals("fallback_empty")

    return GoalListResponse(
        goals=[GoalRead.from_entity(g) for g in goals],
        source=catalog.source,
        count=len(goals),
    )


@router.get("/questions", response_model=QuestionListResponse)
async def list_questions(
    catalog: CatalogDep,
    goal_id: str | None = Query(default=None, alias="goalId"),
) -> QuestionListResponse:
    """List questions, optionally scoped to a goal."""
    try:
        questions = await catalog.list_questions(goal_id)
    except CatalogError as exc:
        logger.warning(f"Question listing failed: {exc.message}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch questions from catalog",
        ) from exc

    return QuestionListResponse(
        source=catalog.source,
        goal_id=goal_id,
        count=len(questions),
        questions=[QuestionRead.from_entity(q) for q in questions],
    )


@router.get("/services", response_model=ServiceListResponse)
async def list_services(
    catalog: CatalogDep,
    goal_id: str | None = Query(default=None, alias="goalId"),
) -> ServiceListResponse:
    """List services, optionally scoped to a goal."""
    try:
        services = await catalog.list_services(goal_id)
    except CatalogError as exc:
        logger.warning(f"Service listing failed: {exc.message}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch services from catalog",
        ) from exc

    return ServiceListResponse(
        source=catalog.source,
        goal_id=goal_id,
        count=len(services),
        services=[ServiceRead.from_entity(s) for s in services],
    )
