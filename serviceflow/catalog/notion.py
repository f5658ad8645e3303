"""
Catalog backed by Notion databases.

Wraps the Notion database query API. Each catalog collection lives in its
own Notion database; page properties are coerced into catalog records here
so that no other part of the system deals with Notion's property shapes.

Usage::

    catalog = NotionCatalog(secret, goals_db, questions_db, services_db, rules_db)
    goals = await catalog.list_goals()
    await catalog.close()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx

from serviceflow.catalog.base import Catalog
from serviceflow.catalog.entities import Goal, Question, QuestionOption, QuestionType, Service
from serviceflow.core.errors import CatalogError, CatalogMisconfiguredError
from serviceflow.rules.models import RoutingRule

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Property coercion
# ---------------------------------------------------------------------------

def _prop(page: dict, name: str, kind: str) -> Any:
    """Return the raw value of a typed property, or None if absent/mistyped."""
    prop = (page.get("properties") or {}).get(name)
    if not isinstance(prop, dict) or prop.get("type") != kind:
        return None
    return prop.get(kind)


def prop_text(page: dict, name: str, default: str = "") -> str:
    """Plain text of a title or rich_text property."""
    for kind in ("title", "rich_text"):
        value = _prop(page, name, kind)
        if value:
            return "".join(part.get("plain_text", "") for part in value)
    return default


def prop_number(page: dict, name: str) -> Optional[int | float]:
    value = _prop(page, name, "number")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def prop_select(page: dict, name: str) -> Optional[str]:
    value = _prop(page, name, "select")
    return value.get("name") if isinstance(value, dict) else None


def prop_multi_select(page: dict, name: str) -> list[str]:
    value = _prop(page, name, "multi_select")
    return [item.get("name", "") for item in value] if isinstance(value, list) else []


def prop_url(page: dict, name: str) -> Optional[str]:
    value = _prop(page, name, "url")
    return value if isinstance(value, str) and value else None


def _goal_key(value: Optional[int | float]) -> Optional[str]:
    return None if value is None else str(value)


def goal_from_page(page: dict) -> Goal:
    number = prop_number(page, "Goal ID")
    return Goal(
        id=_goal_key(number) or page["id"],
        title=prop_text(page, "Goal Name", "No title"),
        description=prop_text(page, "Description") or None,
        order=int(number or 0),
    )


def question_from_page(page: dict) -> Question:
    try:
        question_type = QuestionType(prop_select(page, "Type") or "single_choice")
    except ValueError:
        question_type = QuestionType.SINGLE_CHOICE

    return Question(
        id=prop_text(page, "QID") or page["id"],
        text=prop_text(page, "Question", "No title"),
        type=question_type,
        options=tuple(
            QuestionOption(value=name, label=name) for name in prop_multi_select(page, "Options")
        ),
        description=prop_text(page, "Description"),
        goal_id=_goal_key(prop_number(page, "Goal ID")),
        order=int(prop_number(page, "Order") or 0),
    )


def service_from_page(page: dict) -> Service:
    return Service(
        id=page["id"],
        name=prop_text(page, "Service Name", "No title"),
        description=prop_text(page, "Description") or None,
        docs_url=prop_url(page, "Docs URL"),
        tags=tuple(prop_multi_select(page, "Tags")),
        goal_id=_goal_key(prop_number(page, "Goal ID")),
    )


def rule_from_page(page: dict) -> RoutingRule:
    next_goal_ids = prop_multi_select(page, "Next Goal IDs")
    return RoutingRule.from_dict(
        {
            "id": prop_text(page, "Rule ID") or page["id"],
            "fromQuestionId": prop_text(page, "From Question"),
            "matchType": prop_select(page, "Match Type") or "",
            "matchChoices": prop_multi_select(page, "Match Choices"),
            "nextNodeType": prop_select(page, "Next Node Type") or "End",
            "nextQuestionId": prop_text(page, "Next Question") or None,
            "nextGoalIds": next_goal_ids or None,
            "priority": prop_number(page, "Priority") or 0,
        }
    )


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class NotionCatalog(Catalog):
    """Async Notion client exposing the catalog interface.

    The httpx.AsyncClient is created lazily unless one is injected.
    """

    source = "notion"

    # Retry configuration for rate limiting (HTTP 429)
    MAX_RETRIES: int = 3
    RETRY_BACKOFF_BASE: float = 1.0
    PAGE_SIZE: int = 100

    def __init__(
        self,
        secret: str,
        goals_database_id: str,
        questions_database_id: str,
        services_database_id: str,
        rules_database_id: Optional[str] = None,
        api_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.goals_database_id = goals_database_id
        self.questions_database_id = questions_database_id
        self.services_database_id = services_database_id
        self.rules_database_id = rules_database_id
        self.api_url = api_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {secret}",
            "Notion-Version": notion_version,
            "Content-Type": "application/json",
        }
        self._client = client

    def _client_get(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=15.0)
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def _post(self, url: str, body: dict) -> dict:
        client = self._client_get()
        delay = self.RETRY_BACKOFF_BASE
        for attempt in range(1, self.MAX_RETRIES + 1):
            try:
                resp = await client.post(url, json=body, headers=self._headers)
                resp.raise_for_status()
                return resp.json()
            except httpx.HTTPStatusError as exc:
                if exc.response.status_code == 429 and attempt < self.MAX_RETRIES:
                    logger.warning("Notion API rate-limited; retrying in %.0fs", delay)
                    await asyncio.sleep(delay)
                    delay *= 2
                    continue
                logger.warning("Notion API HTTP error %s for %s", exc.response.status_code, url)
                raise CatalogError(
                    f"Notion API returned HTTP {exc.response.status_code}"
                ) from exc
            except httpx.HTTPError as exc:
                logger.warning("Notion API request failed: %s", exc)
                raise CatalogError(f"Notion API request failed: {exc}") from exc
            except ValueError as exc:
                raise CatalogError("Notion API returned a non-JSON body") from exc
        raise CatalogError("Notion API rate limit retries exhausted")

    async def query_database(
        self,
        database_id: str,
        filter: Optional[dict] = None,
        sorts: Optional[list[dict]] = None,
    ) -> list[dict]:
        """Return every page of a database query, following pagination."""
        url = f"{self.api_url}/databases/{database_id}/query"
        pages: list[dict] = []
        cursor: Optional[str] = None

        while True:
            body: dict[str, Any] = {"page_size": self.PAGE_SIZE}
            if filter:
                body["filter"] = filter
            if sorts:
                body["sorts"] = sorts
            if cursor:
                body["start_cursor"] = cursor

            data = await self._post(url, body)
            results = data.get("results") if isinstance(data, dict) else None
            if not isinstance(results, list):
                raise CatalogError(f"Malformed Notion response for database {database_id}")
            pages.extend(results)

            if not data.get("has_more") or not data.get("next_cursor"):
                return pages
            cursor = data["next_cursor"]

    async def _records(self, database_id: str, convert, **query) -> list:
        pages = await self.query_database(database_id, **query)
        try:
            return [convert(page) for page in pages]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise CatalogError(f"Malformed Notion page in database {database_id}: {exc}") from exc

    @staticmethod
    def _goal_filter(goal_id: Optional[str]) -> Optional[dict]:
        if goal_id is None or not goal_id.isdigit():
            return None
        return {"property": "Goal ID", "number": {"equals": int(goal_id)}}

    async def list_goals(self) -> list[Goal]:
        return await self._records(
            self.goals_database_id,
            goal_from_page,
            sorts=[{"property": "Goal ID", "direction": "ascending"}],
        )

    async def list_questions(self, goal_id: Optional[str] = None) -> list[Question]:
        goal_filter = self._goal_filter(goal_id)
        if goal_filter is not None:
            goal_filter = {
                "or": [
                    goal_filter,
                    {"property": "Goal ID", "number": {"is_empty": True}},
                ]
            }
        questions = await self._records(
            self.questions_database_id,
            question_from_page,
            filter=goal_filter,
            sorts=[{"property": "Order", "direction": "ascending"}],
        )
        if goal_id is not None:
            questions = [q for q in questions if q.goal_id in (goal_id, None)]
        return questions

    async def list_services(self, goal_id: Optional[str] = None) -> list[Service]:
        services = await self._records(
            self.services_database_id,
            service_from_page,
            filter=self._goal_filter(goal_id),
            sorts=[{"property": "Service Name", "direction": "ascending"}],
        )
        if goal_id is not None:
            services = [s for s in services if s.goal_id == goal_id]
        return services

    async def list_rules(self, from_question_id: Optional[str] = None) -> list[RoutingRule]:
        if not self.rules_database_id:
            raise CatalogMisconfiguredError("No Notion database configured for routing rules")
        rule_filter = None
        if from_question_id is not None:
            rule_filter = {
                "property": "From Question",
                "rich_text": {"equals": from_question_id},
            }
        rules = await self._records(self.rules_database_id, rule_from_page, filter=rule_filter)
        if from_question_id is not None:
            rules = [r for r in rules if r.from_question_id == from_question_id]
        return rules
