"""Catalog interface consumed by the flow orchestrator."""

from abc import ABC, abstractmethod

from serviceflow.catalog.entities import Goal, Question, Service
from serviceflow.rules.models import RoutingRule


class Catalog(ABC):
    """Read-only store of goals, questions, services and routing rules.

    Implementations raise ``CatalogError`` when the backing store is
    unreachable or returns malformed data.
    """

    source: str = "catalog"

    @abstractmethod
    async def list_goals(self) -> list[Goal]:
        """All goals in display order."""

    @abstractmethod
    async def list_questions(self, goal_id: str | None = None) -> list[Question]:
        """Questions in catalog order, optionally scoped to a goal."""

    @abstractmethod
    async def list_services(self, goal_id: str | None = None) -> list[Service]:
        """Services, optionally scoped to a goal."""

    @abstractmethod
    async def list_rules(self, from_question_id: str | None = None) -> list[RoutingRule]:
        """Routing rules in stored order, optionally for one source question."""

    async def get_question(self, question_id: str) -> Question | None:
        """Look up a question by id."""
        for question in await self.list_questions():
            if question.id == question_id:
                return question
        return None

    async def get_goals(self, goal_ids: list[str]) -> dict[str, Goal]:
        """Look up goals by id; ids missing from the catalog are omitted."""
        wanted = set(goal_ids)
        return {goal.id: goal for goal in await self.list_goals() if goal.id in wanted}

    async def first_question(self, goal_id: str | None = None) -> Question | None:
        """The question a flow starts with (lowest order)."""
        questions = await self.list_questions(goal_id)
        if not questions:
            return None
        return min(questions, key=lambda q: q.order)

    async def close(self) -> None:
        """Release any resources held by the catalog."""
