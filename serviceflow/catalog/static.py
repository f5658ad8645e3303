"""In-memory catalog snapshot."""

from serviceflow.catalog.base import Catalog
from serviceflow.catalog.entities import Goal, Question, Service
from serviceflow.rules.models import RoutingRule


class StaticCatalog(Catalog):
    """Catalog backed by in-memory records (YAML files, fixtures, tests)."""

    source = "static"

    def __init__(
        self,
        goals: list[Goal] | None = None,
        questions: list[Question] | None = None,
        services: list[Service] | None = None,
        rules: list[RoutingRule] | None = None,
        version: str = "unknown",
        content_hash: str = "",
    ) -> None:
        self.goals = list(goals or [])
        self.questions = list(questions or [])
        self.services = list(services or [])
        self.rules = list(rules or [])
        self.version = version
        self.content_hash = content_hash

    async def list_goals(self) -> list[Goal]:
        return sorted(self.goals, key=lambda g: g.order)

    async def list_questions(self, goal_id: str | None = None) -> list[Question]:
        questions = self.questions
        if goal_id is not None:
            questions = [q for q in questions if q.goal_id in (goal_id, None)]
        return sorted(questions, key=lambda q: q.order)

    async def list_services(self, goal_id: str | None = None) -> list[Service]:
        services = self.services
        if goal_id is not None:
            services = [s for s in services if s.goal_id == goal_id]
        return sorted(services, key=lambda s: s.name)

    async def list_rules(self, from_question_id: str | None = None) -> list[RoutingRule]:
        if from_question_id is None:
            return list(self.rules)
        return [r for r in self.rules if r.from_question_id == from_question_id]
