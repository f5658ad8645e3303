"""Flow orchestrator driving the router across a multi-turn interaction.

The orchestrator is stateless: every turn is computed from the full answer
history supplied by the caller. Per turn it:
1. Takes the last answer in the history (oldest first)
2. Fetches the answered question and its routing rules concurrently
3. Routes the answer (first matching rule by priority)
4. Resolves the outcome into a question or a result node via the catalog

Catalog lookups are the only suspension points. Each one carries its own
timeout; a failed lookup aborts the turn and is reported as a retryable
catalog error, never as "no match".
"""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Any

from serviceflow.catalog.base import Catalog
from serviceflow.catalog.entities import Goal, Service
from serviceflow.core.errors import (
    CatalogError,
    FlowError,
    GoalNotFoundError,
    InvalidHistoryError,
    QuestionNotFoundError,
)
from serviceflow.core.logging import decision_logger
from serviceflow.flow.models import Answer, FlowState, FlowTurn, QuestionNode, ResultNode
from serviceflow.rules.models import EndOutcome, GoalOutcome, QuestionOutcome
from serviceflow.rules.router import decide_with_trace

logger = logging.getLogger(__name__)


def build_summary(goals: Sequence[Goal], services: Sequence[Service]) -> str:
    """Human-readable summary shown above the recommendations."""
    if not goals:
        return "Your answers did not lead to any recommended services."
    titles = ", ".join(goal.title for goal in goals)
    return f"Based on your answers, {len(services)} service(s) are recommended for: {titles}"


class FlowOrchestrator:
    """Turns an answer history into the next flow node.

    Args:
        catalog: Catalog collaborator used for every lookup
        fetch_timeout: Timeout in seconds applied to each catalog call
    """

    def __init__(self, catalog: Catalog, fetch_timeout: float = 10.0) -> None:
        self.catalog = catalog
        self.fetch_timeout = fetch_timeout

    async def start(self, goal_id: str | None = None) -> FlowTurn:
        """Enter a flow: return the catalog's first question."""
        try:
            question = await self._fetch(self.catalog.first_question(goal_id), "first question")
        except FlowError as exc:
            return self._failed(exc)

        if question is None:
            logger.info(f"Catalog has no first question (goal={goal_id})")
            return FlowTurn(state=FlowState.EXHAUSTED)

        return FlowTurn(state=FlowState.IN_QUESTION, node=QuestionNode(question=question))

    async def next(self, history: Sequence[Answer], goal_id: str | None = None) -> FlowTurn:
        """Compute the node following the last answer in ``history``.

        Args:
            history: Every answer given so far, oldest first
            goal_id: Goal the flow was started from

        Returns:
            FlowTurn holding the next node, no node (exhausted) or an error
        """
        if not history:
            return await self.start(goal_id)

        last = history[-1]

        try:
            question, rules = await self._gather(
                self._fetch(self.catalog.get_question(last.question_id), "question"),
                self._fetch(self.catalog.list_rules(last.question_id), "routing rules"),
            )

            if question is None:
                raise InvalidHistoryError(
                    f"Last answer references unknown question '{last.question_id}'"
                )

            decision = decide_with_trace(last.question_id, last.value, rules)
            outcome = decision.outcome
            decision_logger.log(
                question_id=last.question_id,
                outcome=outcome.type if outcome is not None else "none",
                rule_id=decision.rule_id,
                candidates=decision.candidates_evaluated,
            )

            if outcome is None or isinstance(outcome, EndOutcome):
                return FlowTurn(state=FlowState.EXHAUSTED, rule_id=decision.rule_id)

            if isinstance(outcome, QuestionOutcome):
                next_question = await self._fetch(
                    self.catalog.get_question(outcome.question_id), "next question"
                )
                if next_question is None:
                    raise QuestionNotFoundError(outcome.question_id, decision.rule_id)
                return FlowTurn(
                    state=FlowState.IN_QUESTION,
                    node=QuestionNode(question=next_question),
                    rule_id=decision.rule_id,
                )

            if isinstance(outcome, GoalOutcome):
                node = await self._resolve_result(outcome, decision.rule_id)
                return FlowTurn(state=FlowState.RESULT, node=node, rule_id=decision.rule_id)

            return FlowTurn(state=FlowState.EXHAUSTED, rule_id=decision.rule_id)
        except FlowError as exc:
            return self._failed(exc)

    async def _resolve_result(self, outcome: GoalOutcome, rule_id: str | None) -> ResultNode:
        """Resolve goal ids into goal records and their services."""
        goal_ids = list(dict.fromkeys(outcome.goal_ids))
        if not goal_ids:
            return ResultNode(summary=build_summary([], []))

        goals_by_id, *service_lists = await self._gather(
            self._fetch(self.catalog.get_goals(goal_ids), "goals"),
            *(
                self._fetch(self.catalog.list_services(goal_id), f"services of goal {goal_id}")
                for goal_id in goal_ids
            ),
        )

        missing = [goal_id for goal_id in goal_ids if goal_id not in goals_by_id]
        if missing:
            raise GoalNotFoundError(missing, rule_id)

        goals = [goals_by_id[goal_id] for goal_id in goal_ids]
        services: dict[str, Service] = {}
        for service_list in service_lists:
            for service in service_list:
                services.setdefault(service.id, service)

        return ResultNode(
            summary=build_summary(goals, list(services.values())),
            services=tuple(services.values()),
            goals=tuple(goals),
        )

    async def _fetch(self, awaitable: Awaitable[Any], what: str) -> Any:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.fetch_timeout)
        except asyncio.TimeoutError as exc:
            raise CatalogError(
                f"Timed out after {self.fetch_timeout}s fetching {what}"
            ) from exc

    @staticmethod
    async def _gather(*awaitables: Awaitable[Any]) -> list[Any]:
        """Run lookups concurrently; cancel the rest as soon as one fails."""
        tasks = [asyncio.ensure_future(aw) for aw in awaitables]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    @staticmethod
    def _failed(exc: FlowError) -> FlowTurn:
        if isinstance(exc, CatalogError):
            logger.warning(f"Catalog fetch failed: {exc.message}", extra={"error_code": exc.code})
        elif isinstance(exc, InvalidHistoryError):
            logger.info(f"Rejected answer history: {exc.message}", extra={"error_code": exc.code})
        else:
            logger.error(f"Flow configuration error: {exc.message}", extra={"error_code": exc.code})
        return FlowTurn(state=FlowState.ERROR, error=exc)
