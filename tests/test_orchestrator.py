"""Tests for flow orchestration over the catalog."""

import asyncio

import pytest

from serviceflow.catalog.loader import build_catalog
from serviceflow.catalog.static import StaticCatalog
from serviceflow.core.errors import (
    CatalogError,
    GoalNotFoundError,
    InvalidHistoryError,
    QuestionNotFoundError,
)
from serviceflow.flow.models import Answer, FlowState, QuestionNode, ResultNode
from serviceflow.flow.orchestrator import FlowOrchestrator, build_summary
from tests.conftest import SCENARIO_CATALOG


def catalog_with_rules(*rules: dict) -> StaticCatalog:
    data = dict(SCENARIO_CATALOG)
    data["rules"] = list(rules)
    return build_catalog(data)


class SlowCatalog(StaticCatalog):
    """Catalog whose rule lookups never finish in time."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.cancelled = False

    async def list_rules(self, from_question_id=None):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return []


class FailingCatalog(StaticCatalog):
    """Catalog whose service lookups fail."""

    async def list_services(self, goal_id=None):
        raise CatalogError("catalog down")


class TestStart:
    """Start -> InQuestion(q0)."""

    @pytest.mark.asyncio
    async def test_empty_history_returns_first_question(self, catalog: StaticCatalog) -> None:
        turn = await FlowOrchestrator(catalog).next([])

        assert turn.state == FlowState.IN_QUESTION
        assert isinstance(turn.node, QuestionNode)
        assert turn.node.question.id == "q_env"

    @pytest.mark.asyncio
    async def test_first_question_uses_lowest_order(self) -> None:
        catalog = build_catalog(
            {
                "questions": [
                    {"id": "late", "text": "Late", "order": 9},
                    {"id": "early", "text": "Early", "order": 1},
                ]
            }
        )

        turn = await FlowOrchestrator(catalog).start()

        assert turn.node.question.id == "early"

    @pytest.mark.asyncio
    async def test_first_question_scoped_to_goal(self) -> None:
        catalog = build_catalog(
            {
                "questions": [
                    {"id": "q_other", "text": "Other goal", "goalId": "UC002", "order": 1},
                    {"id": "q_mine", "text": "My goal", "goalId": "UC001", "order": 2},
                ]
            }
        )

        turn = await FlowOrchestrator(catalog).start(goal_id="UC001")

        assert turn.node.question.id == "q_mine"

    @pytest.mark.asyncio
    async def test_empty_catalog_is_exhausted(self) -> None:
        turn = await FlowOrchestrator(StaticCatalog()).start()

        assert turn.state == FlowState.EXHAUSTED
        assert turn.node is None
        assert turn.error is None


class TestTransitions:
    """InQuestion transitions driven by the router."""

    @pytest.mark.asyncio
    async def test_answer_routes_to_next_question(self, catalog: StaticCatalog) -> None:
        turn = await FlowOrchestrator(catalog).next([Answer("q_env", "dev")])

        assert turn.state == FlowState.IN_QUESTION
        assert turn.node.question.id == "q_db"
        assert turn.rule_id == "r_env_dev"

    @pytest.mark.asyncio
    async def test_goal_outcome_produces_result(self, catalog: StaticCatalog) -> None:
        history = [Answer("q_env", "dev"), Answer("q_db", "none")]

        turn = await FlowOrchestrator(catalog).next(history)

        assert turn.state == FlowState.RESULT
        assert isinstance(turn.node, ResultNode)
        assert turn.node.goal_ids == ["UC001"]
        assert [s.id for s in turn.node.services] == ["svc_lambda", "svc_s3"]
        assert "Build a CSV conversion tool" in turn.node.summary

    @pytest.mark.asyncio
    async def test_only_last_answer_is_routed(self, catalog: StaticCatalog) -> None:
        """Earlier answers do not influence the decision."""
        history = [Answer("q_env", "prod"), Answer("q_db", "none")]

        turn = await FlowOrchestrator(catalog).next(history)

        assert turn.state == FlowState.RESULT

    @pytest.mark.asyncio
    async def test_no_matching_rule_is_exhausted(self, catalog: StaticCatalog) -> None:
        turn = await FlowOrchestrator(catalog).next([Answer("q_env", "prod")])

        assert turn.state == FlowState.EXHAUSTED
        assert turn.node is None
        assert turn.error is None

    @pytest.mark.asyncio
    async def test_end_rule_is_exhausted(self) -> None:
        catalog = catalog_with_rules(
            {"id": "r_end", "fromQuestionId": "q_env", "matchType": "Always", "nextNodeType": "End"}
        )

        turn = await FlowOrchestrator(catalog).next([Answer("q_env", "dev")])

        assert turn.state == FlowState.EXHAUSTED
        assert turn.rule_id == "r_end"

    @pytest.mark.asyncio
    async def test_goal_rule_without_goals_gives_empty_result(self) -> None:
        catalog = catalog_with_rules(
            {"id": "r_goal", "fromQuestionId": "q_env", "matchType": "Always", "nextNodeType": "Goal"}
        )

        turn = await FlowOrchestrator(catalog).next([Answer("q_env", "dev")])

        assert turn.state == FlowState.RESULT
        assert turn.node.services == ()
        assert turn.node.goals == ()

    @pytest.mark.asyncio
    async def test_services_of_several_goals_are_deduplicated(self) -> None:
        data = dict(SCENARIO_CATALOG)
        data["services"] = SCENARIO_CATALOG["services"] + [
            {"id": "svc_s3", "name": "Amazon S3", "goalId": "UC002"},
        ]
        data["rules"] = [
            {
                "id": "r_both",
                "fromQuestionId": "q_env",
                "matchType": "Always",
                "nextNodeType": "Goal",
                "nextGoalIds": ["UC001", "UC002", "UC001"],
            }
        ]

        turn = await FlowOrchestrator(build_catalog(data)).next([Answer("q_env", "dev")])

        assert turn.node.goal_ids == ["UC001", "UC002"]
        assert [s.id for s in turn.node.services] == ["svc_lambda", "svc_s3", "svc_ecs"]

    @pytest.mark.asyncio
    async def test_multi_select_answer(self) -> None:
        catalog = catalog_with_rules(
            {
                "id": "r_all",
                "fromQuestionId": "q_env",
                "matchType": "AllOf",
                "matchChoices": ["dev", "prod"],
                "nextNodeType": "Question",
                "nextQuestionId": "q_db",
            }
        )

        turn = await FlowOrchestrator(catalog).next([Answer("q_env", ["prod", "dev"])])

        assert turn.node.question.id == "q_db"


class TestErrors:
    """Configuration, caller and fetch errors are reported, never raised."""

    @pytest.mark.asyncio
    async def test_unknown_last_question_is_rejected(self, catalog: StaticCatalog) -> None:
        turn = await FlowOrchestrator(catalog).next([Answer("q_missing", "dev")])

        assert turn.state == FlowState.ERROR
        assert isinstance(turn.error, InvalidHistoryError)
        assert turn.error.retryable is False

    @pytest.mark.asyncio
    async def test_rule_to_missing_question_is_configuration_error(self) -> None:
        catalog = catalog_with_rules(
            {
                "id": "r_bad",
                "fromQuestionId": "q_env",
                "matchType": "Always",
                "nextNodeType": "Question",
                "nextQuestionId": "q_gone",
            }
        )

        turn = await FlowOrchestrator(catalog).next([Answer("q_env", "dev")])

        assert turn.state == FlowState.ERROR
        assert isinstance(turn.error, QuestionNotFoundError)
        assert turn.error.question_id == "q_gone"
        assert turn.error.rule_id == "r_bad"

    @pytest.mark.asyncio
    async def test_rule_to_missing_goal_is_configuration_error(self) -> None:
        catalog = catalog_with_rules(
            {
                "id": "r_bad",
                "fromQuestionId": "q_env",
                "matchType": "Always",
                "nextNodeType": "Goal",
                "nextGoalIds": ["UC001", "UC404"],
            }
        )

        turn = await FlowOrchestrator(catalog).next([Answer("q_env", "dev")])

        assert isinstance(turn.error, GoalNotFoundError)
        assert turn.error.goal_ids == ["UC404"]
        assert turn.node is None

    @pytest.mark.asyncio
    async def test_fetch_timeout_is_retryable_catalog_error(self) -> None:
        catalog = SlowCatalog(
            questions=build_catalog(SCENARIO_CATALOG).questions,
        )

        turn = await FlowOrchestrator(catalog, fetch_timeout=0.05).next([Answer("q_env", "dev")])

        assert turn.state == FlowState.ERROR
        assert isinstance(turn.error, CatalogError)
        assert turn.error.retryable is True
        assert catalog.cancelled is True

    @pytest.mark.asyncio
    async def test_sibling_lookup_finishes_cancelling_before_turn_returns(self) -> None:
        class BrokenQuestions(SlowCatalog):
            async def get_question(self, question_id):
                raise CatalogError("question lookup failed")

        catalog = BrokenQuestions()

        turn = await FlowOrchestrator(catalog, fetch_timeout=5).next([Answer("q_env", "dev")])

        assert isinstance(turn.error, CatalogError)
        assert catalog.cancelled is True

    @pytest.mark.asyncio
    async def test_service_fetch_failure_aborts_turn(self) -> None:
        base = build_catalog(SCENARIO_CATALOG)
        catalog = FailingCatalog(
            goals=base.goals,
            questions=base.questions,
            services=base.services,
            rules=base.rules,
        )
        history = [Answer("q_env", "dev"), Answer("q_db", "none")]

        turn = await FlowOrchestrator(catalog).next(history)

        assert turn.state == FlowState.ERROR
        assert isinstance(turn.error, CatalogError)
        assert turn.node is None

    @pytest.mark.asyncio
    async def test_start_timeout_is_catalog_error(self) -> None:
        class SlowStart(StaticCatalog):
            async def first_question(self, goal_id=None):
                await asyncio.sleep(10)

        turn = await FlowOrchestrator(SlowStart(), fetch_timeout=0.05).start()

        assert isinstance(turn.error, CatalogError)


class TestEndToEndScenario:
    """Start -> q_env -> q_db -> result for UC001."""

    @pytest.mark.asyncio
    async def test_full_flow(self, catalog: StaticCatalog) -> None:
        orchestrator = FlowOrchestrator(catalog)
        history: list[Answer] = []

        turn = await orchestrator.next(history)
        assert turn.node.question.id == "q_env"

        history.append(Answer("q_env", "dev"))
        turn = await orchestrator.next(history)
        assert turn.node.question.id == "q_db"

        history.append(Answer("q_db", "none"))
        turn = await orchestrator.next(history)
        assert turn.state == FlowState.RESULT
        assert turn.node.goal_ids == ["UC001"]
        assert {s.goal_id for s in turn.node.services} == {"UC001"}

    @pytest.mark.asyncio
    async def test_repeated_turn_is_idempotent(self, catalog: StaticCatalog) -> None:
        orchestrator = FlowOrchestrator(catalog)
        history = [Answer("q_env", "dev"), Answer("q_db", "none")]

        first = await orchestrator.next(history)
        second = await orchestrator.next(history)

        assert first == second


def test_build_summary_without_goals() -> None:
    assert "did not lead" in build_summary([], [])
