"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from serviceflow.api.deps import get_catalog
from serviceflow.catalog.loader import build_catalog
from serviceflow.catalog.static import StaticCatalog
from serviceflow.db.base import Base
from serviceflow.main import app

# Use SQLite for testing (simpler than spinning up postgres)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# Catalog used by the end-to-end scenario: q_env -> q_db -> UC001
SCENARIO_CATALOG = {
    "version": "test",
    "goals": [
        {"id": "UC001", "title": "Build a CSV conversion tool", "order": 1},
        {"id": "UC002", "title": "Replace an existing system with ECS", "order": 2},
    ],
    "questions": [
        {
            "id": "q_env",
            "text": "What kind of environment will you use?",
            "type": "single_choice",
            "order": 1,
            "options": [
                {"value": "dev", "label": "Development"},
                {"value": "prod", "label": "Production"},
            ],
        },
        {
            "id": "q_db",
            "text": "How do you plan to use a database?",
            "type": "single_choice",
            "order": 2,
            "options": [
                {"value": "rds", "label": "RDS"},
                {"value": "ddb", "label": "DynamoDB"},
                {"value": "none", "label": "No database"},
            ],
        },
    ],
    "services": [
        {"id": "svc_s3", "name": "Amazon S3", "goalId": "UC001", "tags": ["Storage"]},
        {"id": "svc_lambda", "name": "AWS Lambda", "goalId": "UC001", "docsUrl": "https://docs.aws.amazon.com/lambda/"},
        {"id": "svc_ecs", "name": "Amazon ECS on Fargate", "goalId": "UC002"},
    ],
    "rules": [
        {
            "id": "r_env_dev",
            "fromQuestionId": "q_env",
            "matchType": "AnyOf",
            "matchChoices": ["dev"],
            "nextNodeType": "Question",
            "nextQuestionId": "q_db",
            "priority": 1,
        },
        {
            "id": "r_db_none",
            "fromQuestionId": "q_db",
            "matchType": "AnyOf",
            "matchChoices": ["none"],
            "nextNodeType": "Goal",
            "nextGoalIds": ["UC001"],
            "priority": 1,
        },
    ],
}


@pytest.fixture
def catalog() -> StaticCatalog:
    """In-memory catalog for the end-to-end scenario."""
    return build_catalog(SCENARIO_CATALOG)


@pytest.fixture
def client(catalog: StaticCatalog) -> Generator[TestClient, None, None]:
    """Create FastAPI test client with the scenario catalog injected."""
    app.dependency_overrides[get_catalog] = lambda: catalog

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
