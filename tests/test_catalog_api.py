"""Catalog endpoint tests."""

from fastapi.testclient import TestClient

from serviceflow.api.deps import get_catalog
from serviceflow.catalog.static import StaticCatalog
from serviceflow.core.errors import CatalogError
from serviceflow.main import app


class DownCatalog(StaticCatalog):
    """Catalog failing every listing."""

    async def list_goals(self):
        raise CatalogError("down")

    async def list_questions(self, goal_id=None):
        raise CatalogError("down")

    async def list_services(self, goal_id=None):
        raise CatalogError("down")


def client_for(catalog) -> TestClient:
    app.dependency_overrides[get_catalog] = lambda: catalog
    return TestClient(app)


def test_list_goals(client: TestClient) -> None:
    response = client.get("/api/v1/goals")

    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "static"
    assert data["count"] == 2
    assert [g["id"] for g in data["goals"]] == ["UC001", "UC002"]


def test_list_questions_for_goal(client: TestClient) -> None:
    response = client.get("/api/v1/questions", params={"goalId": "UC001"})

    assert response.status_code == 200
    data = response.json()
    assert data["goalId"] == "UC001"
    assert [q["id"] for q in data["questions"]] == ["q_env", "q_db"]


def test_list_services_for_goal(client: TestClient) -> None:
    response = client.get("/api/v1/services", params={"goalId": "UC002"})

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["services"][0]["name"] == "Amazon ECS on Fargate"


def test_goals_fall_back_when_catalog_is_empty() -> None:
    try:
        with client_for(StaticCatalog()) as client:
            response = client.get("/api/v1/goals")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["source"] == "fallback_empty"
    assert response.json()["count"] == 2


def test_goals_fall_back_when_catalog_fails() -> None:
    try:
        with client_for(DownCatalog()) as client:
            response = client.get("/api/v1/goals")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["source"] == "fallback_error"


def test_services_failure_is_bad_gateway() -> None:
    try:
        with client_for(DownCatalog()) as client:
            response = client.get("/api/v1/services")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
