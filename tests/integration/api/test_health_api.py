"""Integration tests for health checks and API docs."""

from fastapi.testclient import TestClient


def test_liveness(client: TestClient) -> None:
    response = client.get("/health/live")

    assert response.status_code == 200
    assert response.json()["status"] == "alive"


def test_readiness_with_database(client: TestClient) -> None:
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["database"] is True


def test_swagger_docs_served(client: TestClient) -> None:
    assert client.get("/swagger").status_code == 200
    assert "/api/v1/songs" in client.get("/openapi.json").json()["paths"]
