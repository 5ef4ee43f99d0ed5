"""Integration tests for storage failures seen through the HTTP API.

Hey future me - these patch AsyncSession AFTER the app started (the `client` fixture
already ran the lifespan), so only the request under test hits the broken method.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from songlib.config import Settings
from songlib.main import create_app

SONGS = "/api/v1/songs"


def _raise_operational(message: str):
    async def failing(*args: object, **kwargs: object) -> None:
        raise OperationalError("COMMIT", {}, Exception(message))

    return failing


def test_failed_commit_is_reported_and_nothing_is_stored(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(AsyncSession, "commit", _raise_operational("disk I/O error"))

    response = client.post(SONGS, json={"group": "Muse", "song": "Uprising"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}

    monkeypatch.undo()
    assert client.get(SONGS).status_code == 404


def test_locked_database_on_commit_asks_client_to_retry(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(AsyncSession, "commit", _raise_operational("database is locked"))

    response = client.post(SONGS, json={"group": "Muse", "song": "Uprising"})

    assert response.status_code == 503
    assert response.headers["Retry-After"] == "3"


def test_locked_database_on_query_is_503(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(AsyncSession, "execute", _raise_operational("database is locked"))

    response = client.get(SONGS)

    assert response.status_code == 503
    assert response.headers["Retry-After"] == "3"
    assert response.json() == {"detail": "Database is busy, please retry"}


def test_unexpected_error_keeps_correlation_id(settings: Settings) -> None:
    app = create_app(settings)

    @app.get("/explode")
    async def explode():
        raise RuntimeError("unexpected")

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/explode", headers={"X-Correlation-ID": "trace-500"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert response.headers["X-Correlation-ID"] == "trace-500"
