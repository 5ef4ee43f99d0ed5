"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from songlib.config import DatabaseSettings, Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.api.prefix == "/api/v1"
    assert settings.api.docs_url == "/swagger"
    assert settings.api.port == 8080
    assert settings.log_level == "INFO"


def test_nested_settings_read_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./from-env.db")
    monkeypatch.setenv("API_PORT", "9090")
    monkeypatch.setenv("OBSERVABILITY_LOG_JSON_FORMAT", "true")

    settings = Settings()

    assert settings.database.url == "sqlite+aiosqlite:///./from-env.db"
    assert settings.api.port == 9090
    assert settings.observability.log_json_format is True


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite+aiosqlite:///./data/songs.db", Path("./data/songs.db")),
        ("sqlite+aiosqlite:////var/lib/songs.db?timeout=5", Path("/var/lib/songs.db")),
        ("sqlite+aiosqlite:///:memory:", None),
        ("postgresql+asyncpg://user:pw@localhost/songs", None),
    ],
)
def test_sqlite_db_path(url: str, expected: Path | None) -> None:
    settings = Settings(database=DatabaseSettings(url=url))

    assert settings._get_sqlite_db_path() == expected
