"""Tests for environment configuration and the database connection."""

import pytest

from railadmin import config, database
from railadmin.entities import Station
from railadmin.repositories import StationRepository


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATABASE_URL", "SQLALCHEMY_DATABASE_URL", "AUDIT_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_database_url_defaults_to_local_postgres() -> None:
    assert config.get_database_url().startswith("postgresql://")


def test_database_url_prefers_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///first.db")
    monkeypatch.setenv("SQLALCHEMY_DATABASE_URL", "sqlite:///second.db")

    assert config.get_database_url() == "sqlite:///first.db"


def test_database_url_falls_back_to_sqlalchemy_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SQLALCHEMY_DATABASE_URL", "sqlite:///second.db")

    assert config.get_database_url() == "sqlite:///second.db"


def test_postgres_scheme_is_rewritten(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db:5432/rail")

    assert config.get_database_url() == "postgresql://u:p@db:5432/rail"


def test_audit_file_and_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    assert config.get_audit_file() == "audit.csv"
    assert config.get_log_level() == "WARNING"

    monkeypatch.setenv("AUDIT_FILE", "trail.csv")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert config.get_audit_file() == "trail.csv"
    assert config.get_log_level() == "DEBUG"


def test_connect_creates_the_schema(tmp_path) -> None:
    engine = database.make_engine(f"sqlite:///{tmp_path / 'rail.db'}")

    db = database.connect(engine)
    try:
        repository = StationRepository(db)
        repository.save(Station("Central", 3))
        assert repository.find_by_name("Central").platform_count == 3
    finally:
        database.close(db)
        engine.dispose()


def test_connect_returns_none_when_unreachable(tmp_path) -> None:
    engine = database.make_engine(f"sqlite:///{tmp_path / 'missing' / 'rail.db'}")

    assert database.connect(engine) is None


def test_close_accepts_no_session() -> None:
    database.close(None)
