"""Tests for configuration loading."""

import pytest

import journeylog.persistence as persistence
from journeylog.config import JourneylogConfig, load_config
from journeylog.persistence import (
    InMemoryJourneyBackend,
    SQLiteJourneyBackend,
    backend_from_url,
    get_backend,
)


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
database_url: sqlite:///tmp/journeys.db
display:
  date_format: "%Y-%m-%d"
  unknown_date: n/a
"""
    )
    monkeypatch.setenv("JOURNEYLOG_CONFIG", str(config_path))
    monkeypatch.delenv("JOURNEYLOG_DATABASE_URL", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)

    config = load_config()
    assert config.database_url == "sqlite:///tmp/journeys.db"
    assert config.display.date_format == "%Y-%m-%d"
    assert config.display.unknown_date == "n/a"


def test_env_database_url_overrides_file(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("database_url: sqlite:///from/file.db\n")
    monkeypatch.setenv("JOURNEYLOG_CONFIG", str(config_path))
    monkeypatch.setenv("JOURNEYLOG_DATABASE_URL", "sqlite:///from/env.db")

    assert load_config().database_url == "sqlite:///from/env.db"


def test_get_backend_uses_config(tmp_path, monkeypatch):
    db_path = tmp_path / "journeys.db"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"database_url: sqlite://{db_path}\n")
    monkeypatch.setenv("JOURNEYLOG_CONFIG", str(config_path))
    monkeypatch.delenv("JOURNEYLOG_DATABASE_URL", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(persistence, "_backend_instance", None)

    backend = get_backend()
    assert isinstance(backend, SQLiteJourneyBackend)
    assert backend.db_path == str(db_path)
    assert get_backend() is backend


def test_get_backend_defaults_to_memory(tmp_path, monkeypatch):
    monkeypatch.setenv("JOURNEYLOG_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("JOURNEYLOG_DATABASE_URL", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(persistence, "_backend_instance", None)

    assert isinstance(get_backend(), InMemoryJourneyBackend)


def test_get_backend_rejects_unknown_scheme(monkeypatch):
    monkeypatch.setattr(persistence, "_backend_instance", None)
    with pytest.raises(ValueError, match="Unsupported database backend"):
        get_backend("mongodb://localhost")


def test_journeylog_database_url_takes_precedence(tmp_path, monkeypatch):
    monkeypatch.setenv("JOURNEYLOG_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("JOURNEYLOG_DATABASE_URL", raising=False)
    monkeypatch.setenv("DATABASE_URL", "sqlite:///generic.db")
    assert load_config().database_url == "sqlite:///generic.db"

    monkeypatch.setenv("JOURNEYLOG_DATABASE_URL", "sqlite:///specific.db")
    assert load_config().database_url == "sqlite:///specific.db"


def test_get_backend_picks_up_env_through_config(tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("JOURNEYLOG_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("JOURNEYLOG_DATABASE_URL", f"sqlite://{db_path}")
    monkeypatch.setattr(persistence, "_backend_instance", None)

    backend = get_backend()
    assert isinstance(backend, SQLiteJourneyBackend)
    assert backend.db_path == str(db_path)


def test_explicit_config_is_not_overridden_by_env(tmp_path, monkeypatch):
    monkeypatch.setenv("JOURNEYLOG_DATABASE_URL", f"sqlite://{tmp_path / 'env.db'}")
    monkeypatch.setattr(persistence, "_backend_instance", None)

    backend = get_backend(config=JourneylogConfig())
    assert isinstance(backend, InMemoryJourneyBackend)


@pytest.mark.parametrize("url", ["sqlite:/no-slashes.db", "journeys.db", "redis://x"])
def test_backend_from_url_rejects_unknown_urls(url):
    with pytest.raises(ValueError, match="Unsupported database backend"):
        backend_from_url(url)
