from __future__ import annotations

import logging

import pytest

from feedback_storage.core import config as core_config
from feedback_storage.core.logging import configure_logging
from feedback_storage.db import session as db_session


@pytest.fixture()
def fresh_settings():
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    yield
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()


def test_settings_read_environment(monkeypatch, fresh_settings):
    monkeypatch.setenv("APP_ENV", "PROD")
    monkeypatch.setenv("DATABASE_URL", "  sqlite:///x.db ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("SQL_ECHO", "yes")

    settings = core_config.get_settings()

    assert settings.app_env == "prod"
    assert settings.database_url == "sqlite:///x.db"
    assert settings.log_level == "DEBUG"
    assert settings.sql_echo is True


def test_engine_requires_database_url(monkeypatch, fresh_settings):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        db_session.get_engine()


def test_configure_logging_uses_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    configure_logging("warning")
    assert calls["level"] == logging.WARNING
