"""
test_core.py — configuration helpers, database URL handling, logging setup

Called by: pytest
Depends on: core/config.py, core/db.py, core/logging_config.py
"""

import asyncio
import logging
import os
from unittest.mock import AsyncMock, patch

import pytest
from loguru import logger

from core import config, db
from core.logging_config import setup_logging


# ── config ───────────────────────────────────────────────────────────


def test_cors_origins_default():
    with patch.dict(os.environ, {"CORS_ORIGINS": ""}):
        assert config.cors_origins() == list(config.DEFAULT_CORS_ORIGINS)


def test_cors_origins_from_env():
    with patch.dict(os.environ, {"CORS_ORIGINS": "https://a.com, https://b.com,"}):
        assert config.cors_origins() == ["https://a.com", "https://b.com"]


@pytest.mark.parametrize("raw, expected", [("1", True), ("true", True), ("no", False), ("", False)])
def test_db_bootstrap_flag(raw, expected):
    with patch.dict(os.environ, {"DB_BOOTSTRAP": raw}):
        assert config.db_bootstrap() is expected


def test_app_env_defaults_to_development():
    with patch.dict(os.environ, {"APP_ENV": ""}):
        assert config.app_env() == "development"
        assert config.is_production() is False


# ── db ───────────────────────────────────────────────────────────────


def test_database_url_strips_sslmode():
    url = "postgresql://u:p@host:5432/bookmarks?sslmode=require&application_name=api"
    with patch.dict(os.environ, {"DATABASE_URL": url}):
        assert db.database_url() == "postgresql://u:p@host:5432/bookmarks?application_name=api"


def test_database_url_required():
    with patch.dict(os.environ, {"DATABASE_URL": ""}):
        with pytest.raises(RuntimeError):
            db.database_url()


def test_pool_must_be_initialized():
    with pytest.raises(RuntimeError):
        db.pool()


def test_ensure_schema_creates_bookmarks_table():
    with patch("core.db.execute", new=AsyncMock(return_value=None)) as execute:
        asyncio.run(db.ensure_schema())
    sql = execute.await_args.args[0]
    assert "CREATE TABLE IF NOT EXISTS bookmarks" in sql
    assert "rating >= 0 AND rating <= 5" in sql


# ── logging ──────────────────────────────────────────────────────────


@pytest.fixture
def _clean_loguru():
    logger.remove()
    yield
    logger.remove()


def test_setup_logging_adds_handler(_clean_loguru):
    setup_logging()
    assert len(logger._core.handlers) > 0


def test_stdlib_logging_is_intercepted(_clean_loguru):
    setup_logging()
    messages = []
    logger.add(lambda m: messages.append(str(m)), format="{message}")

    logging.getLogger("tests.intercept").warning("intercepted message")

    assert any("intercepted message" in m for m in messages)
