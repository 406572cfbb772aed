"""
Environment-driven settings.

Values are read on every call so tests can patch `os.environ` freely.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def api_token() -> str:
    return os.environ.get("API_TOKEN", "").strip()


def app_env() -> str:
    return os.environ.get("APP_ENV", "development").strip().lower() or "development"


def is_production() -> bool:
    return app_env() == "production"


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def db_bootstrap() -> bool:
    return _env_bool("DB_BOOTSTRAP")


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
