"""
conftest.py — shared fixtures for the bookmarks API tests

Provides an in-memory BookmarkStore, a TestClient wired to it through
create_app(store=...), and auth headers for the static API token.
No database is touched.
"""

import os

os.environ["API_TOKEN"] = "test-api-token"
os.environ["APP_ENV"] = "test"

from typing import Any

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from main import create_app

API_TOKEN = "test-api-token"


class InMemoryBookmarkStore:
    """Keeps rows in insertion order and assigns ids like a SERIAL column."""

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    def seed(self, rows: list[dict[str, Any]]) -> None:
        for row in rows:
            self.rows[row["id"]] = dict(row)
            self._next_id = max(self._next_id, row["id"] + 1)

    async def list_all(self) -> list[dict[str, Any]]:
        return [dict(row) for row in self.rows.values()]

    async def get_by_id(self, bookmark_id: int) -> dict[str, Any] | None:
        row = self.rows.get(bookmark_id)
        return dict(row) if row is not None else None

    async def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        row = {"id": self._next_id, **record}
        self.rows[row["id"]] = row
        self._next_id += 1
        return dict(row)

    async def delete_by_id(self, bookmark_id: int) -> None:
        self.rows.pop(bookmark_id, None)


def make_bookmarks_array() -> list[dict[str, Any]]:
    return [
        {
            "id": 1,
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        },
        {
            "id": 2,
            "title": "Google",
            "url": "https://www.google.com",
            "description": "Where we find everything else",
            "rating": 4,
        },
        {
            "id": 3,
            "title": "MDN",
            "url": "https://developer.mozilla.org",
            "description": "The only place to find web documentation",
            "rating": 5,
        },
    ]


def make_malicious_bookmark() -> tuple[dict[str, Any], dict[str, Any]]:
    malicious = {
        "id": 911,
        "title": 'Naughty naughty very naughty <script>alert("xss");</script>',
        "url": "https://www.hackers.com",
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist" '
            'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
        ),
        "rating": 1,
    }
    expected = {
        **malicious,
        "title": 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist">. '
            "But not <strong>all</strong> bad."
        ),
    }
    return malicious, expected


@pytest.fixture
def store():
    return InMemoryBookmarkStore()


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {API_TOKEN}"}


@pytest.fixture
def log_messages(app):
    """Capture loguru output emitted during a test (after create_app set up sinks)."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(str(m)), format="{level} {message}")
    yield messages
    logger.remove(handler_id)
