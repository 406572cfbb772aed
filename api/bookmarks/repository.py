"""
Bookmark persistence (raw SQL over the shared asyncpg pool).
"""

from __future__ import annotations

from typing import Any, Protocol

from core import db


class BookmarkStore(Protocol):
    async def list_all(self) -> list[dict[str, Any]]: ...

    async def get_by_id(self, bookmark_id: int) -> dict[str, Any] | None: ...

    async def insert(self, record: dict[str, Any]) -> dict[str, Any]: ...

    async def delete_by_id(self, bookmark_id: int) -> None: ...


class BookmarkRepository:
    """
    `BookmarkStore` backed by the `bookmarks` table.

    Errors from asyncpg are not caught here; they surface as 500s.
    """

    async def list_all(self) -> list[dict[str, Any]]:
        return await db.fetch_all(
            """
            SELECT id, title, url, description, rating
            FROM bookmarks
            ORDER BY id
            """
        )

    async def get_by_id(self, bookmark_id: int) -> dict[str, Any] | None:
        return await db.fetch_one(
            """
            SELECT id, title, url, description, rating
            FROM bookmarks
            WHERE id = $1
            """,
            bookmark_id,
        )

    async def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        row = await db.fetch_one(
            """
            INSERT INTO bookmarks (title, url, description, rating)
            VALUES ($1, $2, $3, $4)
            RETURNING id, title, url, description, rating
            """,
            record["title"],
            record["url"],
            record.get("description"),
            record["rating"],
        )
        if row is None:
            raise RuntimeError("Failed to insert bookmark.")
        return row

    async def delete_by_id(self, bookmark_id: int) -> None:
        await db.execute(
            """
            DELETE FROM bookmarks
            WHERE id = $1
            """,
            bookmark_id,
        )
