"""
Bookmark business logic.

Scope:
- create-payload validation (fixed order: presence, rating, url)
- serialization with output sanitization
- not-found handling around the store calls
"""

from __future__ import annotations

import json
import re
from typing import Any

from loguru import logger
from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from core.errors import NotFoundError, ValidationError

from .repository import BookmarkStore
from .sanitize import sanitize_html

REQUIRED_FIELDS = ("title", "url", "rating")
MIN_RATING = 0
MAX_RATING = 5
# Postgres SERIAL upper bound.
MAX_ID = 2**31 - 1

_web_url = TypeAdapter(AnyHttpUrl)
_WEB_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_URL_FORBIDDEN = re.compile(r"[\s\\]")


def _is_missing(value: Any) -> bool:
    # JSON falsiness: null, false, "", 0 and 0.0 all count as absent.
    if value is None or value is False:
        return True
    if isinstance(value, (str, int, float)):
        return not value
    return False


def _as_text(value: Any) -> str | None:
    # TEXT columns only take strings; mirror how JSON values read as text.
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _as_rating(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        rating = value
    elif isinstance(value, float) and value.is_integer():
        rating = int(value)
    else:
        return None
    if rating < MIN_RATING or rating > MAX_RATING:
        return None
    return rating


def is_web_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    if not _WEB_SCHEME.match(value) or _URL_FORBIDDEN.search(value):
        return False
    try:
        _web_url.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def parse_bookmark_id(raw: str | int) -> int:
    """
    Turn a path segment into a bookmark id; anything that cannot name a row is
    reported the same way as an unknown id.
    """
    raw = str(raw)
    if not (raw.isascii() and raw.isdigit()):
        raise NotFoundError()
    bookmark_id = int(raw)
    if bookmark_id < 1 or bookmark_id > MAX_ID:
        raise NotFoundError()
    return bookmark_id


def validate_new_bookmark(payload: dict[str, Any]) -> dict[str, Any]:
    for field in REQUIRED_FIELDS:
        if _is_missing(payload.get(field)):
            logger.error(f"{field} is required")
            raise ValidationError(f"'{field}' is required", field=field)

    rating = _as_rating(payload["rating"])
    if rating is None:
        logger.error(f"Invalid rating '{payload['rating']}' supplied")
        raise ValidationError(
            f"'rating' must be a number between {MIN_RATING} and {MAX_RATING}",
            field="rating",
            plain_text=True,
        )

    url = payload["url"]
    if not is_web_url(url):
        logger.error(f"Invalid url '{url}' supplied")
        raise ValidationError("'url' must be a valid URL", field="url", plain_text=True)

    return {
        "title": _as_text(payload["title"]),
        "url": url,
        "description": _as_text(payload.get("description")),
        "rating": rating,
    }


def serialize_bookmark(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "title": sanitize_html(row["title"]),
        "url": row["url"],
        "description": sanitize_html(row.get("description")),
        "rating": int(row["rating"]),
    }


async def list_bookmarks(store: BookmarkStore) -> list[dict[str, Any]]:
    rows = await store.list_all()
    return [serialize_bookmark(row) for row in rows]


async def _require_bookmark(store: BookmarkStore, bookmark_id: int) -> dict[str, Any]:
    row = await store.get_by_id(bookmark_id)
    if row is None:
        logger.error(f"Bookmark with id {bookmark_id} not found.")
        raise NotFoundError()
    return row


async def get_bookmark(store: BookmarkStore, raw_id: str | int) -> dict[str, Any]:
    row = await _require_bookmark(store, parse_bookmark_id(raw_id))
    return serialize_bookmark(row)


async def create_bookmark(store: BookmarkStore, payload: dict[str, Any]) -> dict[str, Any]:
    record = validate_new_bookmark(payload)
    row = await store.insert(record)
    logger.info(f"Bookmark with id {row['id']} created")
    return serialize_bookmark(row)


async def delete_bookmark(store: BookmarkStore, raw_id: str | int) -> None:
    bookmark_id = parse_bookmark_id(raw_id)
    await _require_bookmark(store, bookmark_id)
    await store.delete_by_id(bookmark_id)
    logger.info(f"Bookmark with id {bookmark_id} deleted.")
