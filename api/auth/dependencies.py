"""
Bearer-token gate for the bookmark routes.

Callers send `Authorization: Bearer <API_TOKEN>`; anything else is rejected
with 401 before the route body runs.
"""

from __future__ import annotations

import secrets

from fastapi import Header, Request
from loguru import logger

from core import config
from core.errors import UnauthorizedError


def _extract_bearer_token(authorization: str | None) -> str | None:
    raw = (authorization or "").strip()
    parts = raw.split(" ", 1)
    if len(parts) != 2:
        return None

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        return None
    return token


async def require_api_token(
    request: Request,
    authorization: str | None = Header(default=None),
) -> None:
    expected = config.api_token()
    token = _extract_bearer_token(authorization)
    if not expected or token is None or not secrets.compare_digest(token.encode(), expected.encode()):
        logger.error(f"Unauthorized request to path: {request.url.path}")
        raise UnauthorizedError()
