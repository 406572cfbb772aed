"""
Bookmark API schemas (request/response models).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class BookmarkCreateRequest(BaseModel):
    # Fields stay untyped: presence, range and URL checks run in the service
    # so each failure keeps its own status body.
    model_config = ConfigDict(extra="ignore")

    title: Any = None
    url: Any = None
    description: Any = None
    rating: Any = None


class BookmarkResponse(BaseModel):
    id: int
    title: str
    url: str
    description: str
    rating: int
