"""
FastAPI router for bookmark endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from auth import dependencies as auth_dependencies

from . import schemas, service
from .repository import BookmarkStore


async def _read_create_payload(request: Request) -> dict:
    """
    Body as a create payload. Malformed JSON and non-object bodies read as
    empty so they fail the required-field check like any other missing field.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}
    return schemas.BookmarkCreateRequest.model_validate(body).model_dump()


def build_router(store: BookmarkStore) -> APIRouter:
    """
    Bookmark routes bound to `store`; every route uses this same instance.
    """
    router = APIRouter(dependencies=[Depends(auth_dependencies.require_api_token)])

    @router.get("/bookmarks", response_model=list[schemas.BookmarkResponse])
    async def list_bookmarks() -> list[dict]:
        return await service.list_bookmarks(store)

    @router.post(
        "/bookmarks",
        status_code=status.HTTP_201_CREATED,
        response_model=schemas.BookmarkResponse,
    )
    async def create_bookmark(request: Request, response: Response) -> dict:
        payload = await _read_create_payload(request)
        bookmark = await service.create_bookmark(store, payload)
        response.headers["Location"] = f"/bookmarks/{bookmark['id']}"
        return bookmark

    @router.get("/bookmarks/{bookmark_id}", response_model=schemas.BookmarkResponse)
    async def get_bookmark(bookmark_id: str) -> dict:
        return await service.get_bookmark(store, bookmark_id)

    @router.delete(
        "/bookmarks/{bookmark_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
    )
    async def delete_bookmark(bookmark_id: str) -> Response:
        await service.delete_bookmark(store, bookmark_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
