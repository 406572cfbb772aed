from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from bookmarks.repository import BookmarkRepository, BookmarkStore
from bookmarks.router import build_router
from core import config, db
from core.errors import register_exception_handlers
from core.logging_config import setup_logging


def create_app(store: BookmarkStore | None = None) -> FastAPI:
    """
    Build the API around `store`.

    Without an explicit store the Postgres repository is used and the DB pool
    is opened/closed with the application lifespan.
    """
    setup_logging()
    uses_database = store is None
    if store is None:
        store = BookmarkRepository()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if uses_database:
            await db.init_pool()
            if config.db_bootstrap():
                await db.ensure_schema()
        logger.info("Bookmarks API started")
        try:
            yield
        finally:
            if uses_database:
                await db.close_pool()

    app = FastAPI(title="bookmarks-api", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(build_router(store), tags=["bookmarks"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app
