"""FastAPI application factory.

Routes live under taskmind/api/routes/:
- tasks: task CRUD, AI enhancement and prioritization
- context: context entries and AI context processing
- categories: category listing and creation
- misc: AI suggestions, storage status, stats
"""
from __future__ import annotations

import contextlib
import logging
import sqlite3
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskmind import __version__
from taskmind.ai_service import AIService
from taskmind.api.routes import (
    categories_router,
    context_router,
    misc_router,
    tasks_router,
)
from taskmind.config import Settings, load_settings
from taskmind.domain.common.errors import DomainError, NotFoundError, ValidationError
from taskmind.domain.storage_manager import StorageManager
from taskmind.infra.db.connection import Database
from taskmind.infra.db.repo.storage_sqlite import SqliteStorage
from taskmind.infra.memory.storage_memory import MemoryStorage
from taskmind.setup_db import prepare_database

logger = logging.getLogger(__name__)


def build_storage_manager(settings: Settings) -> StorageManager:
    db = Database(str(settings.database_path))
    return StorageManager(
        persistent_factory=lambda: SqliteStorage(db),
        fallback_factory=MemoryStorage,
        probe_timeout=settings.probe_timeout,
    )


def create_app(
    settings: Optional[Settings] = None,
    *,
    storage_manager: Optional[StorageManager] = None,
    ai_service: Optional[AIService] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Runtime settings. Loaded from the environment when None.
        storage_manager: Use this manager instead of building one from settings.
            The database is then left as it is (no schema creation on startup).
        ai_service: Use this AI service instead of building an OpenAI-backed one.
    """
    if settings is None:
        settings = load_settings()
    prepare_schema = storage_manager is None and settings.auto_init_schema
    if storage_manager is None:
        storage_manager = build_storage_manager(settings)
    if ai_service is None:
        ai_service = AIService(api_key=settings.openai_api_key, model=settings.openai_model)
    if not ai_service.available:
        logger.warning("OPENAI_API_KEY not set, AI endpoints will report errors")

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if prepare_schema:
            try:
                await prepare_database(settings.database_path)
            except (OSError, sqlite3.Error) as e:
                logger.warning("Could not prepare database at %s: %s", settings.database_path, e)
        await storage_manager.get_storage()
        info = storage_manager.get_storage_info()
        logger.info("Storage ready: %s", info.kind)
        yield

    app = FastAPI(
        title="TaskMind",
        description="AI-assisted task management",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage_manager = storage_manager
    app.state.ai_service = ai_service

    app.include_router(tasks_router)
    app.include_router(context_router)
    app.include_router(categories_router)
    app.include_router(misc_router)

    _register_error_handlers(app)
    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(ValidationError)
    async def invalid(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(DomainError)
    async def domain_error(request: Request, exc: DomainError) -> JSONResponse:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
