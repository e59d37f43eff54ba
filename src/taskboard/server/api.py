"""FastAPI web server for the task board."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import Settings, load_settings
from ..constants import APP_NAME, MSG_INVALID_BODY
from ..logging_utils import configure_logging
from ..service import TaskService
from ..storage import TaskRepository, build_repository
from .models import ServiceInfo
from .task_api import create_task_router


def create_app(
    repository: Optional[TaskRepository] = None,
    settings: Optional[Settings] = None,
    enable_cors: Optional[bool] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        repository: Storage backend; built from *settings* when omitted.
        settings: Runtime settings (defaults apply when omitted).
        enable_cors: Override ``settings.enable_cors``.

    Returns:
        Configured FastAPI app.
    """
    settings = settings or Settings()
    if repository is None:
        repository = build_repository(settings)
    if enable_cors is None:
        enable_cors = settings.enable_cors

    app = FastAPI(
        title=APP_NAME,
        description="CRUD API behind the task board",
        version=__version__,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.service = TaskService(repository)
    logger.info("Task board API using '{}' storage", repository.name)

    def _get_service() -> TaskService:
        return app.state.service

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def _malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected malformed request to {}: {}", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": MSG_INVALID_BODY})

    @app.get("/", response_model=ServiceInfo)
    async def root() -> ServiceInfo:
        """Liveness endpoint."""
        return ServiceInfo(
            name=APP_NAME,
            version=__version__,
            status="running",
            storage=_get_service().backend,
        )

    app.include_router(create_task_router(_get_service))
    return app


def app_factory() -> FastAPI:
    """Build the app from environment/file settings (uvicorn ``factory=True`` target)."""
    settings = load_settings()
    configure_logging(settings.log_level)
    return create_app(settings=settings)
