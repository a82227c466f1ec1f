import logging
from contextlib import asynccontextmanager
from pathlib import Path

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from cutout.application.api.errors import map_error
from cutout.application.api.middleware import setup_request_context
from cutout.application.api.routes import health, media
from cutout.application.di import create_container
from cutout.config import Config, configure_logging
from cutout.domain.shared.error import CutoutError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: AsyncContainer = app.state.dishka_container
    yield
    # Closes the HTTP clients opened by the providers
    await container.close()


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    ``config`` and ``container`` default to the environment-driven Config and
    the production container; tests pass their own.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info(
        "Starting %s v%s (storage=%s)",
        config.server.name,
        config.server.version,
        config.storage.backend,
    )
    if not config.removal.api_key:
        logger.warning("CUTOUT_REMOVAL__API_KEY is not set; uploads will fail upstream")

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    if config.telemetry.instrument:
        logfire.configure(
            service_name=config.server.name,
            service_version=config.server.version,
            send_to_logfire="if-token-present",
            console=False,
        )
        # Automatic tracing of HTTP requests, inbound and outbound
        logfire.instrument_httpx()
        logfire.instrument_fastapi(app_instance)

    setup_request_context(container or create_container(config), app_instance)

    app_instance.include_router(health.router, prefix="/api")
    app_instance.include_router(media.router, prefix="/api")

    if config.storage.backend == "local":
        blob_dir = Path(config.storage.local.path)
        blob_dir.mkdir(parents=True, exist_ok=True)
        app_instance.mount("/blobs", StaticFiles(directory=blob_dir), name="blobs")

    # Maps domain and infrastructure errors to JSON responses
    @app_instance.exception_handler(CutoutError)
    async def cutout_error_handler(request: Request, exc: CutoutError):
        status_code, body = map_error(exc)
        if status_code >= 500:
            logger.error(
                "%s on %s %s: %s",
                exc.code,
                request.method,
                request.url.path,
                exc.details,
            )
        return JSONResponse(status_code=status_code, content=body)

    # Framework errors (unknown path and the like) keep the same body shape
    @app_instance.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Server error", "details": str(exc) or type(exc).__name__},
        )

    return app_instance
