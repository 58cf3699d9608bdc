import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from surprise.application.api.v1.errors import map_surprise_error
from surprise.application.api.v1.routes import files, status, surprises
from surprise.application.di import create_container
from surprise.config import Config, configure_logging
from surprise.domain.shared.error import SurpriseError
from surprise.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    yield
    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info(
        "Starting %s server: v%s (records=%s, blobs=%s)",
        config.server.name,
        config.server.version,
        config.database.backend,
        config.storage.backend,
    )

    # Only ships spans when LOGFIRE_TOKEN is present
    logfire.configure(
        send_to_logfire="if-token-present",
        console=False,
        service_name="digital-surprise",
        service_version=config.server.version,
    )

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    container = create_container(config)
    setup_dishka(container, app_instance)

    app_instance.include_router(status.router, prefix="/api")
    app_instance.include_router(surprises.router, prefix="/api")
    # S3 objects are fetched straight from the bucket
    if config.storage.backend == "local":
        app_instance.include_router(files.router, prefix="/api")

    # Global error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(SurpriseError)
    async def surprise_error_handler(request: Request, exc: SurpriseError):
        http_exc = map_surprise_error(exc)
        if http_exc.status_code >= 500:
            logger.error(
                "%s on %s %s: %s",
                exc.code,
                request.method,
                request.url.path,
                exc.message,
            )
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
        )

    # Malformed requests are client errors, reported in the same shape
    @app_instance.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(
            status_code=400,
            content={"code": "VALIDATION_ERROR", "message": message},
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
            content={"message": "Internal server error"},
        )

    return app_instance


# Create app instance for uvicorn
app = create_app()
