"""FastAPI application for the Kaltura service broker."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from kaltura_broker.broker import broker_router
from kaltura_broker.config import get_settings
from kaltura_broker.errors import BrokerError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup: Initialize database
    try:
        from kaltura_broker.db import init_database

        logger.info("Initializing database")
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database: %s", e)
        raise

    yield

    # Shutdown: Close database connection
    try:
        from kaltura_broker.db import close_database

        logger.info("Closing database connection")
        await close_database()
    except Exception as e:
        logger.error("Failed to close database: %s", e)


async def broker_error_handler(request: Request, exc: BrokerError) -> JSONResponse:
    """Translate broker errors into broker API error responses."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)

    content = {"description": exc.message}
    if exc.error_code:
        content["error"] = exc.error_code
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and parameters as broker validation errors."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning("%s %s rejected: %s", request.method, request.url.path, problems)
    return JSONResponse(
        status_code=400,
        content={"description": f"Invalid request: {problems}", "error": "ValidationError"},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors (authentication, API version, routing) as broker errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"description": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report unexpected failures as a generic broker error."""
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"description": "Internal server error"})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Kaltura Service Broker",
        description="Open Service Broker API for Kaltura VPaaS",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # Health check endpoint
    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy", "service": "kaltura-broker"}

    # Ready check endpoint
    @app.get("/ready")
    async def ready_check() -> dict:
        """Readiness check endpoint."""
        return {"status": "ready", "service": "kaltura-broker"}

    # Include the broker router
    # Provides (basic auth protected):
    # - GET /v2/catalog
    # - PUT/PATCH/DELETE /v2/service_instances/{instance_id}
    # - GET /v2/service_instances/{instance_id}/last_operation
    # - PUT/DELETE /v2/service_instances/{instance_id}/service_bindings/{binding_id}
    app.include_router(broker_router)

    app.add_exception_handler(BrokerError, broker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    return app
