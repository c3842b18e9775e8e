"""
FastAPI application entry point for the Onion Movies API.

This module provides the FastAPI application with:
- Movie catalog endpoints (router → service → repository → SQLite)
- Exception translation middleware and request validation handler
- Request logging with correlation IDs
- Health, readiness and Prometheus metrics endpoints
- Optional OpenTelemetry tracing
- Database engine lifecycle management
"""

import structlog
import uvicorn
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Any, Optional

from fastapi import FastAPI, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST

from api.src.config import get_settings, Settings
from api.src.dependencies import check_database, close_database, init_database
from api.src.middleware import (
    ExceptionMiddleware,
    RequestLoggingMiddleware,
    request_validation_exception_handler,
)
from api.src.routers import movies
from shared.logging import configure_logging
from shared.metrics import get_metrics_handler
from shared.tracing import configure_tracing

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to cached settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.log_format == "json",
        service_name=settings.app_name,
        environment=settings.environment,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager for startup and shutdown events.

        Handles database engine creation, schema setup and disposal.
        """
        logger.info(
            "application_starting",
            app_name=settings.app_name,
            version=settings.app_version,
            environment=settings.environment
        )

        try:
            init_database(settings)
            logger.info("application_started", app_name=settings.app_name)

            yield

        except Exception as e:
            logger.error("application_startup_failed", error=str(e), exc_info=True)
            raise

        finally:
            logger.info("application_shutting_down")
            await close_database()
            logger.info("application_shutdown_complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "Movie catalog CRUD API layered as controller → service → "
            "repository → database, comparing exception-based and "
            "result-based validation error handling."
        ),
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=settings.debug,
    )

    if settings is not get_settings():
        app.dependency_overrides[get_settings] = lambda: settings

    # ========================================================================
    # Middleware Configuration (last added runs first)
    # ========================================================================

    app.add_middleware(ExceptionMiddleware)
    app.add_middleware(RequestLoggingMiddleware, metrics_enabled=settings.metrics_enabled)

    if settings.cors_enabled:
        logger.info("configuring_cors", origins=settings.cors_origins)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if settings.tracing_enabled:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        configure_tracing(settings.app_name, settings.app_version)
        FastAPIInstrumentor.instrument_app(app)

    # ========================================================================
    # Exception Handlers
    # ========================================================================

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

    # ========================================================================
    # Health and Readiness Endpoints
    # ========================================================================

    @app.get("/health", tags=["Health"], response_class=JSONResponse)
    async def health_check() -> Dict[str, Any]:
        """
        Health check endpoint.

        Returns basic health status without checking dependencies.
        """
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment
        }

    @app.get("/ready", tags=["Health"], response_class=JSONResponse)
    def readiness_check() -> JSONResponse:
        """
        Readiness check endpoint.

        Verifies the database answers a trivial query.
        """
        checks = {
            "database": "healthy" if check_database() else "unhealthy",
        }

        all_healthy = all(value == "healthy" for value in checks.values())

        return JSONResponse(
            status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "ready" if all_healthy else "not_ready",
                "service": settings.app_name,
                "version": settings.app_version,
                "checks": checks
            }
        )

    # ========================================================================
    # Metrics Endpoint
    # ========================================================================

    if settings.metrics_enabled:
        metrics_handler = get_metrics_handler()

        @app.get(settings.metrics_endpoint, tags=["Monitoring"], response_class=PlainTextResponse)
        async def metrics() -> Response:
            """Expose application metrics in Prometheus format."""
            return Response(content=metrics_handler(), media_type=CONTENT_TYPE_LATEST)

    # ========================================================================
    # API Router Registration
    # ========================================================================

    app.include_router(movies.router, prefix=settings.api_prefix)

    return app


app = create_app()


# ============================================================================
# Application Entry Point
# ============================================================================

if __name__ == "__main__":
    settings = get_settings()

    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

    uvicorn.run(
        "api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
