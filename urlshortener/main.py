"""Main application module.

This module builds the FastAPI application, includes routes,
and configures middleware and exception handlers.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from opentelemetry.metrics import MeterProvider

from urlshortener.api import create_api_router
from urlshortener.core.config import Settings, settings as default_settings
from urlshortener.core.logging import setup_logging
from urlshortener.core.metrics import ShortenerMetrics
from urlshortener.core.telemetry import setup_telemetry
from urlshortener.db.base import get_engine, init_db
from urlshortener.middleware import LoggingMiddleware, MetricsMiddleware
from urlshortener.repositories.url_repository import SQLURLRepository
from urlshortener.services.shortener import ShortenerService


def create_app(
    settings: Optional[Settings] = None,
    meter_provider: Optional[MeterProvider] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Configuration, the environment-loaded settings by default
        meter_provider: Provider the metrics are recorded on; the process-wide
            Prometheus-backed provider by default

    Returns:
        FastAPI: The configured application. Storage is opened in the
        lifespan handler, so it is only usable once started.
    """
    settings = settings or default_settings
    setup_logging(settings)

    if meter_provider is None:
        meter_provider = setup_telemetry(
            settings.OTEL_SERVICE_NAME,
            settings.APP_VERSION,
            settings.ENVIRONMENT.value,
            settings.METRICS_ENABLED,
            settings.OTEL_EXPORTER_OTLP_METRICS_ENDPOINT,
            settings.OTEL_METRICS_EXPORT_INTERVAL_MILLIS,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Environment: {settings.ENVIRONMENT.value}")
        logger.info(f"Debug mode: {settings.DEBUG}")

        engine = get_engine(settings)
        await init_db(engine)

        metrics = ShortenerMetrics.from_provider(meter_provider, settings.APP_VERSION)
        store = SQLURLRepository(engine, metrics=metrics)

        app.state.engine = engine
        app.state.metrics = metrics
        app.state.url_store = store
        app.state.shortener_service = ShortenerService(
            store,
            metrics,
            base_url=settings.BASE_URL,
            code_length=settings.URL_CODE_LENGTH,
            max_attempts=settings.URL_CODE_MAX_ATTEMPTS,
            alphabet=settings.URL_CODE_CHARS,
            max_code_length=settings.URL_CODE_MAX_LENGTH,
            blocked_hosts=settings.URL_BLOCKED_HOSTS,
        )
        logger.bind(**settings.public_settings()).info("URL shortener ready")

        try:
            yield
        finally:
            logger.info(f"Shutting down {settings.APP_NAME}")
            await store.close()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(MetricsMiddleware)
    if settings.REQUEST_LOGGING_ENABLED:
        app.add_middleware(LoggingMiddleware)

    app.include_router(create_api_router(settings.API_PREFIX, settings.METRICS_ENABLED))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors with detailed information."""
        logger.warning(f"Request validation error: {exc}")
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation error", "errors": jsonable_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Log any unhandled exception and return a 500 response."""
        error_id = f"error-{time.time()}"

        logger.opt(exception=exc).bind(
            error_id=error_id,
            url=str(request.url),
            method=request.method,
            path_params=request.path_params,
            client_host=request.client.host if request.client else None,
        ).error(f"Unhandled exception in {request.method} {request.url.path}")

        metrics = getattr(request.app.state, "metrics", None)
        if metrics is not None:
            metrics.record_internal_error("unhandled")

        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error occurred",
                "error_id": error_id,
                "message": str(exc) if settings.DEBUG else "Internal server error",
            },
        )

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the raw exception objects pydantic may attach under ``ctx``."""
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        errors.append(error)
    return errors


app = create_app()
