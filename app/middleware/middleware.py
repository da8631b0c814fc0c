# app/middleware/middleware.py
"""
Middleware components for the Viblog backend.

This module contains middleware for security headers, request logging
and CORS handling, and the lifespan event handler that starts and stops
the database, the rate limiter cleanup loops and the in-memory cache.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import settings
from app.db import close_db, init_db
from app.managers.rate_limiter import api_limiter, comment_limiter
from app.managers.view_tracker import memory_client
from app.monitoring import bind_request_id, clear_context, configure_logging, get_logger
from app.utils.helpers import get_summary, host

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events with service initialization."""
    configure_logging()
    logger.info(f"Starting {app.title} ({settings.SERVER_ENV})...")

    try:
        await init_db()
        await api_limiter.start_lifecycle()
        await comment_limiter.start_lifecycle()
        await memory_client.start_lifecycle()

        logger.info("Services initialized successfully")
        logger.info(f"  - Backend API: http://{settings.SERVER_HOST}:{settings.SERVER_PORT}/api/v1")
        logger.info(f"  - API Documentation: http://{settings.SERVER_HOST}:{settings.SERVER_PORT}/docs")
        logger.info(f"  - Health Check: http://{settings.SERVER_HOST}:{settings.SERVER_PORT}/health")

    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")

    try:
        await api_limiter.close()
        await comment_limiter.close()
        await memory_client.close()
        await close_db()
        logger.info("Services cleaned up successfully")

    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware from settings."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOWED_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOWED_METHODS,
        allow_headers=settings.CORS_ALLOWED_HEADERS,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=86400,
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Bind a request id, log request summary and timing information."""

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        clear_context()
        bind_request_id(request_id)

        start_time = perf_counter()
        summary = get_summary(request)

        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        try:
            response = await call_next(request)
            duration = perf_counter() - start_time

            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} "
                f"in {duration * 1000:.1f}ms",
            )
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response
