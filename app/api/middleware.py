"""API middleware for the catalog service.

Provides:
- Request ID correlation
- HTTP request logging
- HSTS and HTTPS redirection
- Error handling
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.responses import IndentedJSONResponse
from app.infrastructure.config import Settings

logger = structlog.get_logger()

HSTS_MAX_AGE = 60 * 24 * 60 * 60


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID for correlation.

    Generates or extracts a request ID and adds it to:
    - Request state for access in handlers
    - Response headers for client correlation
    - Log context for tracing
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request with correlation ID.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with request ID header.
        """
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=getattr(response, "status_code", 500),
                duration_ms=round(duration_ms, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id
        return response


# ============================================================================
# HTTP Logging Middleware
# ============================================================================


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request line with the caller's remote address.

    Enabled with ``HTTP_LOGGING=true``. Behind a proxy the address comes
    from the forwarded headers uvicorn trusts.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        client = request.client
        logger.info(
            "HTTP request",
            method=request.method,
            path=request.url.path,
            query=request.url.query or None,
            scheme=request.url.scheme,
            remote_addr=client.host if client else None,
            user_agent=request.headers.get("user-agent"),
        )
        response = await call_next(request)
        logger.info(
            "HTTP response",
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
        )
        return response


# ============================================================================
# HTTPS Middleware
# ============================================================================


class HttpsRedirectMiddleware(BaseHTTPMiddleware):
    """Redirects plain HTTP to ``https_port`` and sends HSTS on HTTPS."""

    def __init__(self, app, https_port: int, max_age: int = HSTS_MAX_AGE) -> None:
        super().__init__(app)
        self.https_port = https_port
        self.max_age = max_age

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        if request.url.scheme == "http":
            port = None if self.https_port == 443 else self.https_port
            target = request.url.replace(scheme="https", port=port)
            return RedirectResponse(
                url=str(target),
                status_code=status.HTTP_307_TEMPORARY_REDIRECT,
            )

        response = await call_next(request)
        response.headers["Strict-Transport-Security"] = (
            f"max-age={self.max_age}; includeSubDomains; preload"
        )
        return response


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for consistent error handling.

    Catches unhandled exceptions and returns standardized error responses.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Handle errors uniformly.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or error response.
        """
        try:
            return await call_next(request)
        except Exception as e:
            request_id = getattr(request.state, "request_id", None)

            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )

            return IndentedJSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error_code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "details": [],
                    "request_id": request_id,
                },
            )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed).

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.http_logging:
        app.add_middleware(HttpLoggingMiddleware)

    if settings.https_port and not settings.is_development:
        app.add_middleware(HttpsRedirectMiddleware, https_port=settings.https_port)

    # Outermost so every log line and error body carries the request ID
    app.add_middleware(RequestIdMiddleware)
