"""Global exception handlers.

Every error leaves the API as
``{"error_code", "message", "details", "request_id"}``.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.responses import IndentedJSONResponse
from app.domain.exceptions import DomainError
from app.infrastructure.connection import ConnectionStringError

logger = structlog.get_logger()


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> IndentedJSONResponse:
    """Build an error response carrying the request ID."""
    return IndentedJSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or [],
            "request_id": getattr(request.state, "request_id", None),
        },
        headers=headers,
    )


def _field_name(loc: tuple[Any, ...]) -> str:
    # Drop the "body"/"query"/"path" prefix
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "NOT_FOUND" if exc.status_code == status.HTTP_404_NOT_FOUND else "ERROR"
        message = str(detail)
        details = []

    return error_response(
        request,
        exc.status_code,
        error_code,
        message,
        details,
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report request binding failures as 400 with one entry per field."""
    details = [
        {"field": _field_name(tuple(error.get("loc", ()))), "message": error.get("msg", "")}
        for error in exc.errors()
    ]
    logger.info("Request validation failed", path=request.url.path, errors=len(details))
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "One or more validation errors occurred",
        details,
    )


async def domain_exception_handler(request: Request, exc: DomainError):
    """Map domain errors to their HTTP status."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Domain error", error=exc.message, error_code=exc.error_code)
    return error_response(request, exc.status_code, exc.error_code, exc.message, exc.details)


async def database_unavailable_handler(request: Request, exc: ConnectionStringError):
    """Report an unresolvable connection string as 503."""
    logger.error("Database is not configured", path=request.url.path, error=str(exc))
    return error_response(
        request,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "DATABASE_UNAVAILABLE",
        "The database is not available",
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the global exception handlers on the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DomainError, domain_exception_handler)
    app.add_exception_handler(ConnectionStringError, database_unavailable_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
