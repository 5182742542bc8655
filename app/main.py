"""Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.brands import router as brands_router
from app.api.errors import register_exception_handlers
from app.api.health import router as health_router
from app.api.items import router as items_router
from app.api.middleware import setup_middleware
from app.api.responses import IndentedJSONResponse
from app.api.types import router as types_router
from app.catalog.seed import initialize_database
from app.infrastructure.config import settings
from app.infrastructure.connection import ConnectionStringError, describe_connection
from app.infrastructure.database import dispose_engine, get_engine, get_session_factory
from app.infrastructure.hosting import resolve_listen_target
from app.infrastructure.logging_config import configure_logging

configure_logging(settings.log_level, json_logs=not settings.is_development)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Database problems are logged and never stop the application; ``/ready``
    reports them. The Nginx init file is written by the server once it
    listens, see ``app.server``.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    logger.info(
        "Starting Catalog API",
        version=settings.api_version,
        environment=settings.environment,
        path_base=settings.path_base or "/",
        listen=resolve_listen_target(settings).uvicorn_options(),
    )

    try:
        engine = get_engine()
    except ConnectionStringError as e:
        logger.error("Database connection string could not be resolved", error=str(e))
    else:
        logger.info(
            "Database configured",
            database=describe_connection(
                settings.database, include_error_detail=not settings.is_production
            ),
        )
        await initialize_database(engine, get_session_factory())

    yield

    # Shutdown
    logger.info("Shutting down Catalog API")
    await dispose_engine()


app = FastAPI(
    title="Catalog HTTP API",
    description="The Catalog Microservice HTTP API.",
    version=settings.api_version,
    lifespan=lifespan,
    root_path=settings.path_base,
    docs_url="/swagger",
    redoc_url=None,
    default_response_class=IndentedJSONResponse,
    swagger_ui_init_oauth={
        "clientId": settings.authorization.swagger_client_id,
        "appName": "Catalog Swagger UI",
    },
)

# Setup custom middleware (request ID, HTTP logging, HTTPS, error handling)
setup_middleware(app, settings)

# CORS middleware (outermost so preflight requests are answered first)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(items_router)
app.include_router(brands_router)
app.include_router(types_router)

register_exception_handlers(app)
