"""API layer module.

Contains FastAPI routers, security and request/response schemas.
"""

from app.api.brands import router as brands_router
from app.api.health import router as health_router
from app.api.items import router as items_router
from app.api.types import router as types_router

__all__ = [
    "brands_router",
    "health_router",
    "items_router",
    "types_router",
]
