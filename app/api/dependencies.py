"""Composition root for request handlers.

Builds repositories and services explicitly from the per-request session.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.mapping import CatalogMapper, PictureUrlResolver
from app.catalog.repository import (
    CatalogBrandRepository,
    CatalogItemRepository,
    CatalogRepository,
    CatalogTypeRepository,
)
from app.catalog.service import (
    CatalogBrandService,
    CatalogItemService,
    CatalogService,
    CatalogTypeService,
)
from app.infrastructure.config import settings
from app.infrastructure.database import get_session

SessionDep = Annotated[AsyncSession, Depends(get_session)]


@lru_cache
def get_mapper() -> CatalogMapper:
    """Get the catalog mapper; it holds no per-request state."""
    return CatalogMapper(
        PictureUrlResolver(
            host=settings.catalog.picture_host,
            path=settings.catalog.picture_path,
        )
    )


def get_catalog_service(
    session: SessionDep,
    mapper: Annotated[CatalogMapper, Depends(get_mapper)],
) -> CatalogService:
    return CatalogService(CatalogRepository(session), mapper)


def get_catalog_brand_service(
    session: SessionDep,
    mapper: Annotated[CatalogMapper, Depends(get_mapper)],
) -> CatalogBrandService:
    return CatalogBrandService(CatalogBrandRepository(session), mapper)


def get_catalog_type_service(
    session: SessionDep,
    mapper: Annotated[CatalogMapper, Depends(get_mapper)],
) -> CatalogTypeService:
    return CatalogTypeService(CatalogTypeRepository(session), mapper)


def get_catalog_item_service(session: SessionDep) -> CatalogItemService:
    return CatalogItemService(CatalogItemRepository(session))
