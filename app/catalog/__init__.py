"""Product Catalog.

Entities, repositories, mapping, validation and services for catalog
items, brands and types.
"""

from app.catalog.dtos import CatalogBrandDto, CatalogItemDto, CatalogTypeDto, PaginatedItemsDto
from app.catalog.mapping import CatalogMapper, PictureUrlResolver
from app.catalog.models import CatalogBrand, CatalogItem, CatalogType
from app.catalog.repository import (
    CatalogBrandRepository,
    CatalogItemRepository,
    CatalogRepository,
    CatalogTypeRepository,
    PaginatedItems,
)
from app.catalog.service import (
    CatalogBrandService,
    CatalogItemService,
    CatalogService,
    CatalogTypeService,
    ServiceResult,
)

__all__ = [
    # Models
    "CatalogBrand",
    "CatalogItem",
    "CatalogType",
    # DTOs
    "CatalogBrandDto",
    "CatalogItemDto",
    "CatalogTypeDto",
    "PaginatedItemsDto",
    # Mapping
    "CatalogMapper",
    "PictureUrlResolver",
    # Repositories
    "CatalogBrandRepository",
    "CatalogItemRepository",
    "CatalogRepository",
    "CatalogTypeRepository",
    "PaginatedItems",
    # Services
    "CatalogBrandService",
    "CatalogItemService",
    "CatalogService",
    "CatalogTypeService",
    "ServiceResult",
]
