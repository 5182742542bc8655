"""Catalog data transfer objects.

Shapes exposed at the API boundary. JSON uses camelCase names; Python
code uses the snake_case attribute names.
"""

from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Prices travel as JSON numbers
JsonPrice = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base model serialising to camelCase and accepting either case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Read DTOs
# ============================================================================


class CatalogBrandDto(CamelModel):
    """Catalog brand."""

    id: int
    brand: str


class CatalogTypeDto(CamelModel):
    """Catalog type."""

    id: int
    type: str


class CatalogItemDto(CamelModel):
    """Catalog item with its resolved picture URL."""

    id: int
    name: str
    description: str | None = None
    price: JsonPrice
    picture_file_name: str | None = None
    picture_url: str | None = None
    catalog_type_id: int
    catalog_brand_id: int
    catalog_type: CatalogTypeDto | None = None
    catalog_brand: CatalogBrandDto | None = None
    available_stock: int = 0
    restock_threshold: int = 0
    max_stock_threshold: int = 0
    on_reorder: bool = False


class PaginatedItemsDto(CamelModel, Generic[T]):
    """Page of a larger result set."""

    page_index: int = Field(..., description="Zero-based page index")
    page_size: int = Field(..., description="Maximum items per page")
    count: int = Field(..., description="Total matching items before pagination")
    data: list[T] = Field(default_factory=list)


# ============================================================================
# Requests
# ============================================================================


class CreateBrandRequest(CamelModel):
    """Request to add a brand."""

    brand: str | None = None


class UpdateBrandRequest(CamelModel):
    """Request to rename a brand."""

    id: int | None = None
    brand: str | None = None


class CreateTypeRequest(CamelModel):
    """Request to add a type."""

    type: str | None = None


class UpdateTypeRequest(CamelModel):
    """Request to rename a type."""

    id: int | None = None
    type: str | None = None


class CreateItemRequest(CamelModel):
    """Request to add a catalog item."""

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    picture_file_name: str | None = None
    catalog_type_id: int | None = None
    catalog_brand_id: int | None = None
    available_stock: int = 0
    restock_threshold: int = 0
    max_stock_threshold: int = 0
    on_reorder: bool = False


class UpdateItemRequest(CreateItemRequest):
    """Request to replace a catalog item's fields."""

    id: int | None = None


class IdResponse(CamelModel):
    """Identifier of a created or modified entity."""

    id: int
