"""Catalog item API endpoints.

Provides paginated browsing, lookup by id or name, and item maintenance.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_catalog_item_service, get_catalog_service
from app.api.schemas import READ_ERRORS, WRITE_ERRORS, ErrorResponse
from app.api.security import require_catalog, require_catalog_bff
from app.catalog.dtos import (
    CatalogItemDto,
    CreateItemRequest,
    IdResponse,
    PaginatedItemsDto,
    UpdateItemRequest,
)
from app.catalog.service import CatalogItemService, CatalogService

router = APIRouter(prefix="/catalog", tags=["Items"])


def _merge_filters(*filters: list[int] | None) -> list[int] | None:
    merged = [value for values in filters if values for value in values]
    return merged or None


# ============================================================================
# Read Endpoints
# ============================================================================


@router.get(
    "/items",
    response_model=PaginatedItemsDto[CatalogItemDto],
    dependencies=[require_catalog_bff],
    responses={400: {"model": ErrorResponse}, **READ_ERRORS},
    summary="List catalog items",
    description=(
        "Get a page of catalog items, optionally filtered by brand and type ids. "
        "Filters repeat per id as `brandFilter=1&brandFilter=2`; the "
        "`brandFilter[]=1` form is accepted too."
    ),
)
async def get_items(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    page_index: Annotated[int, Query(alias="pageIndex", ge=0)] = 0,
    page_size: Annotated[int, Query(alias="pageSize", ge=1)] = 10,
    brand_filter: Annotated[list[int] | None, Query(alias="brandFilter")] = None,
    type_filter: Annotated[list[int] | None, Query(alias="typeFilter")] = None,
    brand_filter_array: Annotated[
        list[int] | None, Query(alias="brandFilter[]", include_in_schema=False)
    ] = None,
    type_filter_array: Annotated[
        list[int] | None, Query(alias="typeFilter[]", include_in_schema=False)
    ] = None,
) -> PaginatedItemsDto[CatalogItemDto]:
    """Get a page of catalog items.

    Args:
        service: Catalog read service.
        page_index: Zero-based page index.
        page_size: Maximum number of items on the page.
        brand_filter: Brand ids to keep; all brands when omitted.
        type_filter: Type ids to keep; all types when omitted.
        brand_filter_array: Brand ids sent as ``brandFilter[]``.
        type_filter_array: Type ids sent as ``typeFilter[]``.

    Returns:
        The page with the total count of matching items.
    """
    result = await service.get_catalog_items(
        page_size=page_size,
        page_index=page_index,
        brand_filter=_merge_filters(brand_filter, brand_filter_array),
        type_filter=_merge_filters(type_filter, type_filter_array),
    )
    return result.unwrap()


@router.get(
    "/items/withname/{name}",
    response_model=list[CatalogItemDto],
    dependencies=[require_catalog_bff],
    responses={400: {"model": ErrorResponse}, **READ_ERRORS},
    summary="Search catalog items by name",
)
async def get_items_by_name(
    name: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[CatalogItemDto]:
    """Get items whose name contains ``name``, ignoring case."""
    result = await service.get_catalog_items_by_name(name)
    return result.unwrap()


@router.get(
    "/items/{item_id}",
    response_model=CatalogItemDto,
    dependencies=[require_catalog_bff],
    responses={404: {"model": ErrorResponse}, **READ_ERRORS},
    summary="Get catalog item",
)
async def get_item(
    item_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CatalogItemDto:
    """Get a catalog item by id.

    Raises:
        NotFoundError: If no item has this id.
    """
    result = await service.get_catalog_item(item_id)
    return result.unwrap()


@router.get(
    "/products",
    response_model=list[CatalogItemDto],
    dependencies=[require_catalog_bff],
    responses=READ_ERRORS,
    summary="List all products",
)
async def get_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[CatalogItemDto]:
    result = await service.get_products()
    return result.unwrap()


# ============================================================================
# Write Endpoints
# ============================================================================


@router.post(
    "/items",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[require_catalog],
    responses=WRITE_ERRORS,
    summary="Create catalog item",
)
async def create_item(
    request: CreateItemRequest,
    service: Annotated[CatalogItemService, Depends(get_catalog_item_service)],
) -> IdResponse:
    """Create a catalog item.

    Returns:
        Id of the new item.

    Raises:
        ValidationError: If a field is missing or out of range.
        ConflictError: If the brand or type does not exist.
    """
    result = await service.add(request)
    return IdResponse(id=result.unwrap())


@router.put(
    "/items",
    response_model=IdResponse,
    dependencies=[require_catalog],
    responses=WRITE_ERRORS,
    summary="Update catalog item",
)
async def update_item(
    request: UpdateItemRequest,
    service: Annotated[CatalogItemService, Depends(get_catalog_item_service)],
) -> IdResponse:
    """Replace every field of an existing item."""
    result = await service.update(request)
    return IdResponse(id=result.unwrap())


@router.delete(
    "/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[require_catalog],
    responses=WRITE_ERRORS,
    summary="Delete catalog item",
)
async def delete_item(
    item_id: int,
    service: Annotated[CatalogItemService, Depends(get_catalog_item_service)],
) -> Response:
    result = await service.delete(item_id)
    result.unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
