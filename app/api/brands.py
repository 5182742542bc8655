"""Catalog brand API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_catalog_brand_service, get_catalog_service
from app.api.schemas import READ_ERRORS, WRITE_ERRORS, ErrorResponse
from app.api.security import require_catalog, require_catalog_bff
from app.catalog.dtos import CatalogBrandDto, CreateBrandRequest, IdResponse, UpdateBrandRequest
from app.catalog.service import CatalogBrandService, CatalogService

router = APIRouter(prefix="/catalog/catalogbrands", tags=["Brands"])


@router.get(
    "",
    response_model=list[CatalogBrandDto],
    dependencies=[require_catalog_bff],
    responses=READ_ERRORS,
    summary="List catalog brands",
)
async def get_brands(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[CatalogBrandDto]:
    result = await service.get_brands()
    return result.unwrap()


@router.get(
    "/{brand_id}",
    response_model=CatalogBrandDto,
    dependencies=[require_catalog_bff],
    responses={404: {"model": ErrorResponse}, **READ_ERRORS},
    summary="Get catalog brand",
)
async def get_brand(
    brand_id: int,
    service: Annotated[CatalogBrandService, Depends(get_catalog_brand_service)],
) -> CatalogBrandDto:
    result = await service.get(brand_id)
    return result.unwrap()


@router.post(
    "",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[require_catalog],
    responses=WRITE_ERRORS,
    summary="Create catalog brand",
)
async def create_brand(
    request: CreateBrandRequest,
    service: Annotated[CatalogBrandService, Depends(get_catalog_brand_service)],
) -> IdResponse:
    """Create a brand.

    Raises:
        ValidationError: If the name is blank or too long.
        ConflictError: If the name is already taken.
    """
    result = await service.add(request.brand)
    return IdResponse(id=result.unwrap())


@router.put(
    "",
    response_model=IdResponse,
    dependencies=[require_catalog],
    responses=WRITE_ERRORS,
    summary="Rename catalog brand",
)
async def update_brand(
    request: UpdateBrandRequest,
    service: Annotated[CatalogBrandService, Depends(get_catalog_brand_service)],
) -> IdResponse:
    result = await service.update(request.id, request.brand)
    return IdResponse(id=result.unwrap())


@router.delete(
    "/{brand_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[require_catalog],
    responses=WRITE_ERRORS,
    summary="Delete catalog brand",
)
async def delete_brand(
    brand_id: int,
    service: Annotated[CatalogBrandService, Depends(get_catalog_brand_service)],
) -> Response:
    """Delete a brand.

    Raises:
        NotFoundError: If the brand does not exist.
        ConflictError: If catalog items still use the brand.
    """
    result = await service.delete(brand_id)
    result.unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
