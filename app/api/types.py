"""Catalog type API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_catalog_service, get_catalog_type_service
from app.api.schemas import READ_ERRORS, WRITE_ERRORS, ErrorResponse
from app.api.security import require_catalog, require_catalog_bff
from app.catalog.dtos import CatalogTypeDto, CreateTypeRequest, IdResponse, UpdateTypeRequest
from app.catalog.service import CatalogService, CatalogTypeService

router = APIRouter(prefix="/catalog/catalogtypes", tags=["Types"])


@router.get(
    "",
    response_model=list[CatalogTypeDto],
    dependencies=[require_catalog_bff],
    responses=READ_ERRORS,
    summary="List catalog types",
)
async def get_types(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[CatalogTypeDto]:
    result = await service.get_types()
    return result.unwrap()


@router.get(
    "/{type_id}",
    response_model=CatalogTypeDto,
    dependencies=[require_catalog_bff],
    responses={404: {"model": ErrorResponse}, **READ_ERRORS},
    summary="Get catalog type",
)
async def get_type(
    type_id: int,
    service: Annotated[CatalogTypeService, Depends(get_catalog_type_service)],
) -> CatalogTypeDto:
    result = await service.get(type_id)
    return result.unwrap()


@router.post(
    "",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[require_catalog],
    responses=WRITE_ERRORS,
    summary="Create catalog type",
)
async def create_type(
    request: CreateTypeRequest,
    service: Annotated[CatalogTypeService, Depends(get_catalog_type_service)],
) -> IdResponse:
    result = await service.add(request.type)
    return IdResponse(id=result.unwrap())


@router.put(
    "",
    response_model=IdResponse,
    dependencies=[require_catalog],
    responses=WRITE_ERRORS,
    summary="Rename catalog type",
)
async def update_type(
    request: UpdateTypeRequest,
    service: Annotated[CatalogTypeService, Depends(get_catalog_type_service)],
) -> IdResponse:
    result = await service.update(request.id, request.type)
    return IdResponse(id=result.unwrap())


@router.delete(
    "/{type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[require_catalog],
    responses=WRITE_ERRORS,
    summary="Delete catalog type",
)
async def delete_type(
    type_id: int,
    service: Annotated[CatalogTypeService, Depends(get_catalog_type_service)],
) -> Response:
    """Delete a type; rejected while catalog items still use it."""
    result = await service.delete(type_id)
    result.unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
