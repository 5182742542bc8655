"""Catalog application services.

Services validate requests, call repositories and map entities to DTOs.
Outcomes are returned as ``ServiceResult`` values; ``unwrap`` turns a
failed result into the matching domain exception for the HTTP layer.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

import structlog

from app.catalog.dtos import (
    CatalogBrandDto,
    CatalogItemDto,
    CatalogTypeDto,
    CreateItemRequest,
    PaginatedItemsDto,
    UpdateItemRequest,
)
from app.catalog.mapping import CatalogMapper
from app.catalog.repository import (
    CatalogBrandRepository,
    CatalogItemRepository,
    CatalogRepository,
    CatalogTypeRepository,
    NamedEntityRepository,
)
from app.catalog.validation import ValidationResult, validate_id, validate_item, validate_name
from app.domain.exceptions import ConflictError, DomainError, NotFoundError, ValidationError

logger = structlog.get_logger()

T = TypeVar("T")


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class ServiceResult(Generic[T]):
    """Result of a service operation."""

    value: T | None = None
    success: bool = True
    error: str | None = None
    error_code: str | None = None
    details: list[dict[str, str]] = field(default_factory=list)
    entity_type: str | None = None
    entity_id: int | None = None

    @classmethod
    def ok(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def invalid(cls, validation: ValidationResult) -> "ServiceResult[T]":
        return cls(
            success=False,
            error="One or more validation errors occurred",
            error_code=ValidationError.error_code,
            details=[error.to_dict() for error in validation.errors],
        )

    @classmethod
    def not_found(cls, entity_type: str, entity_id: int) -> "ServiceResult[T]":
        return cls(
            success=False,
            error=f"{entity_type} {entity_id} not found",
            error_code=NotFoundError.error_code,
            entity_type=entity_type,
            entity_id=entity_id,
        )

    @classmethod
    def conflict(cls, error: ConflictError) -> "ServiceResult[T]":
        return cls(success=False, error=error.message, error_code=ConflictError.error_code)

    def unwrap(self) -> T:
        """Return the value or raise the domain error for the failure.

        Raises:
            ValidationError, NotFoundError, ConflictError: Matching the
                result's error code.
        """
        if self.success:
            return self.value  # type: ignore[return-value]

        if self.error_code == NotFoundError.error_code:
            raise NotFoundError(self.entity_type or "Entity", self.entity_id)
        if self.error_code == ValidationError.error_code:
            raise ValidationError(self.error or "Invalid request", details=self.details)
        if self.error_code == ConflictError.error_code:
            raise ConflictError(self.error or "Conflict")
        raise DomainError(self.error or "Operation failed")


# ============================================================================
# Read Service
# ============================================================================


class CatalogService:
    """Read operations over the catalog.

    Example usage:
        service = CatalogService(CatalogRepository(session), mapper)
        result = await service.get_catalog_items(page_size=10, page_index=0)
    """

    def __init__(self, repository: CatalogRepository, mapper: CatalogMapper) -> None:
        self.repository = repository
        self.mapper = mapper

    async def get_catalog_items(
        self,
        page_size: int,
        page_index: int,
        brand_filter: list[int] | None = None,
        type_filter: list[int] | None = None,
    ) -> ServiceResult[PaginatedItemsDto[CatalogItemDto]]:
        """Get a page of items filtered by brand and type ids."""
        validation = ValidationResult()
        if page_size < 1:
            validation.add("pageSize", "pageSize must be at least 1")
        if page_index < 0:
            validation.add("pageIndex", "pageIndex must not be negative")
        if not validation.is_valid:
            return ServiceResult.invalid(validation)

        page = await self.repository.get_by_page(
            page_size=page_size,
            page_index=page_index,
            brand_filter=brand_filter,
            type_filter=type_filter,
        )
        return ServiceResult.ok(
            PaginatedItemsDto[CatalogItemDto](
                page_index=page.page_index,
                page_size=page.page_size,
                count=page.count,
                data=self.mapper.items_to_dtos(page.data),
            )
        )

    async def get_catalog_item(self, item_id: int) -> ServiceResult[CatalogItemDto]:
        item = await self.repository.get_by_id(item_id)
        if item is None:
            return ServiceResult.not_found("CatalogItem", item_id)
        return ServiceResult.ok(self.mapper.item_to_dto(item))

    async def get_catalog_items_by_name(self, name: str) -> ServiceResult[list[CatalogItemDto]]:
        validation = validate_name("name", name, "Item Name")
        if not validation.is_valid:
            return ServiceResult.invalid(validation)

        items = await self.repository.get_by_name(name.strip())
        return ServiceResult.ok(self.mapper.items_to_dtos(items))

    async def get_products(self) -> ServiceResult[list[CatalogItemDto]]:
        items = await self.repository.get_products()
        return ServiceResult.ok(self.mapper.items_to_dtos(items))

    async def get_brands(self) -> ServiceResult[list[CatalogBrandDto]]:
        brands = await self.repository.get_brands()
        return ServiceResult.ok([self.mapper.brand_to_dto(brand) for brand in brands])

    async def get_types(self) -> ServiceResult[list[CatalogTypeDto]]:
        types = await self.repository.get_types()
        return ServiceResult.ok([self.mapper.type_to_dto(item_type) for item_type in types])


# ============================================================================
# Brand / Type Services
# ============================================================================


class NamedEntityService:
    """Add/update/delete orchestration for brands and types."""

    label: str

    def __init__(self, repository: NamedEntityRepository, mapper: CatalogMapper) -> None:
        self.repository = repository
        self.mapper = mapper

    @property
    def entity_type(self) -> str:
        return self.repository.entity_name

    async def get(self, entity_id: int) -> ServiceResult:
        entity = await self.repository.get_by_id(entity_id)
        if entity is None:
            return ServiceResult.not_found(self.entity_type, entity_id)
        return ServiceResult.ok(self._to_dto(entity))

    async def add(self, name: str | None) -> ServiceResult[int]:
        """Validate the name and insert a new row."""
        validation = validate_name(self.repository.name_field, name, self.label)
        if not validation.is_valid:
            return ServiceResult.invalid(validation)

        try:
            entity_id = await self.repository.add(name.strip())  # type: ignore[union-attr]
        except ConflictError as e:
            return ServiceResult.conflict(e)
        return ServiceResult.ok(entity_id)

    async def update(self, entity_id: int | None, name: str | None) -> ServiceResult[int]:
        """Validate and rename; not found when the id does not exist."""
        validation = validate_id("id", entity_id).merge(
            validate_name(self.repository.name_field, name, self.label)
        )
        if not validation.is_valid:
            return ServiceResult.invalid(validation)

        try:
            updated = await self.repository.update(entity_id, name.strip())  # type: ignore[arg-type, union-attr]
        except ConflictError as e:
            return ServiceResult.conflict(e)

        if updated is None:
            return ServiceResult.not_found(self.entity_type, entity_id)  # type: ignore[arg-type]
        return ServiceResult.ok(updated)

    async def delete(self, entity_id: int) -> ServiceResult[int]:
        """Delete; conflict when catalog items still reference the row."""
        validation = validate_id("id", entity_id)
        if not validation.is_valid:
            return ServiceResult.invalid(validation)

        try:
            deleted = await self.repository.delete(entity_id)
        except ConflictError as e:
            logger.info(
                "Catalog delete rejected",
                entity=self.entity_type,
                entity_id=entity_id,
                reason=e.message,
            )
            return ServiceResult.conflict(e)

        if deleted is None:
            return ServiceResult.not_found(self.entity_type, entity_id)
        return ServiceResult.ok(deleted)


class CatalogBrandService(NamedEntityService):
    """Brand maintenance."""

    label = "Brand Name"

    def __init__(self, repository: CatalogBrandRepository, mapper: CatalogMapper) -> None:
        super().__init__(repository, mapper)

    def _to_dto(self, entity) -> CatalogBrandDto:
        return self.mapper.brand_to_dto(entity)


class CatalogTypeService(NamedEntityService):
    """Type maintenance."""

    label = "Type Name"

    def __init__(self, repository: CatalogTypeRepository, mapper: CatalogMapper) -> None:
        super().__init__(repository, mapper)

    def _to_dto(self, entity) -> CatalogTypeDto:
        return self.mapper.type_to_dto(entity)


# ============================================================================
# Item Service
# ============================================================================


_ITEM_FIELDS = (
    "name",
    "description",
    "price",
    "picture_file_name",
    "catalog_type_id",
    "catalog_brand_id",
    "available_stock",
    "restock_threshold",
    "max_stock_threshold",
    "on_reorder",
)


class CatalogItemService:
    """Item maintenance."""

    def __init__(self, repository: CatalogItemRepository) -> None:
        self.repository = repository

    async def add(self, request: CreateItemRequest) -> ServiceResult[int]:
        """Validate and insert an item.

        Unknown brand or type ids are reported as conflicts by the database.
        """
        validation = validate_item(request)
        if not validation.is_valid:
            return ServiceResult.invalid(validation)

        fields = request.model_dump(include=set(_ITEM_FIELDS))
        fields["name"] = fields["name"].strip()
        try:
            item_id = await self.repository.add(**fields)
        except ConflictError as e:
            return ServiceResult.conflict(e)
        return ServiceResult.ok(item_id)

    async def update(self, request: UpdateItemRequest) -> ServiceResult[int]:
        """Validate and replace an item's fields."""
        validation = validate_item(request)
        if not validation.is_valid:
            return ServiceResult.invalid(validation)

        fields = request.model_dump(include=set(_ITEM_FIELDS))
        fields["name"] = fields["name"].strip()
        try:
            updated = await self.repository.update(request.id, **fields)  # type: ignore[arg-type]
        except ConflictError as e:
            return ServiceResult.conflict(e)

        if updated is None:
            return ServiceResult.not_found("CatalogItem", request.id)  # type: ignore[arg-type]
        return ServiceResult.ok(updated)

    async def delete(self, item_id: int) -> ServiceResult[int]:
        validation = validate_id("id", item_id)
        if not validation.is_valid:
            return ServiceResult.invalid(validation)

        deleted = await self.repository.delete(item_id)
        if deleted is None:
            return ServiceResult.not_found("CatalogItem", item_id)
        return ServiceResult.ok(deleted)
