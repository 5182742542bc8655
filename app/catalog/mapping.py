"""Entity <-> DTO mapping.

Each ``FieldMap`` declares which attributes correspond one to one between
an entity and its DTO. ``CatalogMapper`` adds the computed picture URL and
nested brand/type DTOs when those relationships were loaded. Mapping
never touches the database.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect

from app.catalog.dtos import CatalogBrandDto, CatalogItemDto, CatalogTypeDto
from app.catalog.models import CatalogBrand, CatalogItem, CatalogType

E = TypeVar("E")
D = TypeVar("D", bound=BaseModel)


@dataclass(frozen=True)
class FieldMap(Generic[E, D]):
    """Field correspondence between an entity type and a DTO type."""

    entity_type: type[E]
    dto_type: type[D]
    fields: tuple[str, ...]

    def to_dto(self, entity: E, **computed: Any) -> D:
        """Build a DTO from the entity's mapped fields plus computed values."""
        values = {name: getattr(entity, name) for name in self.fields}
        values.update(computed)
        return self.dto_type(**values)

    def to_entity(self, dto: D) -> E:
        """Build a transient entity from the DTO's mapped fields."""
        return self.entity_type(**{name: getattr(dto, name) for name in self.fields})


BRAND_MAP = FieldMap(CatalogBrand, CatalogBrandDto, ("id", "brand"))
TYPE_MAP = FieldMap(CatalogType, CatalogTypeDto, ("id", "type"))
ITEM_MAP = FieldMap(
    CatalogItem,
    CatalogItemDto,
    (
        "id",
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
    ),
)


class PictureUrlResolver:
    """Turns a stored picture file name into a public URL."""

    def __init__(self, host: str, path: str) -> None:
        self.host = host.rstrip("/")
        self.path = path.strip("/")

    def resolve(self, file_name: str | None) -> str | None:
        """Public URL of the picture, or None when there is no file."""
        if not file_name:
            return None
        segments = [self.host, self.path, file_name.lstrip("/")]
        return "/".join(segment for segment in segments if segment)


class CatalogMapper:
    """Maps catalog entities to DTOs and back."""

    def __init__(self, picture_resolver: PictureUrlResolver) -> None:
        self.picture_resolver = picture_resolver

    def brand_to_dto(self, brand: CatalogBrand) -> CatalogBrandDto:
        return BRAND_MAP.to_dto(brand)

    def brand_from_dto(self, dto: CatalogBrandDto) -> CatalogBrand:
        return BRAND_MAP.to_entity(dto)

    def type_to_dto(self, catalog_type: CatalogType) -> CatalogTypeDto:
        return TYPE_MAP.to_dto(catalog_type)

    def type_from_dto(self, dto: CatalogTypeDto) -> CatalogType:
        return TYPE_MAP.to_entity(dto)

    def item_to_dto(self, item: CatalogItem) -> CatalogItemDto:
        """Map an item, resolving its picture URL.

        Brand and type are nested only when already loaded.
        """
        unloaded = inspect(item).unloaded

        catalog_brand = None
        if "catalog_brand" not in unloaded and item.catalog_brand is not None:
            catalog_brand = self.brand_to_dto(item.catalog_brand)

        catalog_type = None
        if "catalog_type" not in unloaded and item.catalog_type is not None:
            catalog_type = self.type_to_dto(item.catalog_type)

        return ITEM_MAP.to_dto(
            item,
            picture_url=self.picture_resolver.resolve(item.picture_file_name),
            catalog_brand=catalog_brand,
            catalog_type=catalog_type,
        )

    def item_from_dto(self, dto: CatalogItemDto) -> CatalogItem:
        """Map an item DTO back to an entity; the picture URL is dropped."""
        return ITEM_MAP.to_entity(dto)

    def items_to_dtos(self, items: list[CatalogItem]) -> list[CatalogItemDto]:
        return [self.item_to_dto(item) for item in items]
