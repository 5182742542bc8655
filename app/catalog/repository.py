"""Catalog repositories for database operations.

Repositories return ``None`` when the addressed row does not exist and
raise ``ConflictError`` when the database rejects a write because of a
foreign-key or uniqueness constraint. Each write commits its own unit of
work.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.catalog.models import MAX_INTEGER, CatalogBrand, CatalogItem, CatalogType
from app.domain.exceptions import ConflictError

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass
class PaginatedItems(Generic[T]):
    """Page container.

    Attributes:
        page_index: Zero-based page index.
        page_size: Maximum items per page.
        count: Total matching rows before pagination.
        data: Items on this page, ordered by id.
    """

    page_index: int
    page_size: int
    count: int
    data: list[T] = field(default_factory=list)


def _is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_INTEGER


def _storable_ids(values: Sequence[int]) -> list[int]:
    # Ids outside the column range can never match a row
    return [value for value in values if _is_storable_id(value)]


def _with_relations(query: Any) -> Any:
    return query.options(
        selectinload(CatalogItem.catalog_brand),
        selectinload(CatalogItem.catalog_type),
    )


class CatalogRepository:
    """Read-side repository over catalog items, brands and types.

    Example usage:
        async with get_session_factory()() as session:
            repo = CatalogRepository(session)
            page = await repo.get_by_page(page_size=10, page_index=0, brand_filter=[1])
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def get_by_page(
        self,
        page_size: int,
        page_index: int,
        brand_filter: Sequence[int] | None = None,
        type_filter: Sequence[int] | None = None,
    ) -> PaginatedItems[CatalogItem]:
        """Get one page of items, optionally filtered by brand and type.

        Empty filters are ignored. ``count`` is computed before
        pagination, so a page past the end returns ``count`` with no data.

        Args:
            page_size: Items per page (>= 1).
            page_index: Zero-based page index (>= 0).
            brand_filter: Brand ids to include.
            type_filter: Type ids to include.

        Returns:
            Page of items with brand and type loaded.
        """
        conditions = []
        if brand_filter:
            brand_ids = _storable_ids(brand_filter)
            if not brand_ids:
                return PaginatedItems(page_index=page_index, page_size=page_size, count=0)
            conditions.append(CatalogItem.catalog_brand_id.in_(brand_ids))
        if type_filter:
            type_ids = _storable_ids(type_filter)
            if not type_ids:
                return PaginatedItems(page_index=page_index, page_size=page_size, count=0)
            conditions.append(CatalogItem.catalog_type_id.in_(type_ids))

        count_query = select(func.count(CatalogItem.id))
        query = _with_relations(select(CatalogItem))
        if conditions:
            count_query = count_query.where(and_(*conditions))
            query = query.where(and_(*conditions))

        count = (await self.session.execute(count_query)).scalar_one()

        offset = page_index * page_size
        if offset >= count:
            return PaginatedItems(page_index=page_index, page_size=page_size, count=count)

        query = (
            query.order_by(CatalogItem.id.asc())
            .offset(offset)
            .limit(min(page_size, count - offset))
        )
        result = await self.session.execute(query)

        return PaginatedItems(
            page_index=page_index,
            page_size=page_size,
            count=count,
            data=list(result.scalars().all()),
        )

    async def get_by_id(self, item_id: int) -> CatalogItem | None:
        """Get item by ID with brand and type loaded."""
        if not _is_storable_id(item_id):
            return None
        query = _with_relations(select(CatalogItem)).where(CatalogItem.id == item_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> list[CatalogItem]:
        """Get items whose name contains ``name``, case-insensitively."""
        query = (
            _with_relations(select(CatalogItem))
            .where(CatalogItem.name.icontains(name, autoescape=True))
            .order_by(CatalogItem.id.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_products(self) -> list[CatalogItem]:
        """Get every item, ordered by id."""
        query = _with_relations(select(CatalogItem)).order_by(CatalogItem.id.asc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_brands(self) -> list[CatalogBrand]:
        result = await self.session.execute(select(CatalogBrand).order_by(CatalogBrand.id))
        return list(result.scalars().all())

    async def get_types(self) -> list[CatalogType]:
        result = await self.session.execute(select(CatalogType).order_by(CatalogType.id))
        return list(result.scalars().all())


class NamedEntityRepository:
    """Add/update/delete for entities identified by a single display name.

    Subclasses set ``model`` and ``name_field``.
    """

    model: Any
    name_field: str

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    async def get_by_id(self, entity_id: int) -> Any | None:
        if not _is_storable_id(entity_id):
            return None
        return await self.session.get(self.model, entity_id)

    async def add(self, name: str) -> int | None:
        """Insert a row and return the generated id.

        Raises:
            ConflictError: If the name is already taken.
        """
        entity = self.model(**{self.name_field: name})
        self.session.add(entity)
        await self._commit(f"{self.entity_name} {name!r} already exists")
        logger.info("Catalog entity added", entity=self.entity_name, entity_id=entity.id)
        return entity.id

    async def update(self, entity_id: int, name: str) -> int | None:
        """Rename a row.

        Returns:
            The id, or None when no row has that id.

        Raises:
            ConflictError: If the new name is already taken.
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return None

        setattr(entity, self.name_field, name)
        await self._commit(f"{self.entity_name} {name!r} already exists")
        logger.info("Catalog entity updated", entity=self.entity_name, entity_id=entity_id)
        return entity_id

    async def delete(self, entity_id: int) -> int | None:
        """Delete a row; items referencing it are never cascaded.

        Returns:
            The id, or None when no row has that id.

        Raises:
            ConflictError: If catalog items still reference the row.
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return None

        await self.session.delete(entity)
        await self._commit(
            f"{self.entity_name} {entity_id} is referenced by existing catalog items"
        )
        logger.info("Catalog entity deleted", entity=self.entity_name, entity_id=entity_id)
        return entity_id

    async def _commit(self, conflict_message: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(
                "Catalog write rejected by database",
                entity=self.entity_name,
                error=str(e.orig),
            )
            raise ConflictError(conflict_message) from e


class CatalogBrandRepository(NamedEntityRepository):
    """Repository for catalog brands."""

    model = CatalogBrand
    name_field = "brand"


class CatalogTypeRepository(NamedEntityRepository):
    """Repository for catalog types."""

    model = CatalogType
    name_field = "type"


class CatalogItemRepository:
    """Write-side repository for catalog items."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get(self, item_id: int) -> CatalogItem | None:
        if not _is_storable_id(item_id):
            return None
        return await self.session.get(CatalogItem, item_id)

    async def add(
        self,
        name: str,
        description: str | None,
        price: Decimal,
        catalog_brand_id: int,
        catalog_type_id: int,
        picture_file_name: str | None = None,
        available_stock: int = 0,
        restock_threshold: int = 0,
        max_stock_threshold: int = 0,
        on_reorder: bool = False,
    ) -> int | None:
        """Insert an item and return the generated id.

        Raises:
            ConflictError: If the brand or type does not exist.
        """
        item = CatalogItem(
            name=name,
            description=description,
            price=price,
            catalog_brand_id=catalog_brand_id,
            catalog_type_id=catalog_type_id,
            picture_file_name=picture_file_name,
            available_stock=available_stock,
            restock_threshold=restock_threshold,
            max_stock_threshold=max_stock_threshold,
            on_reorder=on_reorder,
        )
        self.session.add(item)
        await self._commit("Catalog item references an unknown brand or type")
        logger.info("Catalog item added", item_id=item.id, name=name)
        return item.id

    async def update(self, item_id: int, **fields: Any) -> int | None:
        """Replace the given fields of an item.

        Returns:
            The id, or None when no item has that id.

        Raises:
            ConflictError: If the brand or type does not exist.
        """
        item = await self._get(item_id)
        if item is None:
            return None

        for name, value in fields.items():
            setattr(item, name, value)
        await self._commit("Catalog item references an unknown brand or type")
        logger.info("Catalog item updated", item_id=item_id, fields=sorted(fields))
        return item_id

    async def delete(self, item_id: int) -> int | None:
        """Delete an item; None when no item has that id."""
        item = await self._get(item_id)
        if item is None:
            return None

        await self.session.delete(item)
        await self._commit(f"Catalog item {item_id} could not be deleted")
        logger.info("Catalog item deleted", item_id=item_id)
        return item_id

    async def _commit(self, conflict_message: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Catalog item write rejected by database", error=str(e.orig))
            raise ConflictError(conflict_message) from e
