"""SQLAlchemy models for the product catalog.

Defines the catalog_brands, catalog_types and catalog_items tables.
Relationships are declared ``lazy="raise"``; repositories load them
explicitly when a DTO needs them.
"""

from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.database import Base

# Largest value an INTEGER column holds
MAX_INTEGER = 2_147_483_647

# Column limits of catalog_items
MAX_DESCRIPTION_LENGTH = 1000
MAX_PICTURE_FILE_NAME_LENGTH = 255
MAX_PRICE = Decimal("99999999.99")


class CatalogBrand(Base):
    """Brand an item is sold under.

    Attributes:
        id: Surrogate key.
        brand: Unique display name.
    """

    __tablename__ = "catalog_brands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<CatalogBrand(id={self.id}, brand={self.brand})>"


class CatalogType(Base):
    """Kind of catalog item (mug, t-shirt, ...)."""

    __tablename__ = "catalog_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<CatalogType(id={self.id}, type={self.type})>"


class CatalogItem(Base):
    """Item available in the catalog.

    Attributes:
        id: Surrogate key.
        name: Item name.
        description: Item description.
        price: Unit price, never negative.
        picture_file_name: Stored picture file name, if any.
        catalog_type_id: Type foreign key.
        catalog_brand_id: Brand foreign key.
        available_stock: Units in stock.
        restock_threshold: Stock level that triggers a reorder.
        max_stock_threshold: Maximum units the warehouse holds.
        on_reorder: Whether a reorder is pending.
    """

    __tablename__ = "catalog_items"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_catalog_items_price_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH), nullable=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    picture_file_name: Mapped[str | None] = mapped_column(
        String(MAX_PICTURE_FILE_NAME_LENGTH), nullable=True
    )
    catalog_type_id: Mapped[int] = mapped_column(
        ForeignKey("catalog_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    catalog_brand_id: Mapped[int] = mapped_column(
        ForeignKey("catalog_brands.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    available_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    restock_threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_stock_threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    on_reorder: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    catalog_type: Mapped[CatalogType] = relationship(CatalogType, lazy="raise")
    catalog_brand: Mapped[CatalogBrand] = relationship(CatalogBrand, lazy="raise")

    def __repr__(self) -> str:
        """String representation."""
        return f"<CatalogItem(id={self.id}, name={self.name[:30]})>"
