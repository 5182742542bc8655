"""Database initialisation and default catalog seed data.

Creates the schema when missing and fills an empty catalog with a small
set of brands, types and items.
"""

from decimal import Decimal

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.catalog.models import CatalogBrand, CatalogItem, CatalogType
from app.infrastructure.database import Base

logger = structlog.get_logger()

DEFAULT_BRANDS = ["Azure", ".NET", "Visual Studio", "SQL Server", "Other"]
DEFAULT_TYPES = ["Mug", "T-Shirt", "Sheet", "USB Memory Stick"]

# (type, brand, name, price, picture file)
DEFAULT_ITEMS = [
    ("T-Shirt", ".NET", ".NET Bot Black Hoodie", "19.50", "1.png"),
    ("Mug", ".NET", ".NET Black & White Mug", "8.50", "2.png"),
    ("T-Shirt", "Other", "Prism White T-Shirt", "12.00", "3.png"),
    ("T-Shirt", ".NET", ".NET Foundation T-shirt", "12.00", "4.png"),
    ("Sheet", "Other", "Roslyn Red Sheet", "8.50", "5.png"),
    ("T-Shirt", ".NET", ".NET Blue Hoodie", "12.00", "6.png"),
    ("T-Shirt", "Other", "Roslyn Red T-Shirt", "12.00", "7.png"),
    ("T-Shirt", "Other", "Kudu Purple Hoodie", "8.50", "8.png"),
    ("Mug", "Other", "Cup<T> White Mug", "12.00", "9.png"),
    ("Sheet", ".NET", ".NET Foundation Sheet", "12.00", "10.png"),
    ("Sheet", ".NET", "Cup<T> Sheet", "8.50", "11.png"),
    ("T-Shirt", "Other", "Prism White TShirt", "12.00", "12.png"),
]


async def create_tables(engine: AsyncEngine) -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_catalog(session: AsyncSession) -> dict[str, int]:
    """Seed the default catalog when no brands exist yet.

    Args:
        session: Session to write with; committed on success.

    Returns:
        Counts of created brands, types and items (all zero when the
        catalog was already populated).
    """
    existing = (await session.execute(select(func.count(CatalogBrand.id)))).scalar_one()
    if existing:
        logger.info("Catalog already seeded", brands=existing)
        return {"brands": 0, "types": 0, "items": 0}

    brands = {name: CatalogBrand(brand=name) for name in DEFAULT_BRANDS}
    types = {name: CatalogType(type=name) for name in DEFAULT_TYPES}
    session.add_all([*brands.values(), *types.values()])
    await session.flush()

    items = [
        CatalogItem(
            catalog_type_id=types[type_name].id,
            catalog_brand_id=brands[brand_name].id,
            name=name,
            description=name,
            price=Decimal(price),
            picture_file_name=picture,
            available_stock=100,
            restock_threshold=10,
            max_stock_threshold=200,
        )
        for type_name, brand_name, name, price, picture in DEFAULT_ITEMS
    ]
    session.add_all(items)
    await session.commit()

    counts = {"brands": len(brands), "types": len(types), "items": len(items)}
    logger.info("Catalog seeded", **counts)
    return counts


async def initialize_database(engine: AsyncEngine, session_factory) -> bool:
    """Create the schema and seed it, logging instead of raising on failure.

    The service keeps starting when the database is unavailable.

    Returns:
        True when initialisation succeeded.
    """
    try:
        await create_tables(engine)
        async with session_factory() as session:
            await seed_catalog(session)
    except Exception as e:
        logger.error(
            "An error occurred while creating the database",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return False
    return True
