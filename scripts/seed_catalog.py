#!/usr/bin/env python3
"""Seed product catalog script.

Creates the catalog tables and fills an empty catalog with the default
brands, types and items.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --schema-only
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.catalog.seed import create_tables, seed_catalog
from app.infrastructure.config import settings
from app.infrastructure.connection import describe_connection
from app.infrastructure.database import dispose_engine, get_engine, get_session_factory


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog database",
    )
    parser.add_argument(
        "--schema-only",
        action="store_true",
        help="Create tables without inserting seed data",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)
    print(f"Database: {describe_connection(settings.database, include_error_detail=False)}")
    print()

    print("Creating database tables...")
    await create_tables(get_engine())
    print("Tables ready.")
    print()

    if not args.schema_only:
        print("Seeding catalog...")
        try:
            async with get_session_factory()() as session:
                result = await seed_catalog(session)
        except Exception as e:
            print(f"  ✗ Error: {e}")
            raise

        print(f"  ✓ Brands: {result['brands']}")
        print(f"  ✓ Types: {result['types']}")
        print(f"  ✓ Items: {result['items']}")
        print()

    await dispose_engine()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
