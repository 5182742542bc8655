"""Shared fixtures for catalog tests.

Tests run against a file-backed SQLite database per test with foreign
keys enforced, so constraint behaviour matches PostgreSQL.
"""

import os

# Must be set before the app settings are loaded
os.environ.setdefault("DATABASE__CONNECTION_STRING", "sqlite+aiosqlite:///:memory:")

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.catalog.mapping import CatalogMapper, PictureUrlResolver
from app.catalog.seed import create_tables, seed_catalog
from app.infrastructure.database import build_engine

PICTURE_HOST = "http://pictures.test"
PICTURE_PATH = "assets/images"


def sqlite_url(path: Path) -> str:
    """SQLAlchemy URL of a SQLite database file."""
    return f"sqlite+aiosqlite:///{path}"


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Engine over a fresh database with the catalog schema."""
    test_engine = build_engine(sqlite_url(tmp_path / "catalog.db"))
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session over an empty catalog."""
    async with session_factory() as db_session:
        yield db_session


@pytest_asyncio.fixture
async def seeded_session(session: AsyncSession) -> AsyncSession:
    """Session over the default seeded catalog."""
    await seed_catalog(session)
    return session


@pytest.fixture
def mapper() -> CatalogMapper:
    """Mapper resolving pictures against a test host."""
    return CatalogMapper(PictureUrlResolver(host=PICTURE_HOST, path=PICTURE_PATH))
