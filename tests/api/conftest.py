"""Shared fixtures for API tests."""

import asyncio
from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.dependencies import get_mapper
from app.api.security import Principal, TokenIntrospectionError, get_token_validator
from app.catalog.mapping import CatalogMapper, PictureUrlResolver
from app.catalog.seed import create_tables, seed_catalog
from app.infrastructure.database import build_engine, get_session
from app.main import app

FULL_TOKEN = "full-token"
BFF_TOKEN = "bff-token"
WRITE_TOKEN = "write-token"
UNAVAILABLE_TOKEN = "authority-down"


class FakeTokenValidator:
    """Token validator answering from a fixed token table."""

    TOKENS = {
        FULL_TOKEN: {"catalog", "catalog.bff"},
        BFF_TOKEN: {"catalog.bff"},
        WRITE_TOKEN: {"catalog"},
    }

    async def validate(self, token: str) -> Principal | None:
        if token == UNAVAILABLE_TOKEN:
            raise TokenIntrospectionError("connection refused")
        scopes = self.TOKENS.get(token)
        if scopes is None:
            return None
        return Principal(subject="tester", client_id="catalog-tests", scopes=set(scopes))


def auth_headers(token: str = FULL_TOKEN) -> dict[str, str]:
    """Get authentication headers."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def api_session_factory(tmp_path: Path) -> Generator[async_sessionmaker[AsyncSession], None, None]:
    """Seeded database for a single API test."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def prepare() -> None:
        await create_tables(engine)
        async with factory() as session:
            await seed_catalog(session)

    asyncio.run(prepare())
    yield factory
    asyncio.run(engine.dispose())


@pytest.fixture
def client(api_session_factory: async_sessionmaker[AsyncSession]) -> Generator[TestClient, None, None]:
    """Create test client without authentication."""

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with api_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_token_validator] = FakeTokenValidator
    app.dependency_overrides[get_mapper] = lambda: CatalogMapper(
        PictureUrlResolver(host="http://pictures.test", path="assets/images")
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client: TestClient) -> TestClient:
    """Create test client holding a token with every catalog scope."""
    client.headers.update(auth_headers(FULL_TOKEN))
    return client
