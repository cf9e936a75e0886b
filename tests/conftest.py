"""Shared fixtures: an in-memory SQLite store and an HTTP client bound to it."""

from typing import AsyncGenerator

import httpx
import pytest

from address_service.api.app import create_app
from address_service.api.dependencies import get_address_repository
from address_service.config.settings import settings
from address_service.repositories.connection import DatabaseConnectionManager
from address_service.repositories.sql_repository import SQLAlchemyAddressRepository

IN_MEMORY_URL = "sqlite+aiosqlite://"
TEST_TOKEN = "test-token"


@pytest.fixture
async def db_manager() -> AsyncGenerator[DatabaseConnectionManager, None]:
    """Initialized connection manager over a private in-memory database."""
    manager = DatabaseConnectionManager(IN_MEMORY_URL)
    await manager.initialize()
    yield manager
    await manager.close()


@pytest.fixture
async def repository(db_manager) -> SQLAlchemyAddressRepository:
    return SQLAlchemyAddressRepository(db_manager)


@pytest.fixture
def auth_headers(monkeypatch):
    """Configure a single accepted token and return matching headers."""
    monkeypatch.setattr(settings, "api_tokens", TEST_TOKEN)
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
async def app_client(repository) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client for an app whose store is the in-memory repository."""
    app = create_app()
    app.dependency_overrides[get_address_repository] = lambda: repository

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()
