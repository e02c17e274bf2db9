from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from verify_api.application import Database
from tests.utils import FakeModelClient


@pytest.fixture
def model_client() -> FakeModelClient:
    """Model client which never reaches out to Gemini."""
    return FakeModelClient()


@pytest_asyncio.fixture
async def app(model_client: FakeModelClient, tmp_path: Path) -> AsyncGenerator[FastAPI, None]:
    """Application backed by a fresh SQLite file, with startup and
    shutdown hooks running."""
    from verify_api.main import create_app

    application = create_app(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'authenticity.db'}",
        model_client=model_client,
        max_upload_size_mb=1,
    )
    async with LifespanManager(application):
        yield application


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async Test Client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        trust_env=False,
    ) as client:
        yield client


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[Database, None]:
    """In-memory store, torn down after each test."""
    database = Database("sqlite+aiosqlite://")
    await database.connect()
    yield database
    await database.disconnect()
