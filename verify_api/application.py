from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.logger import logger
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .models.orm.base import Base
from .utils.gemini import GeminiClient


class Database:
    """Handle on the analysis history store.

    Created by the application factory and connected during startup, so
    importing the application never touches the database.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None

    @property
    def is_memory(self) -> bool:
        return make_url(self.url).database in (None, "", ":memory:")

    async def connect(self) -> None:
        if self.is_memory:
            # A single shared connection, otherwise every checkout would
            # see its own empty in-memory database.
            self.engine = create_async_engine(
                self.url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            self.engine = create_async_engine(self.url)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self._sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)
        logger.info(f"Database connection created: {self.engine.url!r}")

    async def disconnect(self) -> None:
        if self.engine is not None:
            logger.info(f"Closing database connection {self.engine.url!r}")
            await self.engine.dispose()
            logger.info(f"Closed database connection {self.engine.url!r}")
        self.engine = None
        self._sessionmaker = None

    def session(self) -> AsyncSession:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        return self._sessionmaker()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect the store on startup and release it on shutdown."""
    db: Database = app.state.db
    await db.connect()
    try:
        yield
    finally:
        await db.disconnect()


async def get_db(request: Request) -> Database:
    return request.app.state.db


async def get_model_client(request: Request) -> GeminiClient:
    return request.app.state.model_client
