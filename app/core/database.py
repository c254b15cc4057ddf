"""Database handle and session dependency."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Owns the async engine and session factory for one process."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    def connect(self):
        """Create the engine and session factory."""
        if self._engine is not None:
            return

        logger.info(f"Opening database engine for {self.url.split('@')[-1]}")
        self._engine = create_async_engine(self.url, echo=self.echo)
        self._session_factory = async_sessionmaker(
            self._engine, expire_on_commit=False
        )

    async def dispose(self):
        """Dispose of the engine and all pooled connections."""
        if self._engine is None:
            return

        logger.info("Closing database engine")
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    async def create_all(self):
        """Create all tables known to the declarative base."""
        # Register every model on the metadata before creating tables
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self):
        """Drop all tables known to the declarative base."""
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session bound to this database."""
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")

        async with self._session_factory() as session:
            yield session


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a session from the application's database."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
