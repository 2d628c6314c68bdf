"""
Database Connection Management

The store is one SQLite file (or an in-memory database) reached through a
single shared aiosqlite connection. ``Database`` owns that connection and is
passed explicitly to every component that needs the store.
"""

import asyncio
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from catalog.database.models import Base

logger = structlog.get_logger(__name__)


class Database:
    """
    Application-wide store handle.

    Units of work run one at a time: ``session()`` holds a lock for the
    lifetime of the session because every session shares the same
    underlying connection and therefore the same transaction.

    Example:
        database = Database("sqlite+aiosqlite:///catalog.sqlite")
        await database.connect()
        async with database.session() as session:
            result = await session.execute(query)
        await database.disconnect()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        """
        Get the database engine.

        Raises:
            RuntimeError: If the database is not connected
        """
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call connect() first.")
        return self._engine

    async def connect(self, create_schema: bool = True) -> AsyncEngine:
        """
        Open the shared connection and verify it.

        Args:
            create_schema: Create the products table and search index when missing

        Returns:
            AsyncEngine: The initialized database engine
        """
        if self._engine is not None:
            logger.warning("Database already initialized", url=self.url)
            return self._engine

        self._engine = create_async_engine(
            self.url,
            echo=self.echo,
            poolclass=StaticPool,
        )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        try:
            async with self._engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connection established", url=self.url)
        except Exception as e:
            logger.error("Failed to connect to database", url=self.url, error=str(e))
            await self.disconnect()
            raise

        if create_schema:
            await self.init_schema()

        return self._engine

    async def disconnect(self) -> None:
        """Close the shared connection."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection closed", url=self.url)

    async def init_schema(self) -> None:
        """Create the products table and its search index if they do not exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.debug("Database schema ensured")

    async def drop_schema(self) -> None:
        """Drop the products table and its search index."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database schema dropped")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a database session.

        Context manager that provides a database session and handles
        commit/rollback/close automatically. Closing a session whose
        transaction is still open (e.g. on task cancellation) rolls it back.

        Yields:
            AsyncSession: Database session
        """
        if self._session_factory is None:
            logger.error("Database not initialized when session() called")
            raise RuntimeError("Database not initialized. Call connect() first.")

        async with self._lock:
            session = self._session_factory()
            try:
                yield session
                await session.commit()
            except Exception as e:
                logger.debug("Database session error, rolling back", error=str(e), error_type=type(e).__name__)
                await session.rollback()
                raise
            finally:
                await session.close()

    async def check_health(self) -> dict:
        """
        Check database health status.

        Returns:
            dict: Health status with latency information
        """
        try:
            start = time.perf_counter()
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            latency_ms = (time.perf_counter() - start) * 1000

            return {
                "status": "healthy",
                "latency_ms": round(latency_ms, 2),
            }
        except Exception as e:
            return {
                "status": "unhealthy",
                "error": str(e),
            }
