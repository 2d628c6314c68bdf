"""
Unit Tests - Store Context
"""
import pytest
from sqlalchemy import text

from catalog.database.connection import Database


class TestDatabase:
    """Tests for Database"""

    async def test_connect_and_disconnect(self):
        """Test the connection state follows connect and disconnect"""
        database = Database("sqlite+aiosqlite://")
        assert not database.is_connected

        await database.connect()
        assert database.is_connected

        await database.disconnect()
        assert not database.is_connected

    async def test_session_requires_connection(self):
        """Test sessions cannot be opened before connecting"""
        database = Database("sqlite+aiosqlite://")

        with pytest.raises(RuntimeError):
            async with database.session():
                pass

    async def test_schema_includes_search_index(self, database):
        """Test connecting creates the table, index and triggers"""
        async with database.session() as session:
            result = await session.execute(
                text("SELECT name FROM sqlite_master WHERE type IN ('table', 'trigger')")
            )
            names = set(result.scalars().all())

        assert {"products", "products_fts", "products_ai", "products_ad", "products_au"} <= names

    async def test_drop_schema_removes_search_index(self, database):
        """Test dropping the table drops its index too"""
        await database.drop_schema()

        async with database.session() as session:
            result = await session.execute(text("SELECT name FROM sqlite_master WHERE type = 'table'"))
            names = set(result.scalars().all())

        assert "products" not in names
        assert "products_fts" not in names

    async def test_session_rolls_back_on_error(self, database, repository, make_product):
        """Test an exception inside a session discards its writes"""
        await repository.create(make_product())

        with pytest.raises(ValueError):
            async with database.session() as session:
                await session.execute(text("DELETE FROM products"))
                raise ValueError("abort")

        assert await repository.count() == 1

    async def test_check_health(self, database):
        """Test a connected store reports healthy with latency"""
        health = await database.check_health()

        assert health["status"] == "healthy"
        assert health["latency_ms"] >= 0

    async def test_check_health_disconnected(self):
        """Test an unconnected store reports unhealthy"""
        health = await Database("sqlite+aiosqlite://").check_health()

        assert health["status"] == "unhealthy"
        assert "error" in health
