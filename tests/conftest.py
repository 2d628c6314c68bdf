"""
Test Suite Configuration
"""
from datetime import datetime
from typing import AsyncGenerator, Callable, Generator

import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.config.settings import DatabaseSettings, GenerationSettings, MonitoringSettings
from catalog.data.generators import ProductGenerator
from catalog.database.connection import Database
from catalog.main import create_app
from catalog.schemas.product import ProductCreate
from catalog.services.repository import ProductRepository


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings backed by an in-memory store"""
    return Settings(
        app_env="testing",
        debug=True,
        database=DatabaseSettings(path=":memory:"),
        generation=GenerationSettings(),
        monitoring=MonitoringSettings(log_level="WARNING", log_format="text"),
    )


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Connected in-memory store with the schema created"""
    db = Database("sqlite+aiosqlite://")
    await db.connect()
    yield db
    await db.disconnect()


@pytest.fixture
def repository(database: Database) -> ProductRepository:
    """Repository bound to the test store"""
    return ProductRepository(database)


@pytest.fixture
def product_generator() -> ProductGenerator:
    """Seeded generator for reproducible records"""
    return ProductGenerator(seed=1234)


@pytest.fixture
def make_product() -> Callable[..., ProductCreate]:
    """Factory for valid product payloads; keyword arguments override fields"""
    def _make(**overrides) -> ProductCreate:
        fields = {
            "name": "Zephyrix Bluetooth Speaker",
            "description": "Portable speaker with deep bass and a waterproof shell",
            "category": "Electronics",
            "brand": "TechCorp",
            "price": 79.99,
            "quantity": 12,
            "sku": "TEC-ELE-0001",
            "release_date": datetime(2024, 5, 1, 12, 0, 0),
            "availability_status": "in_stock",
            "customer_rating": 4.3,
        }
        fields.update(overrides)
        return ProductCreate(**fields)

    return _make


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """HTTP client for an app running against a fresh in-memory store"""
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client
