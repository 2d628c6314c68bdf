"""
FastAPI dependencies

The store handle and settings live on ``app.state``; services are built per
request around them.
"""

from fastapi import Depends, Request

from catalog.config import Settings
from catalog.database.connection import Database
from catalog.services.generation import ProductBulkGenerator
from catalog.services.repository import ProductRepository
from catalog.services.search import ProductSearch


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_repository(database: Database = Depends(get_database)) -> ProductRepository:
    """Dependency to get ProductRepository instance"""
    return ProductRepository(database)


def get_search(database: Database = Depends(get_database)) -> ProductSearch:
    """Dependency to get ProductSearch instance"""
    return ProductSearch(database)


def get_bulk_generator(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> ProductBulkGenerator:
    """Dependency to get ProductBulkGenerator instance"""
    return ProductBulkGenerator(
        database,
        batch_size=settings.generation.batch_size,
        sku_max_attempts=settings.generation.sku_max_attempts,
    )
