"""
Database Seeder

Creates the products table and its search index, loads a handful of sample
products into an empty catalog and optionally bulk-generates more.

Usage:
    python -m catalog.ingestion.seed_db
    python -m catalog.ingestion.seed_db --reset --generate 1000
"""

import argparse
import asyncio
from datetime import datetime
from typing import List, Optional

import structlog

from catalog.config import get_settings
from catalog.config.logging import configure_logging
from catalog.database.connection import Database
from catalog.schemas.product import ProductCreate
from catalog.services.generation import ProductBulkGenerator
from catalog.services.repository import ProductRepository
from catalog.services.search import rebuild_search_index

logger = structlog.get_logger(__name__)

SAMPLE_PRODUCTS = [
    ProductCreate(
        name="iPhone 15 Pro",
        description="Latest flagship smartphone from Apple with advanced camera system",
        category="Electronics",
        brand="Apple",
        price=999.99,
        quantity=1,
        sku="APL-IP15P-128GB",
        release_date=datetime(2023, 9, 22),
        availability_status="in_stock",
        customer_rating=4.8,
    ),
    ProductCreate(
        name="Samsung Galaxy S24",
        description="Premium Android smartphone with AI-powered features",
        category="Electronics",
        brand="Samsung",
        price=899.99,
        quantity=1,
        sku="SAM-GS24-256GB",
        release_date=datetime(2024, 1, 17),
        availability_status="in_stock",
        customer_rating=4.6,
    ),
    ProductCreate(
        name="Nike Air Max 270",
        description="Comfortable running shoes with air cushioning",
        category="Footwear",
        brand="Nike",
        price=150.00,
        quantity=2,
        sku="NIK-AM270-10",
        release_date=datetime(2023, 3, 15),
        availability_status="in_stock",
        customer_rating=4.4,
    ),
    ProductCreate(
        name="MacBook Pro 14-inch",
        description="Professional laptop with M3 chip for developers and creators",
        category="Computers",
        brand="Apple",
        price=1999.99,
        quantity=1,
        sku="APL-MBP14-M3-512GB",
        release_date=datetime(2023, 10, 30),
        availability_status="limited_stock",
        customer_rating=4.9,
    ),
    ProductCreate(
        name="Sony WH-1000XM5",
        description="Wireless noise-canceling headphones with premium sound",
        category="Audio",
        brand="Sony",
        price=399.99,
        quantity=1,
        sku="SNY-WH1000XM5-BLK",
        release_date=datetime(2022, 5, 12),
        availability_status="in_stock",
        customer_rating=4.7,
    ),
]


async def seed_sample_products(repository: ProductRepository) -> int:
    """Insert the sample products when the catalog is empty"""
    existing = await repository.count()
    if existing:
        logger.info("Products table already populated", count=existing)
        return 0

    for product in SAMPLE_PRODUCTS:
        await repository.create(product)

    logger.info("Inserted sample products", count=len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)


async def seed(database: Database, reset: bool = False, generate: int = 0) -> int:
    """
    Seed the catalog.

    Args:
        database: Connected store
        reset: Drop and recreate the table and search index first
        generate: Number of synthetic products to add afterwards

    Returns:
        Number of products inserted
    """
    if reset:
        logger.info("Dropping existing products table")
        await database.drop_schema()
    await database.init_schema()

    inserted = await seed_sample_products(ProductRepository(database))
    await rebuild_search_index(database)

    if generate > 0:
        settings = get_settings()
        writer = ProductBulkGenerator(
            database,
            batch_size=settings.generation.batch_size,
            sku_max_attempts=settings.generation.sku_max_attempts,
        )
        inserted += await writer.generate_and_persist(generate)

    logger.info("Database seeding completed", inserted=inserted)
    return inserted


async def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the product catalog")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop and recreate the products table and search index"
    )
    parser.add_argument(
        "--generate",
        type=int,
        default=0,
        help="Number of synthetic products to generate after seeding"
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings=settings)

    database = Database(settings.database.url, echo=settings.database.echo)
    await database.connect()
    try:
        await seed(database, reset=args.reset, generate=args.generate)
    finally:
        await database.disconnect()


def run() -> None:
    """Console script entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
