"""
Unit Tests - Database Seeder
"""
from catalog.ingestion.seed_db import SAMPLE_PRODUCTS, seed, seed_sample_products
from catalog.services.search import ProductSearch


class TestSeeder:
    """Tests for the seeding helpers"""

    async def test_seeds_empty_catalog(self, repository):
        """Test sample products are loaded into an empty table"""
        inserted = await seed_sample_products(repository)

        assert inserted == len(SAMPLE_PRODUCTS)
        assert await repository.count() == len(SAMPLE_PRODUCTS)

    async def test_skips_populated_catalog(self, repository, make_product):
        """Test an existing catalog is left alone"""
        await repository.create(make_product())

        assert await seed_sample_products(repository) == 0
        assert await repository.count() == 1

    async def test_seed_is_idempotent(self, database, repository):
        """Test seeding twice keeps one copy of the samples"""
        await seed(database)
        await seed(database)

        assert await repository.count() == len(SAMPLE_PRODUCTS)

    async def test_reset_clears_table(self, database, repository, make_product):
        """Test reset drops existing rows before seeding"""
        await repository.create(make_product())

        await seed(database, reset=True)

        skus = {p.sku for p in await repository.find_all()}
        assert skus == {p.sku for p in SAMPLE_PRODUCTS}

    async def test_seeded_products_searchable(self, database):
        """Test the index covers the sample products"""
        await seed(database)

        results = await ProductSearch(database).search("iphone")

        assert [p.name for p in results] == ["iPhone 15 Pro"]

    async def test_generate_after_seed(self, database, repository):
        """Test seeding can add generated products"""
        inserted = await seed(database, generate=15)

        assert inserted == len(SAMPLE_PRODUCTS) + 15
        assert await repository.count() == len(SAMPLE_PRODUCTS) + 15
