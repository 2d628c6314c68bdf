"""
Unit Tests - Synthetic Product Generator
"""
import re
from datetime import datetime

import pytest

from catalog.data.generators import (
    AVAILABILITY_STATUSES,
    BRANDS,
    CATEGORIES,
    ITEM_NOUNS,
    MAX_PRICE,
    MAX_QUANTITY,
    MAX_RATING,
    MIN_PRICE,
    MIN_RATING,
    NAME_PREFIXES,
    RELEASE_WINDOW,
    TRAITS,
    ProductGenerator,
)

SKU_PATTERN = re.compile(r"^[A-Z]{3}-[A-Z]{3}-\d{4}$")
NOW = datetime(2025, 6, 1, 9, 30, 0)


@pytest.fixture
def records(product_generator):
    """A sizeable sample of generated records"""
    return product_generator.generate(500, now=NOW)


class TestProductGenerator:
    """Tests for ProductGenerator"""

    def test_generates_requested_count(self, product_generator):
        """Test n records are produced"""
        assert len(product_generator.generate(25, now=NOW)) == 25

    @pytest.mark.parametrize("n", [0, -1, -50])
    def test_non_positive_count_yields_nothing(self, product_generator, n):
        """Test zero or negative counts produce an empty list"""
        assert product_generator.generate(n, now=NOW) == []

    def test_records_carry_every_column(self, product_generator):
        """Test each record is keyed by the product columns"""
        record = product_generator.generate_one(NOW)

        assert set(record) == {
            "name", "description", "category", "brand", "price", "quantity",
            "sku", "release_date", "availability_status", "customer_rating",
            "created_at", "updated_at",
        }

    def test_vocabularies(self, records):
        """Test categories, brands and statuses come from the fixed lists"""
        for record in records:
            assert record["category"] in CATEGORIES
            assert record["brand"] in BRANDS
            assert record["availability_status"] in AVAILABILITY_STATUSES

    def test_name_matches_category(self, records):
        """Test names are prefix, noun and a number drawn for the category"""
        for record in records:
            category = record["category"]
            assert any(record["name"].startswith(f"{p} ") for p in NAME_PREFIXES[category])
            assert any(f" {noun} " in record["name"] for noun in ITEM_NOUNS[category])

            number = int(record["name"].rsplit(" ", 1)[1])
            assert 0 <= number <= 999

    def test_description_template(self, records):
        """Test descriptions follow the fixed template"""
        for record in records:
            category = record["category"]
            assert record["description"] in {
                f"High-quality {category.lower()} product featuring {trait} and exceptional value."
                for trait in TRAITS[category]
            }

    def test_price_range_and_precision(self, records):
        """Test prices stay in range with at most two decimals"""
        for record in records:
            assert MIN_PRICE <= record["price"] <= MAX_PRICE
            assert round(record["price"], 2) == record["price"]

    def test_quantity_range(self, records):
        """Test quantities are integers in [0, 99]"""
        for record in records:
            assert isinstance(record["quantity"], int)
            assert 0 <= record["quantity"] < MAX_QUANTITY

    def test_rating_range_and_precision(self, records):
        """Test ratings stay in [1.0, 5.0] with one decimal"""
        for record in records:
            assert MIN_RATING <= record["customer_rating"] <= MAX_RATING
            assert round(record["customer_rating"], 1) == record["customer_rating"]

    def test_sku_format(self, records):
        """Test SKUs are brand and category prefixes plus four digits"""
        for record in records:
            assert SKU_PATTERN.match(record["sku"])
            assert record["sku"].startswith(
                f"{record['brand'][:3].upper()}-{record['category'][:3].upper()}-"
            )

    def test_release_date_within_past_year(self, records):
        """Test release dates fall in the year before now"""
        for record in records:
            assert NOW - RELEASE_WINDOW <= record["release_date"] <= NOW

    def test_timestamps_shared_within_call(self, records):
        """Test every record of one call carries the same timestamps"""
        assert {r["created_at"] for r in records} == {NOW}
        assert {r["updated_at"] for r in records} == {NOW}

    def test_default_timestamp_shared(self, product_generator):
        """Test a call without now still stamps all records identically"""
        generated = product_generator.generate(10)

        assert len({r["created_at"] for r in generated}) == 1
        assert generated[0]["created_at"] == generated[0]["updated_at"]

    def test_seeded_generators_are_reproducible(self):
        """Test two generators with the same seed produce the same records"""
        first = ProductGenerator(seed=99).generate(20, now=NOW)
        second = ProductGenerator(seed=99).generate(20, now=NOW)

        assert first == second

    def test_sku_for(self, product_generator):
        """Test sku_for builds the prefix from brand and category"""
        sku = product_generator.sku_for("SportsPro", "Automotive")

        assert SKU_PATTERN.match(sku)
        assert sku.startswith("SPO-AUT-")
