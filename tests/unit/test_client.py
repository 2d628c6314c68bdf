"""
Unit Tests - Catalog HTTP Client
"""
import json

import httpx
import pytest

from catalog.client import CatalogClient, CatalogClientError

PRODUCT_JSON = {
    "id": 7,
    "name": "Smart Speaker 12",
    "description": "High-quality electronics product featuring long battery life and exceptional value.",
    "category": "Electronics",
    "brand": "TechCorp",
    "price": 49.99,
    "quantity": 3,
    "sku": "TEC-ELE-0042",
    "releaseDate": "2025-01-10T08:00:00",
    "availabilityStatus": "in_stock",
    "customerRating": 4.1,
    "createdAt": "2025-02-01T10:00:00",
    "updatedAt": "2025-02-01T10:00:00",
}


def make_client(handler) -> CatalogClient:
    return CatalogClient("http://catalog.test", transport=httpx.MockTransport(handler))


class TestCatalogClient:
    """Tests for CatalogClient"""

    async def test_list_products(self):
        """Test the product list is parsed from camelCase JSON"""
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/products"
            return httpx.Response(200, json=[PRODUCT_JSON])

        async with make_client(handler) as client:
            products = await client.list_products()

        assert len(products) == 1
        assert products[0].sku == "TEC-ELE-0042"
        assert products[0].customer_rating == 4.1

    async def test_search_sends_query(self):
        """Test the search term travels as the q parameter"""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["q"] = request.url.params["q"]
            return httpx.Response(200, json=[])

        async with make_client(handler) as client:
            results = await client.search_products("smart & speaker")

        assert results == []
        assert seen == {"path": "/products/search", "q": "smart & speaker"}

    async def test_error_message_surfaced(self):
        """Test non-success responses raise with the server message"""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"message": "Search query cannot be empty"})

        async with make_client(handler) as client:
            with pytest.raises(CatalogClientError) as exc_info:
                await client.search_products(" ")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Search query cannot be empty"

    async def test_error_without_json_body(self):
        """Test a plain-text error falls back to the reason phrase"""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        async with make_client(handler) as client:
            with pytest.raises(CatalogClientError) as exc_info:
                await client.list_products()

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Bad Gateway"

    async def test_get_product(self):
        """Test a single product is fetched by id"""
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/products/7"
            return httpx.Response(200, json=PRODUCT_JSON)

        async with make_client(handler) as client:
            product = await client.get_product(7)

        assert product.id == 7

    async def test_get_missing_product(self):
        """Test a 404 yields None"""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Product not found"})

        async with make_client(handler) as client:
            assert await client.get_product(99) is None

    async def test_generate_products(self):
        """Test generate posts the count and returns the message"""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"message": "Successfully generated 5 products"})

        async with make_client(handler) as client:
            message = await client.generate_products(5)

        assert message == "Successfully generated 5 products"
        assert seen == {"method": "POST", "body": {"count": 5}}

    async def test_generate_default_count(self):
        """Test omitting the count sends an empty body"""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"message": "Successfully generated 1000 products"})

        async with make_client(handler) as client:
            await client.generate_products()

        assert seen["body"] == {}
