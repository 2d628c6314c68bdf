"""
HTTP Client for the Product Catalog API
"""
from typing import Any, Dict, List, Optional

import httpx
import structlog

from catalog.schemas.product import ProductResponse

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class CatalogClientError(Exception):
    """Non-success response from the catalog API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class CatalogClient:
    """
    Client for the catalog API.

    Requests are not retried. Pass ``transport`` to route requests somewhere
    other than the network (e.g. ``httpx.ASGITransport`` or
    ``httpx.MockTransport``).

    Example:
        async with CatalogClient("http://localhost:8000") as client:
            products = await client.search_products("wireless")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self._client.request(method, path, **kwargs)
        if response.is_success:
            return response

        message = response.reason_phrase
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            message = payload.get("message", message)
        logger.warning(
            "Catalog API request failed",
            method=method,
            path=path,
            status_code=response.status_code,
            message=message,
        )
        raise CatalogClientError(response.status_code, message)

    async def list_products(self) -> List[ProductResponse]:
        """Fetch every product"""
        response = await self._request("GET", "/products")
        return [ProductResponse.model_validate(item) for item in response.json()]

    async def search_products(self, query: str) -> List[ProductResponse]:
        """Full-text search; ``query`` is URL-encoded by httpx"""
        response = await self._request("GET", "/products/search", params={"q": query})
        return [ProductResponse.model_validate(item) for item in response.json()]

    async def get_product(self, product_id: int) -> Optional[ProductResponse]:
        """Fetch one product; None when it does not exist"""
        try:
            response = await self._request("GET", f"/products/{product_id}")
        except CatalogClientError as e:
            if e.status_code == 404:
                return None
            raise
        return ProductResponse.model_validate(response.json())

    async def generate_products(self, count: Optional[int] = None) -> str:
        """Ask the server to generate products; returns its status message"""
        body: Dict[str, Any] = {} if count is None else {"count": count}
        response = await self._request("POST", "/products/generate", json=body)
        return response.json()["message"]
