"""
Products API Endpoints

REST API for the product catalog: listing, full-text search, bulk
generation and single-record CRUD. Store failures are logged in detail and
answered with a generic message.
"""

import asyncio
import math
from typing import Any, Dict, List, Optional

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from catalog.config import Settings
from catalog.errors import (
    DuplicateSkuError,
    GenerationCancelled,
    PersistenceError,
    ValidationError,
)
from catalog.schemas.product import (
    MessageResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from catalog.serving.api.dependencies import (
    get_app_settings,
    get_bulk_generator,
    get_repository,
    get_search,
)
from catalog.services.generation import ProductBulkGenerator
from catalog.services.repository import ProductRepository
from catalog.services.search import ProductSearch, validate_search_query

logger = structlog.get_logger(__name__)

router = APIRouter()

PRODUCT_NOT_FOUND = "Product not found"


def resolve_generate_count(payload: Optional[Dict[str, Any]], default: int) -> int:
    """
    Count requested by a generate call.

    Absent, null, non-numeric and non-positive values fall back to
    ``default``; numeric strings are accepted.
    """
    raw = payload.get("count") if isinstance(payload, dict) else None

    if isinstance(raw, bool):
        return default
    if isinstance(raw, str):
        try:
            raw = int(raw.strip())
        except ValueError:
            return default
    if not isinstance(raw, (int, float)) or not math.isfinite(raw):
        return default

    count = int(raw)
    return count if count > 0 else default


async def generate_within(
    writer: ProductBulkGenerator,
    count: int,
    timeout: Optional[float],
) -> int:
    """
    Run a generation that is asked to stop once ``timeout`` seconds pass.

    The writer task is never cancelled mid-statement; it sees the cancel
    event at its next batch boundary and rolls back. A request cancelled
    from outside stops the run the same way.

    Raises:
        GenerationCancelled: If the deadline passed before the run finished
    """
    cancel_event = asyncio.Event()
    task = asyncio.ensure_future(
        writer.generate_and_persist(count, cancel_event=cancel_event)
    )
    try:
        return await asyncio.wait_for(asyncio.shield(task), timeout=timeout or None)
    except asyncio.TimeoutError:
        cancel_event.set()
        return await task
    except asyncio.CancelledError:
        cancel_event.set()
        task.add_done_callback(lambda t: t.cancelled() or t.exception())
        raise


@router.get("", response_model=List[ProductResponse])
async def list_products(
    repository: ProductRepository = Depends(get_repository),
) -> List[ProductResponse]:
    """List all products."""
    try:
        return await repository.find_all()
    except PersistenceError as e:
        logger.error("Error fetching products", error=str(e))
        raise HTTPException(status_code=500, detail="Error fetching products")


@router.get("/search", response_model=List[ProductResponse])
async def search_products(
    q: Optional[str] = Query(None, description="Search term, up to 100 characters"),
    search: ProductSearch = Depends(get_search),
) -> List[ProductResponse]:
    """
    Full-text prefix search over name, description, category, brand and sku,
    ordered by relevance.
    """
    try:
        term = validate_search_query(q)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    try:
        return await search.search(term)
    except PersistenceError as e:
        logger.error("Error searching products", term=term, error=str(e))
        raise HTTPException(status_code=500, detail="Error searching products")


@router.post("/generate", response_model=MessageResponse)
async def generate_products(
    payload: Optional[Dict[str, Any]] = Body(None),
    writer: ProductBulkGenerator = Depends(get_bulk_generator),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """
    Generate synthetic products in one transaction.

    - **count**: Number of products (default: 1000)
    """
    count = resolve_generate_count(payload, settings.generation.default_count)
    timeout = settings.generation.timeout_seconds

    try:
        await generate_within(writer, count, timeout)
    except GenerationCancelled:
        logger.error("Product generation timed out", count=count, timeout_seconds=timeout)
        raise HTTPException(status_code=504, detail="Product generation timed out")
    except PersistenceError as e:
        logger.error("Error generating products", count=count, error=str(e))
        raise HTTPException(status_code=500, detail="Error generating products")

    return MessageResponse(message=f"Successfully generated {count} products")


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    repository: ProductRepository = Depends(get_repository),
) -> ProductResponse:
    """Get product details."""
    try:
        product = await repository.find_by_id(product_id)
    except PersistenceError as e:
        logger.error("Error fetching product", product_id=product_id, error=str(e))
        raise HTTPException(status_code=500, detail="Error fetching product")

    if product is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return product


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    repository: ProductRepository = Depends(get_repository),
) -> ProductResponse:
    """Create a new product."""
    try:
        return await repository.create(product_data)
    except DuplicateSkuError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except PersistenceError as e:
        logger.error("Error creating product", sku=product_data.sku, error=str(e))
        raise HTTPException(status_code=500, detail="Error creating product")


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    repository: ProductRepository = Depends(get_repository),
) -> ProductResponse:
    """
    Update an existing product.

    All fields are optional. Only provided fields will be updated.
    """
    try:
        product = await repository.update(product_id, product_data)
    except DuplicateSkuError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except PersistenceError as e:
        logger.error("Error updating product", product_id=product_id, error=str(e))
        raise HTTPException(status_code=500, detail="Error updating product")

    if product is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    repository: ProductRepository = Depends(get_repository),
) -> Response:
    """Delete a product."""
    try:
        deleted = await repository.delete(product_id)
    except PersistenceError as e:
        logger.error("Error deleting product", product_id=product_id, error=str(e))
        raise HTTPException(status_code=500, detail="Error deleting product")

    if not deleted:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
