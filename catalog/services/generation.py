"""
Bulk Product Generation

Synthesizes products in bounded batches and persists all of them inside a
single transaction. Either every requested product is stored or none is.
The full-text index is rebuilt once the transaction has committed.
"""

import asyncio
import math
import time
from typing import Any, Dict, List, Optional, Set

import structlog
from prometheus_client import Counter, Histogram
from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.data.generators import ProductGenerator
from catalog.database.connection import Database
from catalog.database.models import Product, utcnow
from catalog.errors import GenerationCancelled, GenerationError, PersistenceError
from catalog.services.search import rebuild_search_index

logger = structlog.get_logger(__name__)

DEFAULT_BATCH_SIZE = 100
DEFAULT_SKU_MAX_ATTEMPTS = 10


# =============================================================================
# METRICS
# =============================================================================

GENERATION_RUNS = Counter(
    "catalog_generation_runs_total",
    "Bulk generation runs by outcome",
    ["status"],
)

PRODUCTS_GENERATED = Counter(
    "catalog_products_generated_total",
    "Products persisted by bulk generation",
)

GENERATION_TIME = Histogram(
    "catalog_generation_seconds",
    "Time spent generating and persisting products",
)


class ProductBulkGenerator:
    """
    Generate and persist synthetic products.

    Example:
        writer = ProductBulkGenerator(database, ProductGenerator(seed=7))
        await writer.generate_and_persist(250)  # 3 batches: 100, 100, 50
    """

    def __init__(
        self,
        database: Database,
        generator: Optional[ProductGenerator] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        sku_max_attempts: int = DEFAULT_SKU_MAX_ATTEMPTS,
    ):
        self.database = database
        self.generator = generator or ProductGenerator()
        self.batch_size = batch_size
        self.sku_max_attempts = sku_max_attempts

    def batch_count(self, count: int) -> int:
        """Number of batches needed for ``count`` products"""
        if count <= 0:
            return 0
        return math.ceil(count / self.batch_size)

    async def _ensure_unique_skus(
        self,
        session: AsyncSession,
        records: List[Dict[str, Any]],
        seen: Set[str],
    ) -> None:
        """
        Redraw SKUs that repeat within this generation run or already exist
        in the store. ``seen`` accumulates the SKUs accepted so far.
        """
        pending = records
        for _ in range(self.sku_max_attempts):
            skus = [record["sku"] for record in pending]
            result = await session.execute(select(Product.sku).where(Product.sku.in_(skus)))
            taken = seen | set(result.scalars().all())

            collisions = []
            for record in pending:
                if record["sku"] in taken:
                    collisions.append(record)
                else:
                    taken.add(record["sku"])
                    seen.add(record["sku"])

            if not collisions:
                return

            logger.debug("Redrawing colliding SKUs", collisions=len(collisions))
            for record in collisions:
                record["sku"] = self.generator.sku_for(record["brand"], record["category"])
            pending = collisions

        raise GenerationError(
            f"Could not draw unique SKUs after {self.sku_max_attempts} attempts"
        )

    async def generate_and_persist(
        self,
        count: int,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> int:
        """
        Generate ``count`` products and store them atomically.

        Args:
            count: Number of products; non-positive counts are a no-op
            cancel_event: Checked before each batch; once set, the run
                stops and everything inserted so far is rolled back.
                Deadlines are enforced through this event: cancelling the
                task instead interrupts a statement, which invalidates the
                shared connection (and empties an in-memory store)

        Returns:
            Number of products persisted

        Raises:
            GenerationCancelled: If ``cancel_event`` was set mid-run
            GenerationError: If any insert failed, in which case nothing is
                persisted, or if the index rebuild failed after commit
        """
        batches = self.batch_count(count)
        if batches == 0:
            logger.warning("Nothing to generate", requested=count)
            return 0

        now = utcnow()
        remaining = count
        seen: Set[str] = set()

        logger.info("Product generation started", count=count, batches=batches)

        start_time = time.perf_counter()

        try:
            async with self.database.session() as session:
                for batch_number in range(1, batches + 1):
                    if cancel_event is not None and cancel_event.is_set():
                        raise GenerationCancelled(
                            f"Product generation cancelled before batch {batch_number}"
                        )

                    size = min(self.batch_size, remaining)
                    records = self.generator.generate(size, now=now)
                    await self._ensure_unique_skus(session, records, seen)

                    for record in records:
                        await session.execute(insert(Product).values(**record))

                    remaining -= size
                    logger.debug(
                        "Batch inserted",
                        batch=batch_number,
                        batches=batches,
                        size=size,
                    )
        except GenerationCancelled:
            GENERATION_RUNS.labels(status="cancelled").inc()
            logger.warning("Product generation cancelled and rolled back", count=count)
            raise
        except GenerationError:
            GENERATION_RUNS.labels(status="error").inc()
            logger.error("Product generation rolled back", count=count)
            raise
        except SQLAlchemyError as e:
            GENERATION_RUNS.labels(status="error").inc()
            logger.error("Product generation rolled back", count=count, error=str(e))
            raise GenerationError(f"Failed to generate products: {e}") from e

        persisted = count
        try:
            await rebuild_search_index(self.database)
        except PersistenceError as e:
            GENERATION_RUNS.labels(status="error").inc()
            PRODUCTS_GENERATED.inc(persisted)
            logger.error(
                "Search index rebuild failed; generated products remain stored",
                count=persisted,
                error=e.message,
            )
            raise GenerationError(
                f"Persisted {persisted} products but the search index rebuild failed"
            ) from e

        GENERATION_RUNS.labels(status="success").inc()
        PRODUCTS_GENERATED.inc(persisted)
        GENERATION_TIME.observe(time.perf_counter() - start_time)

        logger.info("Product generation completed", count=persisted)
        return persisted
