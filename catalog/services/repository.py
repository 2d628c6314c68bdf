"""
Product Repository - Data Access Layer
"""
from typing import List, Optional

import structlog
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.database.connection import Database
from catalog.database.models import Product, utcnow
from catalog.errors import CreationError, DuplicateSkuError, PersistenceError
from catalog.schemas.product import ProductCreate, ProductResponse, ProductUpdate

logger = structlog.get_logger(__name__)


def translate_integrity_error(error: IntegrityError) -> PersistenceError:
    """Map a constraint violation onto the catalog error taxonomy"""
    if "products.sku" in str(error.orig):
        return DuplicateSkuError("Product with this SKU already exists")
    return PersistenceError(f"Constraint violated: {error.orig}")


class ProductRepository:
    """Repository for Product CRUD operations"""

    def __init__(self, database: Database):
        self.database = database

    @staticmethod
    async def _get(session: AsyncSession, product_id: int) -> Optional[Product]:
        result = await session.execute(select(Product).where(Product.id == product_id))
        return result.scalar_one_or_none()

    async def find_all(self) -> List[ProductResponse]:
        """Get all products"""
        try:
            async with self.database.session() as session:
                result = await session.execute(select(Product).order_by(Product.id))
                return [ProductResponse.model_validate(p) for p in result.scalars().all()]
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch products") from e

    async def find_by_id(self, product_id: int) -> Optional[ProductResponse]:
        """Get product by ID"""
        try:
            async with self.database.session() as session:
                product = await self._get(session, product_id)
                return ProductResponse.model_validate(product) if product else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to fetch product {product_id}") from e

    async def count(self) -> int:
        """Get total count of products"""
        try:
            async with self.database.session() as session:
                result = await session.execute(select(func.count(Product.id)))
                return result.scalar() or 0
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to count products") from e

    async def create(self, product_data: ProductCreate) -> ProductResponse:
        """
        Create new product

        Raises:
            DuplicateSkuError: If the SKU is already taken
            CreationError: If the inserted row cannot be read back
        """
        now = utcnow()
        values = product_data.model_dump()
        values.update(created_at=now, updated_at=now)

        try:
            async with self.database.session() as session:
                result = await session.execute(insert(Product).values(**values))
                product_id = result.inserted_primary_key[0]

                product = await self._get(session, product_id)
                if product is None:
                    raise CreationError("Failed to create product")
                created = ProductResponse.model_validate(product)
        except IntegrityError as e:
            raise translate_integrity_error(e) from e
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to create product") from e

        logger.info("Product created", product_id=created.id, sku=created.sku)
        return created

    async def update(self, product_id: int, product_data: ProductUpdate) -> Optional[ProductResponse]:
        """
        Update only the supplied fields of an existing product.

        An update that supplies no fields writes nothing and returns the
        current record unchanged.
        """
        changes = product_data.changes()
        if not changes:
            return await self.find_by_id(product_id)

        changes["updated_at"] = utcnow()

        try:
            async with self.database.session() as session:
                result = await session.execute(
                    update(Product).where(Product.id == product_id).values(**changes)
                )
                if result.rowcount == 0:
                    return None

                product = await self._get(session, product_id)
                updated = ProductResponse.model_validate(product)
        except IntegrityError as e:
            raise translate_integrity_error(e) from e
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to update product {product_id}") from e

        logger.info("Product updated", product_id=product_id, fields=sorted(changes))
        return updated

    async def delete(self, product_id: int) -> bool:
        """Delete product; False when no such product exists"""
        try:
            async with self.database.session() as session:
                result = await session.execute(delete(Product).where(Product.id == product_id))
                deleted = result.rowcount > 0
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to delete product {product_id}") from e

        if deleted:
            logger.info("Product deleted", product_id=product_id)
        return deleted
