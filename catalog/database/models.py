"""
Database Models

A single ``products`` table plus the ``products_fts`` FTS5 shadow index.

The index is an external-content table over (name, description, category,
brand, sku) keyed by the product id. It is created and dropped together with
the table and kept in sync by triggers on insert, delete and update of any
indexed column.
"""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    DDL,
    CheckConstraint,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    event,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


class AvailabilityStatus(str, Enum):
    """Product availability enumeration"""
    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"
    LIMITED_STOCK = "limited_stock"


SEARCH_INDEX_TABLE = "products_fts"
SEARCH_INDEX_COLUMNS = ("name", "description", "category", "brand", "sku")


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in the database"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Product(Base):
    """
    Product Table

    ``sku`` is globally unique. ``created_at``/``updated_at`` are stamped by
    the application, never by the store.
    """
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    brand: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    sku: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    release_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    availability_status: Mapped[str] = mapped_column(String(20), nullable=False)
    customer_rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_price_non_negative"),
        CheckConstraint("quantity >= 0", name="check_quantity_non_negative"),
        CheckConstraint(
            "customer_rating >= 0 AND customer_rating <= 5",
            name="check_customer_rating_range",
        ),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, sku='{self.sku}', name='{self.name}')>"


# =============================================================================
# FULL-TEXT INDEX
# =============================================================================

_columns = ", ".join(SEARCH_INDEX_COLUMNS)
_new_values = ", ".join(f"new.{c}" for c in SEARCH_INDEX_COLUMNS)
_old_values = ", ".join(f"old.{c}" for c in SEARCH_INDEX_COLUMNS)

_insert_entry = (
    f"INSERT INTO {SEARCH_INDEX_TABLE}(rowid, {_columns}) VALUES (new.id, {_new_values});"
)
_delete_entry = (
    f"INSERT INTO {SEARCH_INDEX_TABLE}({SEARCH_INDEX_TABLE}, rowid, {_columns}) "
    f"VALUES ('delete', old.id, {_old_values});"
)

SEARCH_INDEX_DDL = [
    f"""
    CREATE VIRTUAL TABLE IF NOT EXISTS {SEARCH_INDEX_TABLE} USING fts5(
        {_columns},
        content='products', content_rowid='id'
    )
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS products_ai AFTER INSERT ON products BEGIN
        {_insert_entry}
    END
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS products_ad AFTER DELETE ON products BEGIN
        {_delete_entry}
    END
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS products_au AFTER UPDATE OF {_columns} ON products BEGIN
        {_delete_entry}
        {_insert_entry}
    END
    """,
]

for _statement in SEARCH_INDEX_DDL:
    event.listen(Product.__table__, "after_create", DDL(_statement))

event.listen(
    Product.__table__,
    "before_drop",
    DDL(f"DROP TABLE IF EXISTS {SEARCH_INDEX_TABLE}"),
)
