"""
Full-Text Product Search

User input is sanitized before it reaches the FTS5 query parser, then turned
into a prefix query (``"iphone"`` becomes ``"iphone*"``). Hits are joined back
to the products table by row id and ordered by FTS rank.
"""

import re
from typing import Any, List

import structlog
from sqlalchemy import column, select, table, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from catalog.database.connection import Database
from catalog.database.models import SEARCH_INDEX_TABLE, Product
from catalog.errors import PersistenceError, ValidationError
from catalog.schemas.product import ProductResponse

logger = structlog.get_logger(__name__)

MAX_QUERY_LENGTH = 100

_UNSAFE_CHARACTERS = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")

search_index = table(SEARCH_INDEX_TABLE, column("rowid"), column("rank"))


def sanitize(raw: str) -> str:
    """
    Neutralize FTS5 query syntax in user input.

    Every character other than word characters, whitespace and hyphens
    becomes a space; whitespace runs collapse to one space; the result is
    trimmed.
    """
    cleaned = _UNSAFE_CHARACTERS.sub(" ", raw)
    return _WHITESPACE.sub(" ", cleaned).strip()


def build_match_query(term: str) -> str:
    """Prefix-match query for a raw search term"""
    return f"{sanitize(term)}*"


def validate_search_query(raw: Any) -> str:
    """
    Validate the ``q`` parameter of a search request.

    Returns:
        The trimmed search term

    Raises:
        ValidationError: With a message naming the violated rule
    """
    if not raw or not isinstance(raw, str):
        raise ValidationError("Query parameter 'q' is required")

    term = raw.strip()
    if not term:
        raise ValidationError("Search query cannot be empty")
    if len(term) > MAX_QUERY_LENGTH:
        raise ValidationError(f"Search query too long (max {MAX_QUERY_LENGTH} characters)")

    return term


# Raised by SQLite while parsing a MATCH expression. Hyphens make FTS5 read
# the token before them as a column name, hence "no such column".
_QUERY_ERROR_MARKERS = ("fts5:", "no such column", "unknown special query")


def _is_query_syntax_error(error: OperationalError) -> bool:
    message = str(error.orig)
    return any(marker in message for marker in _QUERY_ERROR_MARKERS)


class ProductSearch:
    """Search executor over the products full-text index"""

    def __init__(self, database: Database):
        self.database = database

    async def search(self, term: str) -> List[ProductResponse]:
        """
        Search products by prefix match on name, description, category,
        brand and sku.

        A term that sanitizes to nothing, or that still forms invalid FTS5
        syntax (a dangling ``AND``, a hyphenated token), matches nothing.

        Raises:
            PersistenceError: On any other store failure
        """
        sanitized = sanitize(term)
        if not sanitized:
            logger.debug("Search term empty after sanitizing", term=term)
            return []

        match_query = f"{sanitized}*"
        stmt = (
            select(Product)
            .join(search_index, search_index.c.rowid == Product.id)
            .where(text(f"{SEARCH_INDEX_TABLE} MATCH :match_query").bindparams(match_query=match_query))
            .order_by(search_index.c.rank)
        )

        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                products = [ProductResponse.model_validate(p) for p in result.scalars().all()]
        except OperationalError as e:
            if _is_query_syntax_error(e):
                logger.warning("Search query rejected by index", match_query=match_query, error=str(e.orig))
                return []
            raise PersistenceError("Search failed") from e
        except SQLAlchemyError as e:
            raise PersistenceError("Search failed") from e

        logger.debug("Search completed", match_query=match_query, results=len(products))
        return products


async def rebuild_search_index(database: Database) -> None:
    """Rebuild the full-text index from the products table."""
    try:
        async with database.session() as session:
            await session.execute(
                text(f"INSERT INTO {SEARCH_INDEX_TABLE}({SEARCH_INDEX_TABLE}) VALUES('rebuild')")
            )
    except SQLAlchemyError as e:
        raise PersistenceError("Search index rebuild failed") from e

    logger.info("Search index rebuilt")
