"""
Catalog Services Module
"""
from .generation import ProductBulkGenerator
from .repository import ProductRepository
from .search import ProductSearch, rebuild_search_index, sanitize, validate_search_query

__all__ = [
    "ProductBulkGenerator",
    "ProductRepository",
    "ProductSearch",
    "rebuild_search_index",
    "sanitize",
    "validate_search_query",
]
