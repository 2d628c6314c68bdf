"""
Product Catalog Service

CRUD and full-text search over a product catalog, with bulk synthetic data
generation.
"""

__version__ = "1.0.0"
