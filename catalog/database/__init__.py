"""
Database Module
"""
from .connection import Database
from .models import AvailabilityStatus, Base, Product

__all__ = [
    "Database",
    "AvailabilityStatus",
    "Base",
    "Product",
]
