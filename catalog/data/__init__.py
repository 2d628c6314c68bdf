"""
Data Generation Module
"""
from .generators import BRANDS, CATEGORIES, ProductGenerator

__all__ = [
    "BRANDS",
    "CATEGORIES",
    "ProductGenerator",
]
