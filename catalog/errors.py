"""
Catalog error taxonomy

ValidationError maps to 400 responses, PersistenceError and its subclasses
to 500 (DuplicateSkuError to 409 on single-record writes).
"""


class CatalogError(Exception):
    """Base exception for catalog errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Invalid client input"""
    pass


class PersistenceError(CatalogError):
    """Any failure raised by the store"""
    pass


class DuplicateSkuError(PersistenceError):
    """SKU uniqueness constraint violated"""
    pass


class CreationError(PersistenceError):
    """Created product could not be read back"""
    pass


class GenerationError(PersistenceError):
    """Bulk generation failed and was rolled back"""
    pass


class GenerationCancelled(GenerationError):
    """Bulk generation was cancelled before completion"""
    pass
