"""Catalog repositories package."""

from modules.catalog.repositories.django_repository import (
    CategoryDjangoRepository,
    ProductDjangoRepository,
)
from modules.catalog.repositories.interfaces import (
    ICategoryRepository,
    IProductRepository,
)

__all__ = [
    "CategoryDjangoRepository",
    "ICategoryRepository",
    "IProductRepository",
    "ProductDjangoRepository",
]
