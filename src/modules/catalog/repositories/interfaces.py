"""Catalog repository interfaces.

Extend ``IRepository[T]`` with the look-ups the catalog services need:
filtered product search, row-locked reads for stock checks, and
categories annotated with product counts.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.catalog.models import Category, Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product entity."""

    @abstractmethod
    def search(
        self, search: Optional[str] = None, category_id: Optional[UUID] = None
    ) -> "models.QuerySet[Product]":
        """Products whose title contains ``search`` and/or in ``category_id``.

        The same queryset backs both the count and the page fetch.
        """

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Must be called inside a transaction.  Returns ``None`` if the
        product does not exist.
        """

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Physically remove a product; ``False`` if nothing matched."""


class ICategoryRepository(IRepository["Category"]):
    """Repository contract for the Category entity."""

    @abstractmethod
    def list(self) -> List[Category]:
        """List categories by name, each annotated with ``product_count``."""

    @abstractmethod
    def exists(self, id: str) -> bool:
        """Whether a category with this ID exists."""
