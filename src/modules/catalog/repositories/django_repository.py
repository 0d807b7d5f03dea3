"""Django ORM implementation of the catalog repositories.

Satisfies ``IProductRepository`` / ``ICategoryRepository`` using
Django's QuerySet API.  Look-ups follow the Null Object pattern:
they return ``None`` instead of raising; the Service Layer decides how
to translate a missing entity into a domain failure.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import Count

from modules.catalog.filters import ProductFilter
from modules.catalog.models import Category, Product
from modules.catalog.repositories.interfaces import (
    ICategoryRepository,
    IProductRepository,
)

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def _base_queryset(self) -> "models.QuerySet[Product]":
        return Product.objects.select_related("category").order_by("-created_at", "-id")

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product (with its category) by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._base_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Product]:
        try:
            return (
                Product.objects.select_for_update()
                .select_related("category")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def search(
        self, search: Optional[str] = None, category_id: Optional[UUID] = None
    ) -> "models.QuerySet[Product]":
        filterset = ProductFilter(
            data={
                "search": search or "",
                "category_id": str(category_id) if category_id else "",
            },
            queryset=self._base_queryset(),
        )
        return filterset.qs

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info(
            "product.saved",
            product_id=str(entity.id),
            category_id=str(entity.category_id),
        )
        return entity

    def delete(self, id: str) -> bool:
        """Physically delete a product by ID.

        Returns ``True`` if a row was removed.  Fails with
        ``ProtectedError`` while cart items still reference it.
        """
        try:
            deleted, _ = Product.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            return False
        return deleted > 0


class CategoryDjangoRepository(ICategoryRepository):
    """Concrete Category repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Category]:
        try:
            return Category.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def exists(self, id: str) -> bool:
        try:
            return Category.objects.filter(id=id).exists()
        except (ValueError, ValidationError):
            return False

    def list(self) -> List[Category]:
        queryset = Category.objects.annotate(product_count=Count("products"))
        return list(queryset.order_by("name", "id"))

    @transaction.atomic
    def save(self, entity: Category) -> Category:
        entity.save()
        logger.info("category.saved", category_id=str(entity.id), name=entity.name)
        return entity
