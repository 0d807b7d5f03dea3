"""Catalog service layer (Use Cases).

Orchestrates catalog management for the Product and Category entities,
delegating persistence to injected repositories.

Rules enforced here:
- A product must reference an existing category (on create and on
  category change).
- Price / stock / length rules are validated by the DTOs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.catalog.exceptions import CategoryDoesNotExist, ProductNotFound
from modules.catalog.models import Category, Product

if TYPE_CHECKING:
    from modules.catalog.dtos import CreateCategoryDTO, CreateProductDTO, UpdateProductDTO
    from modules.catalog.repositories.interfaces import (
        ICategoryRepository,
        IProductRepository,
    )

logger = structlog.get_logger(__name__)


class CategoryService:
    """Application service for Category use-cases."""

    def __init__(self, repository: ICategoryRepository) -> None:
        self._repo = repository

    def list_categories(self) -> List[Category]:
        """Categories ordered by name, each with ``product_count``."""
        return self._repo.list()

    @transaction.atomic
    def create_category(self, dto: CreateCategoryDTO) -> Category:
        category = Category(name=dto.name, description=dto.description)
        category = self._repo.save(category)
        category.product_count = 0
        logger.info("category.created", category_id=str(category.id))
        return category


class ProductService:
    """Application service for Product create / update / retrieve.

    Listing lives in ``ProductQueryService``; deletion in
    ``ProductDeletionService``.
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        category_repository: ICategoryRepository,
    ) -> None:
        self._repo = product_repository
        self._category_repo = category_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product in an existing category.

        Raises:
            CategoryDoesNotExist: ``dto.category_id`` is unknown.
        """
        self._ensure_category(str(dto.category_id))

        product = Product(
            title=dto.title,
            description=dto.description,
            price=dto.price,
            stock=dto.stock,
            category_id=dto.category_id,
        )
        product = self._repo.save(product)
        logger.info("product.created", product_id=str(product.id))
        return self._repo.get_by_id(str(product.id)) or product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields to an existing product.

        Raises:
            ProductNotFound: the product does not exist.
            CategoryDoesNotExist: a new ``category_id`` is unknown.
        """
        product = self._repo.get_for_update(id)
        if not product:
            raise ProductNotFound("Product not found")

        changes = dto.changes()
        if "category_id" in changes:
            self._ensure_category(str(changes["category_id"]))

        for field, value in changes.items():
            setattr(product, field, value)

        self._repo.save(product)
        logger.info("product.updated", product_id=str(id), fields=sorted(changes))
        return self._repo.get_by_id(id) or product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: str) -> Product:
        """Retrieve a single product with its category.

        Raises:
            ProductNotFound: the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound("Product not found")
        return product

    def _ensure_category(self, category_id: str) -> None:
        if not self._category_repo.exists(category_id):
            logger.warning("product.unknown_category", category_id=category_id)
            raise CategoryDoesNotExist("Category does not exist")
