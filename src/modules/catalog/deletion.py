"""Cascading product deletion.

Cart lines reference products through a ``PROTECT`` foreign key, so
the database refuses to drop a product that is still in a cart.  This
service removes the dependent cart lines and then the product inside a
single transaction: either both steps commit or neither does.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.catalog.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.cart.repositories.interfaces import ICartRepository
    from modules.catalog.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDeletionService:
    def __init__(
        self,
        product_repository: IProductRepository,
        cart_repository: ICartRepository,
    ) -> None:
        self._product_repo = product_repository
        self._cart_repo = cart_repository

    @transaction.atomic
    def delete_product(self, id: str) -> int:
        """Delete a product and every cart line referencing it.

        Returns the number of cart lines removed.

        Raises:
            ProductNotFound: the product does not exist.
        """
        product = self._product_repo.get_for_update(id)
        if not product:
            raise ProductNotFound("Product not found")

        log = logger.bind(product_id=str(product.id))

        removed = self._cart_repo.delete_by_product(str(product.id))
        if not self._product_repo.delete(str(product.id)):
            # Raising rolls back the cart purge.
            raise ProductNotFound("Product not found")

        log.info("product.deleted", cart_items_removed=removed)
        return removed
