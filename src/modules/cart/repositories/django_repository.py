"""Django ORM implementation of the Cart repository."""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F
from django.utils import timezone

from modules.cart.models import CartItem
from modules.cart.repositories.interfaces import ICartRepository

logger = structlog.get_logger(__name__)


class CartDjangoRepository(ICartRepository):
    """Concrete Cart repository backed by Django ORM."""

    def _base_queryset(self) -> "models.QuerySet[CartItem]":
        return CartItem.objects.select_related("product__category").order_by(
            "-created_at", "-id"
        )

    def get(self, user_id: str, product_id: str) -> Optional[CartItem]:
        try:
            return (
                self._base_queryset()
                .filter(user_id=user_id, product_id=product_id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list_by_user(self, user_id: str) -> List[CartItem]:
        return list(self._base_queryset().filter(user_id=user_id))

    def create(self, user_id: str, product_id: str, quantity: int) -> CartItem:
        item = CartItem.objects.create(
            user_id=user_id, product_id=product_id, quantity=quantity
        )
        logger.info(
            "cart_item.created",
            cart_item_id=str(item.id),
            user_id=user_id,
            product_id=str(product_id),
            quantity=quantity,
        )
        return item

    def increment(self, user_id: str, product_id: str, quantity: int, ceiling: int) -> bool:
        # Guard and write are one statement; the database re-checks the
        # current quantity, not the one read earlier.
        updated = CartItem.objects.filter(
            user_id=user_id,
            product_id=product_id,
            quantity__lte=ceiling - quantity,
        ).update(quantity=F("quantity") + quantity, updated_at=timezone.now())
        logger.info(
            "cart_item.incremented",
            user_id=user_id,
            product_id=str(product_id),
            by=quantity,
            ceiling=ceiling,
            updated=updated,
        )
        return updated > 0

    def delete_item(self, user_id: str, product_id: str) -> bool:
        try:
            deleted, _ = CartItem.objects.filter(
                user_id=user_id, product_id=product_id
            ).delete()
        except (ValueError, ValidationError):
            return False
        return deleted > 0

    def delete_by_product(self, product_id: str) -> int:
        deleted, _ = CartItem.objects.filter(product_id=product_id).delete()
        logger.info("cart_item.purged", product_id=str(product_id), count=deleted)
        return deleted
