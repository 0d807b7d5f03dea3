"""CartItem model: one row per (user, product) pair.

- ``(user_id, product)`` is unique at storage level, so repeated adds
  can only ever merge into the existing line.
- ``quantity`` is 1..100.
- The product FK is ``PROTECT``: a cart line can never outlive its
  product.  Product deletion clears cart lines first
  (``modules.catalog.deletion``).
"""

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.catalog.models import Product
from modules.core.models import BaseModel

USER_ID_MAX_LENGTH = 255
MAX_LINE_QUANTITY = 100


class CartItem(BaseModel):
    """Quantity of a product a user intends to buy (reservation intent)."""

    user_id = models.CharField(max_length=USER_ID_MAX_LENGTH, db_index=True)
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="cart_items",
    )
    quantity = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(MAX_LINE_QUANTITY)],
    )

    class Meta:
        db_table = "cart_items"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user_id", "product"],
                name="cart_items_user_product_unique",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1) & models.Q(quantity__lte=MAX_LINE_QUANTITY),
                name="cart_items_quantity_range",
            ),
        ]

    @property
    def line_total(self):
        return self.product.price * self.quantity

    def __str__(self) -> str:
        return f"{self.user_id} - {self.product_id} x{self.quantity}"
