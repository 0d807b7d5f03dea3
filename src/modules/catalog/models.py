"""Catalog models: Category and Product.

Rules implemented at storage level:
- Product price is positive and at most 999999 (check constraint).
- Product stock is never negative (``PositiveIntegerField`` + check).
- Product -> Category is ``PROTECT``: the database never cascades.
  Deleting a category that still has products fails loudly.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel

TITLE_MAX_LENGTH = 200
PRODUCT_DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_NAME_MAX_LENGTH = 100
CATEGORY_DESCRIPTION_MAX_LENGTH = 500
MAX_PRICE = Decimal("999999")


class Category(BaseModel):
    """Product grouping.  Names are not required to be unique."""

    name = models.CharField(max_length=CATEGORY_NAME_MAX_LENGTH)
    description = models.CharField(
        max_length=CATEGORY_DESCRIPTION_MAX_LENGTH, blank=True, null=True
    )

    class Meta:
        db_table = "categories"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Product(BaseModel):
    """Sellable item.  ``stock`` is the quantity available for reservation."""

    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    description = models.CharField(
        max_length=PRODUCT_DESCRIPTION_MAX_LENGTH, blank=True, null=True
    )
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01")), MaxValueValidator(MAX_PRICE)],
    )
    stock = models.PositiveIntegerField(default=0)
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )

    class Meta:
        db_table = "products"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["category", "-created_at"], name="products_cat_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0) & models.Q(price__lte=MAX_PRICE),
                name="products_price_range",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return self.title
