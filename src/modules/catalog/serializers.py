"""Catalog DRF serializers for API input/output.

Input serializers validate request shape (camelCase on the wire) before
anything reaches the Service Layer, which receives Pydantic DTOs from
``dtos.py``.  Output serializers render model instances.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from modules.catalog.models import (
    CATEGORY_DESCRIPTION_MAX_LENGTH,
    CATEGORY_NAME_MAX_LENGTH,
    MAX_PRICE,
    PRODUCT_DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Category,
    Product,
)
from modules.core.pagination import MAX_LIMIT, MAX_PAGE

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class ProductQuerySerializer(serializers.Serializer):
    """Query string of ``GET /api/products``."""

    search = serializers.CharField(required=False, allow_blank=True)
    categoryId = serializers.UUIDField(
        required=False,
        error_messages={"invalid": "Invalid category ID format."},
    )
    page = serializers.IntegerField(
        min_value=1,
        max_value=MAX_PAGE,
        default=lambda: settings.CATALOG_DEFAULT_PAGE,
        error_messages={"max_value": f"Page cannot exceed {MAX_PAGE}."},
    )
    limit = serializers.IntegerField(
        min_value=1,
        max_value=MAX_LIMIT,
        default=lambda: settings.CATALOG_DEFAULT_LIMIT,
        error_messages={"max_value": f"Limit cannot exceed {MAX_LIMIT}."},
    )


class ProductIdSerializer(serializers.Serializer):
    """Product id taken from the URL path."""

    id = serializers.UUIDField(
        error_messages={"invalid": "Invalid product ID format."},
    )


class ProductInputSerializer(serializers.Serializer):
    """Body of product create (full) and update (``partial=True``)."""

    title = serializers.CharField(
        max_length=TITLE_MAX_LENGTH,
        error_messages={
            "blank": "Title is required.",
            "max_length": f"Title must be less than {TITLE_MAX_LENGTH} characters.",
        },
    )
    description = serializers.CharField(
        max_length=PRODUCT_DESCRIPTION_MAX_LENGTH,
        required=False,
        allow_blank=True,
        allow_null=True,
    )
    price = serializers.DecimalField(
        max_digits=8,
        decimal_places=2,
        min_value=Decimal("0.01"),
        max_value=MAX_PRICE,
        error_messages={
            "min_value": "Price must be positive.",
            "max_value": "Price is too high.",
        },
    )
    stock = serializers.IntegerField(
        min_value=0,
        default=0,
        error_messages={"min_value": "Stock cannot be negative."},
    )
    categoryId = serializers.UUIDField(
        error_messages={"invalid": "Invalid category ID format."},
    )


class CategoryInputSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=CATEGORY_NAME_MAX_LENGTH,
        error_messages={"blank": "Name is required."},
    )
    description = serializers.CharField(
        max_length=CATEGORY_DESCRIPTION_MAX_LENGTH,
        required=False,
        allow_blank=True,
        allow_null=True,
    )


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class CategorySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name"]
        read_only_fields = fields


class CategoryDetailSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "description"]
        read_only_fields = fields


class CategorySerializer(serializers.ModelSerializer):
    """Category with timestamps and the number of products in it."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    productCount = serializers.IntegerField(source="product_count", read_only=True)

    class Meta:
        model = Category
        fields = ["id", "name", "description", "createdAt", "updatedAt", "productCount"]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Product joined with its category's id and name."""

    categoryId = serializers.UUIDField(source="category_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    category = CategorySummarySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "title",
            "description",
            "price",
            "stock",
            "categoryId",
            "createdAt",
            "updatedAt",
            "category",
        ]
        read_only_fields = fields


class ProductDetailSerializer(ProductSerializer):
    """Product joined with full category detail."""

    category = CategoryDetailSerializer(read_only=True)
