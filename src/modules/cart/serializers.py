"""Cart DRF serializers for API input/output."""

from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

from modules.cart.models import MAX_LINE_QUANTITY, USER_ID_MAX_LENGTH, CartItem
from modules.catalog.models import Product
from modules.catalog.serializers import CategorySummarySerializer

_USER_ID_ERRORS = {
    "required": "User ID is required.",
    "blank": "User ID is required.",
}
_PRODUCT_ID_ERRORS = {
    "required": "Product ID is required.",
    "invalid": "Invalid product ID format.",
}

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class AddToCartSerializer(serializers.Serializer):
    userId = serializers.CharField(max_length=USER_ID_MAX_LENGTH, error_messages=_USER_ID_ERRORS)
    productId = serializers.UUIDField(error_messages=_PRODUCT_ID_ERRORS)
    quantity = serializers.IntegerField(
        min_value=1,
        max_value=MAX_LINE_QUANTITY,
        default=lambda: settings.CART_DEFAULT_QUANTITY,
        error_messages={
            "min_value": "Quantity must be positive.",
            "max_value": f"Quantity cannot exceed {MAX_LINE_QUANTITY}.",
        },
    )


class CartQuerySerializer(serializers.Serializer):
    userId = serializers.CharField(max_length=USER_ID_MAX_LENGTH, error_messages=_USER_ID_ERRORS)


class RemoveFromCartSerializer(serializers.Serializer):
    userId = serializers.CharField(max_length=USER_ID_MAX_LENGTH, error_messages=_USER_ID_ERRORS)
    productId = serializers.UUIDField(error_messages=_PRODUCT_ID_ERRORS)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class CartProductSerializer(serializers.ModelSerializer):
    """Product summary embedded in a cart line."""

    category = CategorySummarySerializer(read_only=True)

    class Meta:
        model = Product
        fields = ["id", "title", "price", "stock", "category"]
        read_only_fields = fields


class CartProductDetailSerializer(CartProductSerializer):
    class Meta(CartProductSerializer.Meta):
        fields = ["id", "title", "description", "price", "stock", "category"]
        read_only_fields = fields


class CartItemSerializer(serializers.ModelSerializer):
    userId = serializers.CharField(source="user_id", read_only=True)
    productId = serializers.UUIDField(source="product_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    product = CartProductSerializer(read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "userId",
            "productId",
            "quantity",
            "createdAt",
            "updatedAt",
            "product",
        ]
        read_only_fields = fields


class CartItemDetailSerializer(CartItemSerializer):
    product = CartProductDetailSerializer(read_only=True)


class CartSummarySerializer(serializers.Serializer):
    totalItems = serializers.IntegerField(source="total_items")
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    itemCount = serializers.IntegerField(source="item_count")
