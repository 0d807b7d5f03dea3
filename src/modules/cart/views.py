"""Cart API views.

A single resource, ``/api/cart``, addressed by ``userId``:

- ``POST``   add a product (merges into an existing line).
- ``GET``    the cart with totals (``?userId=``).
- ``DELETE`` remove one line (body: ``userId``, ``productId``).
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.cart.dtos import AddToCartDTO, RemoveFromCartDTO
from modules.cart.repositories.django_repository import CartDjangoRepository
from modules.cart.serializers import (
    AddToCartSerializer,
    CartItemDetailSerializer,
    CartItemSerializer,
    CartQuerySerializer,
    CartSummarySerializer,
    RemoveFromCartSerializer,
)
from modules.cart.services import CartService
from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.core.responses import confirmation, success


class CartView(APIView):
    serializer_class = CartItemSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CartService(
            cart_repository=CartDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def post(self, request: Request) -> Response:
        body = AddToCartSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        data = body.validated_data

        item = self._service.add_to_cart(
            AddToCartDTO(
                user_id=data["userId"],
                product_id=data["productId"],
                quantity=data["quantity"],
            )
        )
        return success(CartItemSerializer(item).data, status.HTTP_201_CREATED)

    def get(self, request: Request) -> Response:
        params = CartQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        cart = self._service.get_cart(params.validated_data["userId"])
        return success(
            {
                "items": CartItemDetailSerializer(cart.items, many=True).data,
                "summary": CartSummarySerializer(cart.summary).data,
            }
        )

    def delete(self, request: Request) -> Response:
        body = RemoveFromCartSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        data = body.validated_data

        self._service.remove_from_cart(
            RemoveFromCartDTO(user_id=data["userId"], product_id=data["productId"])
        )
        return confirmation("Item removed from cart successfully")
