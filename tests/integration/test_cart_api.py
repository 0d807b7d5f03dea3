"""Integration tests for the Cart API.

Covers:
- Add (create / merge), stock rule and per-line maximum.
- Cart retrieval with summary.
- Line removal.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from modules.cart.models import CartItem

pytestmark = pytest.mark.integration

URL = "/api/cart"
USER_ID = "user-1"


def _add(api_client, product, quantity=None, user_id=USER_ID):
    payload = {"userId": user_id, "productId": str(product.id)}
    if quantity is not None:
        payload["quantity"] = quantity
    return api_client.post(URL, payload, format="json")


# ===========================================================================
# Add
# ===========================================================================


class TestAddToCart:
    def test_created(self, api_client, product):
        response = _add(api_client, product, 3)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["userId"] == USER_ID
        assert data["productId"] == str(product.id)
        assert data["quantity"] == 3
        assert data["product"]["title"] == "Widget"
        assert data["product"]["category"]["name"] == "Electronics"

    def test_quantity_defaults_to_one(self, api_client, product):
        assert _add(api_client, product).json()["data"]["quantity"] == 1

    def test_merges_same_product(self, api_client, product):
        _add(api_client, product, 2)
        response = _add(api_client, product, 3)

        assert response.json()["data"]["quantity"] == 5
        assert CartItem.objects.count() == 1

    def test_stock_scenario(self, api_client, make_product):
        product = make_product(stock=5)

        assert _add(api_client, product, 3).status_code == 201

        rejected = _add(api_client, product, 3)
        assert rejected.status_code == 400
        assert rejected.json() == {
            "success": False,
            "error": "Insufficient Stock",
            "message": "Cannot add 3 more items. Only 2 more available",
            "available": 2,
        }

        accepted = _add(api_client, product, 2)
        assert accepted.json()["data"]["quantity"] == 5

    def test_new_line_beyond_stock(self, api_client, make_product):
        product = make_product(stock=2)

        response = _add(api_client, product, 3)

        assert response.status_code == 400
        assert response.json()["message"] == "Only 2 items available in stock"
        assert not CartItem.objects.exists()

    def test_out_of_stock_product(self, api_client, make_product):
        response = _add(api_client, make_product(stock=0), 1)
        assert response.json()["available"] == 0

    def test_merge_beyond_line_maximum(self, api_client, make_product):
        product = make_product(stock=1000)
        _add(api_client, product, 60)

        response = _add(api_client, product, 60)

        assert response.status_code == 400
        assert response.json()["details"] == [
            {"field": "quantity", "message": "Quantity cannot exceed 100"}
        ]

    @pytest.mark.parametrize("quantity", [0, -1, 101, "many"])
    def test_invalid_quantity(self, api_client, product, quantity):
        response = _add(api_client, product, quantity)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "quantity"

    def test_unknown_product(self, api_client):
        response = api_client.post(
            URL, {"userId": USER_ID, "productId": str(uuid.uuid4())}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_missing_user_id(self, api_client, product):
        response = api_client.post(URL, {"productId": str(product.id)}, format="json")

        assert response.status_code == 400
        assert response.json()["details"] == [
            {"field": "userId", "message": "User ID is required."}
        ]

    def test_stock_is_not_decremented(self, api_client, product):
        _add(api_client, product, 4)
        product.refresh_from_db()
        assert product.stock == 10


# ===========================================================================
# Get
# ===========================================================================


class TestGetCart:
    def test_items_and_summary(self, api_client, make_product, make_cart_item):
        first = make_product(title="First", price=Decimal("10.00"))
        second = make_product(title="Second", price=Decimal("0.10"))
        make_cart_item(first, quantity=2)
        make_cart_item(second, quantity=3)

        response = api_client.get(URL, {"userId": USER_ID})

        assert response.status_code == 200
        data = response.json()["data"]
        assert [i["product"]["title"] for i in data["items"]] == ["Second", "First"]
        assert data["items"][0]["product"]["description"] == "A fine widget"
        assert data["summary"] == {"totalItems": 5, "subtotal": "20.30", "itemCount": 2}

    def test_empty_cart(self, api_client):
        data = api_client.get(URL, {"userId": "nobody"}).json()["data"]

        assert data["items"] == []
        assert data["summary"] == {"totalItems": 0, "subtotal": "0.00", "itemCount": 0}

    def test_user_id_required(self, api_client):
        response = api_client.get(URL)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "userId"


# ===========================================================================
# Remove
# ===========================================================================


class TestRemoveFromCart:
    def test_removed(self, api_client, product, make_cart_item):
        make_cart_item(product)

        response = api_client.delete(
            URL, {"userId": USER_ID, "productId": str(product.id)}, format="json"
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Item removed from cart successfully",
        }
        assert not CartItem.objects.exists()

    def test_other_users_line_untouched(self, api_client, product, make_cart_item):
        make_cart_item(product, user_id="someone-else")

        response = api_client.delete(
            URL, {"userId": USER_ID, "productId": str(product.id)}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Item not found in cart"
        assert CartItem.objects.count() == 1

    def test_invalid_product_id(self, api_client):
        response = api_client.delete(
            URL, {"userId": USER_ID, "productId": "abc"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["details"] == [
            {"field": "productId", "message": "Invalid product ID format."}
        ]
