from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.cart.models import CartItem
from modules.catalog.models import Category, Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def category():
    return Category.objects.create(name="Electronics", description="Gadgets")


@pytest.fixture()
def make_product(category):
    """Factory for persisted products (defaults: price 19.99, stock 10)."""

    def _make(**overrides) -> Product:
        defaults = {
            "title": "Widget",
            "description": "A fine widget",
            "price": Decimal("19.99"),
            "stock": 10,
            "category": category,
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make


@pytest.fixture()
def product(make_product):
    return make_product()


@pytest.fixture()
def make_cart_item():
    def _make(product: Product, user_id: str = "user-1", quantity: int = 1) -> CartItem:
        return CartItem.objects.create(user_id=user_id, product=product, quantity=quantity)

    return _make
