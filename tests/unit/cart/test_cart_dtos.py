"""Unit tests for cart DTOs and the cart summary."""

from __future__ import annotations

import uuid
from decimal import Decimal
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from modules.cart.dtos import AddToCartDTO, CartSummary, RemoveFromCartDTO

pytestmark = pytest.mark.unit


def _line(price: str, quantity: int):
    """Stand-in exposing what ``CartSummary`` reads from a ``CartItem``."""
    return SimpleNamespace(quantity=quantity, line_total=Decimal(price) * quantity)


class TestAddToCartDTO:
    def test_quantity_defaults_to_one(self):
        dto = AddToCartDTO(user_id="u1", product_id=uuid.uuid4())
        assert dto.quantity == 1

    @pytest.mark.parametrize("quantity", [0, -1, 101])
    def test_quantity_out_of_range(self, quantity):
        with pytest.raises(ValidationError):
            AddToCartDTO(user_id="u1", product_id=uuid.uuid4(), quantity=quantity)

    def test_quantity_upper_bound_accepted(self):
        dto = AddToCartDTO(user_id="u1", product_id=uuid.uuid4(), quantity=100)
        assert dto.quantity == 100

    def test_blank_user_id(self):
        with pytest.raises(ValidationError, match="User ID is required"):
            AddToCartDTO(user_id=" ", product_id=uuid.uuid4())

    def test_product_id_must_be_uuid(self):
        with pytest.raises(ValidationError):
            AddToCartDTO(user_id="u1", product_id="abc")


class TestRemoveFromCartDTO:
    def test_valid(self):
        product_id = uuid.uuid4()
        dto = RemoveFromCartDTO(user_id="u1", product_id=str(product_id))
        assert dto.product_id == product_id


class TestCartSummary:
    def test_empty_cart(self):
        summary = CartSummary.from_items([])
        assert summary.total_items == 0
        assert summary.item_count == 0
        assert summary.subtotal == Decimal("0.00")

    def test_totals(self):
        summary = CartSummary.from_items([_line("10.00", 2), _line("5.50", 1)])
        assert summary.total_items == 3
        assert summary.item_count == 2
        assert summary.subtotal == Decimal("25.50")

    def test_subtotal_is_exact_decimal(self):
        summary = CartSummary.from_items([_line("0.10", 3), _line("0.20", 1)])
        assert summary.subtotal == Decimal("0.50")
        assert str(summary.subtotal) == "0.50"

    def test_subtotal_rounds_half_up(self):
        summary = CartSummary.from_items(
            [SimpleNamespace(quantity=1, line_total=Decimal("1.005"))]
        )
        assert summary.subtotal == Decimal("1.01")
