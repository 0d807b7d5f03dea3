"""Cart domain exceptions.

Raised by ``CartService`` when stock or cart rules are violated.
``CartConfig.ready`` registers how the error classifier maps each one.
"""

from __future__ import annotations


class CartItemNotFound(Exception):
    """No cart line exists for the given (user, product) pair."""


class InsufficientStock(Exception):
    """The requested quantity exceeds what the product stock allows.

    ``available`` is how many (additional) units could still be added.
    """

    def __init__(self, message: str, available: int) -> None:
        super().__init__(message)
        self.available = available


class CartItemLimitExceeded(Exception):
    """The merged line quantity would exceed the per-line maximum."""

    field = "quantity"
