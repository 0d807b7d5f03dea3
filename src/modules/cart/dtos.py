"""Cart DTOs for the Service Layer.

- ``AddToCartDTO``: input for add-to-cart (quantity defaults to 1).
- ``RemoveFromCartDTO``: the (user, product) key of a line to remove.
- ``CartSummary``: totals computed over a user's cart.
- ``CartView``: a user's cart lines plus their summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Iterable, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.cart.models import MAX_LINE_QUANTITY, USER_ID_MAX_LENGTH

if TYPE_CHECKING:
    from modules.cart.models import CartItem

CENTS = Decimal("0.01")


def _user_id_not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("User ID is required.")
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class AddToCartDTO(BaseModel):
    """Immutable DTO for add-to-cart requests."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(max_length=USER_ID_MAX_LENGTH)
    product_id: UUID
    quantity: int = Field(default=1, ge=1, le=MAX_LINE_QUANTITY)

    @field_validator("user_id")
    @classmethod
    def user_id_must_not_be_empty(cls, v: str) -> str:
        return _user_id_not_blank(v)


class RemoveFromCartDTO(BaseModel):
    """Immutable DTO identifying one cart line."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(max_length=USER_ID_MAX_LENGTH)
    product_id: UUID

    @field_validator("user_id")
    @classmethod
    def user_id_must_not_be_empty(cls, v: str) -> str:
        return _user_id_not_blank(v)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class CartSummary(BaseModel):
    """Cart totals.

    - ``total_items``: sum of line quantities.
    - ``subtotal``: sum of price x quantity, rounded half-up to cents.
    - ``item_count``: number of distinct lines.
    """

    model_config = ConfigDict(frozen=True)

    total_items: int
    subtotal: Decimal
    item_count: int

    @classmethod
    def from_items(cls, items: Iterable[CartItem]) -> CartSummary:
        items = list(items)
        subtotal = sum((item.line_total for item in items), Decimal("0"))
        return cls(
            total_items=sum(item.quantity for item in items),
            subtotal=subtotal.quantize(CENTS, rounding=ROUND_HALF_UP),
            item_count=len(items),
        )


@dataclass(frozen=True)
class CartView:
    items: List[CartItem]
    summary: CartSummary
