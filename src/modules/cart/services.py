"""Cart service layer (Use Cases).

``CartService`` is the only writer of cart lines and owns the stock
rule: a line's quantity never exceeds the stock of its product at the
moment of the check.

Adding to a cart is a read-check-write sequence (read the current line,
compare against stock, write the merged quantity).  It runs inside one
transaction with the product row locked (``SELECT ... FOR UPDATE``), so
concurrent adds of the same product are serialized and cannot both pass
the check against a stale quantity.  The merge itself is a conditional
``UPDATE ... WHERE quantity <= ceiling - n``, so it stays correct on
backends that ignore row locks (SQLite).  The unique (user, product)
constraint backs this up: a duplicate insert fails instead of creating
a second line.

Stock itself is never decremented here; cart quantities are
reservation intent only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.cart.dtos import CartSummary, CartView
from modules.cart.exceptions import (
    CartItemLimitExceeded,
    CartItemNotFound,
    InsufficientStock,
)
from modules.cart.models import MAX_LINE_QUANTITY
from modules.catalog.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.cart.dtos import AddToCartDTO, RemoveFromCartDTO
    from modules.cart.models import CartItem
    from modules.cart.repositories.interfaces import ICartRepository
    from modules.catalog.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class CartService:
    """Application service for cart use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        cart_repository: ICartRepository,
        product_repository: IProductRepository,
        max_line_quantity: int = MAX_LINE_QUANTITY,
    ) -> None:
        self._cart_repo = cart_repository
        self._product_repo = product_repository
        self._max_line_quantity = max_line_quantity

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_to_cart(self, dto: AddToCartDTO) -> CartItem:
        """Add ``dto.quantity`` units of a product to a user's cart.

        Creates the line on first add, otherwise merges into it.

        Raises:
            ProductNotFound: the product does not exist.
            InsufficientStock: stock cannot cover the resulting quantity.
            CartItemLimitExceeded: the merged line would exceed the maximum.
        """
        product_id = str(dto.product_id)
        log = logger.bind(user_id=dto.user_id, product_id=product_id)

        product = self._product_repo.get_for_update(product_id)
        if not product:
            raise ProductNotFound("Product not found")

        existing = self._cart_repo.get(dto.user_id, product_id)

        if existing is None:
            if product.stock < dto.quantity:
                log.warning("cart.insufficient_stock", requested=dto.quantity, stock=product.stock)
                raise InsufficientStock(
                    f"Only {product.stock} items available in stock",
                    available=product.stock,
                )
            item = self._cart_repo.create(dto.user_id, product_id, dto.quantity)
            log.info("cart.item_added", quantity=dto.quantity)
        else:
            new_quantity = existing.quantity + dto.quantity
            if product.stock < new_quantity:
                available = max(product.stock - existing.quantity, 0)
                log.warning(
                    "cart.insufficient_stock",
                    requested=dto.quantity,
                    in_cart=existing.quantity,
                    stock=product.stock,
                )
                raise InsufficientStock(
                    f"Cannot add {dto.quantity} more items. "
                    f"Only {available} more available",
                    available=available,
                )
            if new_quantity > self._max_line_quantity:
                raise CartItemLimitExceeded(
                    f"Quantity cannot exceed {self._max_line_quantity}"
                )
            ceiling = min(product.stock, self._max_line_quantity)
            if not self._cart_repo.increment(
                dto.user_id, product_id, dto.quantity, ceiling=ceiling
            ):
                # The line moved after it was read; report against its current state.
                current = self._cart_repo.get(dto.user_id, product_id)
                in_cart = current.quantity if current else 0
                available = max(product.stock - in_cart, 0)
                log.warning(
                    "cart.merge_rejected",
                    requested=dto.quantity,
                    in_cart=in_cart,
                    stock=product.stock,
                )
                raise InsufficientStock(
                    f"Cannot add {dto.quantity} more items. "
                    f"Only {available} more available",
                    available=available,
                )
            item = existing
            log.info("cart.item_merged", quantity=new_quantity)

        return self._cart_repo.get(dto.user_id, product_id) or item

    @transaction.atomic
    def remove_from_cart(self, dto: RemoveFromCartDTO) -> None:
        """Remove a line from a user's cart.

        Raises:
            CartItemNotFound: the user has no line for this product.
        """
        if not self._cart_repo.delete_item(dto.user_id, str(dto.product_id)):
            raise CartItemNotFound("Item not found in cart")
        logger.info(
            "cart.item_removed", user_id=dto.user_id, product_id=str(dto.product_id)
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_cart(self, user_id: str) -> CartView:
        """A user's cart lines (newest first) with totals."""
        items = self._cart_repo.list_by_user(user_id)
        return CartView(items=items, summary=CartSummary.from_items(items))
