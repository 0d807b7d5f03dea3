"""Cart repository interface.

Cart lines are addressed by their natural (user, product) key.
``CartService`` is the only writer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from modules.cart.models import CartItem


class ICartRepository(ABC):
    """Repository contract for cart line items."""

    @abstractmethod
    def get(self, user_id: str, product_id: str) -> Optional[CartItem]:
        """Retrieve the line for (user, product), with product + category."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[CartItem]:
        """All lines of a user's cart, newest first."""

    @abstractmethod
    def create(self, user_id: str, product_id: str, quantity: int) -> CartItem:
        """Insert a new line.  Raises ``IntegrityError`` on a duplicate key."""

    @abstractmethod
    def increment(self, user_id: str, product_id: str, quantity: int, ceiling: int) -> bool:
        """Add ``quantity`` to the line as one conditional UPDATE.

        The row only changes while the result stays within ``ceiling``;
        returns ``False`` when no row matched (line gone or ceiling hit).
        """

    @abstractmethod
    def delete_item(self, user_id: str, product_id: str) -> bool:
        """Remove the line for (user, product).  ``False`` if there was none."""

    @abstractmethod
    def delete_by_product(self, product_id: str) -> int:
        """Remove every line referencing a product; returns how many."""
