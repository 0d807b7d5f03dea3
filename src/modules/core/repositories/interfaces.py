"""Generic repository contract.

Services receive repositories through their constructors and only see
these abstractions; the Django ORM stays behind the concrete
``*DjangoRepository`` classes.  Look-ups return ``None`` for a missing
or malformed id rather than raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Read-by-id and save over a single entity type ``T``."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """The entity with this primary key, or ``None``."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Insert or update ``entity``."""
