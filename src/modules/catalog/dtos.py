"""Catalog DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateCategoryDTO``: input for category creation.
- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``ProductQueryDTO``: search / filter / page parameters for listing.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.catalog.models import (
    CATEGORY_DESCRIPTION_MAX_LENGTH,
    CATEGORY_NAME_MAX_LENGTH,
    MAX_PRICE,
    PRODUCT_DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from modules.core.pagination import MAX_LIMIT, MAX_PAGE

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _check_price(v: Optional[Decimal]) -> Optional[Decimal]:
    if v is None:
        return v
    if v <= 0:
        raise ValueError("Price must be positive.")
    if v > MAX_PRICE:
        raise ValueError("Price is too high.")
    return v


def _check_stock(v: Optional[int]) -> Optional[int]:
    if v is not None and v < 0:
        raise ValueError("Stock cannot be negative.")
    return v


def _check_title(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not v.strip():
        raise ValueError("Title is required.")
    return v


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------


class CreateCategoryDTO(BaseModel):
    """Immutable DTO for category creation requests."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=CATEGORY_NAME_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=CATEGORY_DESCRIPTION_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required.")
        return v


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``title`` is non-empty, at most 200 characters.
    - ``price`` is positive and at most 999999.
    - ``stock`` is non-negative (defaults to 0).
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(max_length=TITLE_MAX_LENGTH)
    price: Decimal
    category_id: UUID
    description: Optional[str] = Field(default=None, max_length=PRODUCT_DESCRIPTION_MAX_LENGTH)
    stock: int = 0

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        return _check_title(v)

    @field_validator("price")
    @classmethod
    def price_must_be_in_range(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_price(v)

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        return _check_stock(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for partial product updates.

    Only fields explicitly supplied are applied (see ``changes``).
    ``description`` may be cleared with ``None``; the other fields may not.
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=PRODUCT_DESCRIPTION_MAX_LENGTH)
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    category_id: Optional[UUID] = None

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        return _check_title(v)

    @field_validator("price")
    @classmethod
    def price_must_be_in_range(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_price(v)

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        return _check_stock(v)

    @model_validator(mode="after")
    def required_fields_not_nulled(self) -> UpdateProductDTO:
        for name in ("title", "price", "stock", "category_id"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null.")
        return self

    def changes(self) -> dict:
        """Fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


class ProductQueryDTO(BaseModel):
    """Parameters for the paginated product listing."""

    model_config = ConfigDict(frozen=True)

    search: Optional[str] = None
    category_id: Optional[UUID] = None
    page: int = Field(default=DEFAULT_PAGE, ge=1, le=MAX_PAGE)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)

    @field_validator("search")
    @classmethod
    def blank_search_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v
