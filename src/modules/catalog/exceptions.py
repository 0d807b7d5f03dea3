"""Catalog domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.errors.error_classifier`` maps them onto the API error
taxonomy (registered in ``CatalogConfig.ready``).
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """The requested product does not exist."""


class CategoryDoesNotExist(Exception):
    """A product references a category that does not exist."""
