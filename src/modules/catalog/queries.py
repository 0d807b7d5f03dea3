"""Catalog query engine: filtered, paginated product listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.core.pagination import PageInfo, offset_for

if TYPE_CHECKING:
    from modules.catalog.dtos import ProductQueryDTO
    from modules.catalog.models import Product
    from modules.catalog.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProductPage:
    items: List[Product]
    pagination: PageInfo


class ProductQueryService:
    """Turns a ``ProductQueryDTO`` into one page of products.

    Count and fetch share the same filtered queryset and run in one
    transaction, so both reflect the same predicate.  Ordering is
    newest first; a page past the end is empty rather than an error.
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def list_products(self, query: ProductQueryDTO) -> ProductPage:
        queryset = self._repo.search(search=query.search, category_id=query.category_id)

        total_count = queryset.count()
        skip = offset_for(query.page, query.limit)
        items = list(queryset[skip : skip + query.limit])

        pagination = PageInfo.build(query.page, query.limit, total_count)
        logger.info(
            "product.listed",
            search=query.search,
            category_id=str(query.category_id) if query.category_id else None,
            page=query.page,
            limit=query.limit,
            total_count=total_count,
        )
        return ProductPage(items=items, pagination=pagination)
