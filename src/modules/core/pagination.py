"""Page/limit pagination metadata.

Offset arithmetic used by every paginated query::

    skip        = (page - 1) * limit
    total_pages = ceil(total_count / limit)
    has_next    = page < total_pages
    has_prev    = page > 1

``page`` and ``limit`` are capped at ``MAX_PAGE`` and ``MAX_LIMIT`` so the
offset always fits the database integer range.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

MAX_PAGE = 1_000_000
MAX_LIMIT = 100


class PageInfo(BaseModel):
    """Immutable pagination summary returned alongside a page of results."""

    model_config = ConfigDict(frozen=True)

    current_page: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    total_count: int = Field(ge=0)
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> PageInfo:
        total_pages = math.ceil(total_count / limit)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            has_next=page < total_pages,
            has_prev=page > 1,
        )

    def as_camel_dict(self) -> dict:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalCount": self.total_count,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit
