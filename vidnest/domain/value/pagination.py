"""Page/limit pagination shared by the like and comment stores.

Callers speak in 1-based pages; repositories speak in offset/limit. This
module is the only place the two are translated, and it owns the result
envelope returned to callers.
"""

import math
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

from vidnest.domain.error import ValidationError
from vidnest.domain.value.common import ValueObject

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Largest OFFSET the database accepts (bigint)
MAX_OFFSET = 2**63 - 1

T = TypeVar("T")


class PageRequest(ValueObject):
    """A validated page request.

    `limit` is always within [1, max_limit]; oversize limits are clamped
    rather than rejected.
    """

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)

    @classmethod
    def of(
        cls,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        *,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> "PageRequest":
        """Build a page request from optional caller input.

        Args:
            page: 1-based page number (defaults to 1)
            limit: Items per page (defaults to default_limit, capped at max_limit)
            default_limit: Limit used when none is supplied
            max_limit: Upper bound applied to the limit

        Raises:
            ValidationError: If page or limit is below 1, or the page starts
                past the largest offset the store can skip to
        """
        page = DEFAULT_PAGE if page is None else page
        limit = default_limit if limit is None else limit
        if page < 1:
            raise ValidationError("page must be >= 1")
        if limit < 1:
            raise ValidationError("limit must be >= 1")
        limit = min(limit, max_limit)
        if (page - 1) * limit > MAX_OFFSET:
            raise ValidationError("page is out of range")
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit


class Page(BaseModel, Generic[T]):
    """One page of results plus the totals needed to walk the rest."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: list[T]
    page: int
    limit: int
    total_items: int

    @classmethod
    def build(cls, items: list[T], request: PageRequest, total_items: int) -> "Page[T]":
        """Wrap repository output in a page envelope."""
        return cls(
            items=items,
            page=request.page,
            limit=request.limit,
            total_items=total_items,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        """Number of pages at the current limit (0 when empty)."""
        return math.ceil(self.total_items / self.limit) if self.total_items else 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_prev_page(self) -> bool:
        return self.page > 1
