"""Pagination fields shared by listing responses."""

from typing import Any, Optional

from vidnest.application.usecase.response import ResponseModel
from vidnest.config import Settings
from vidnest.domain.value import Page, PageRequest


class PaginatedResponse(ResponseModel):
    """Base for listing responses: the page window plus totals."""

    page: int
    limit: int
    total_items: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


def page_request(
    settings: Settings, page: Optional[int], limit: Optional[int]
) -> PageRequest:
    """Build a page request using the configured default and maximum limits.

    Raises:
        ValidationError: If page or limit is below 1
    """
    return PageRequest.of(
        page,
        limit,
        default_limit=settings.pagination.default_limit,
        max_limit=settings.pagination.max_limit,
    )


def page_fields(page: Page[Any]) -> dict[str, Any]:
    """Pagination fields of a result page, for PaginatedResponse subclasses."""
    return {
        "page": page.page,
        "limit": page.limit,
        "total_items": page.total_items,
        "total_pages": page.total_pages,
        "has_next_page": page.has_next_page,
        "has_prev_page": page.has_prev_page,
    }
