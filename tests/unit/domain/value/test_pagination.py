"""Unit tests for page requests and result pages."""

import pytest

from vidnest.domain.error import ValidationError
from vidnest.domain.value import Page, PageRequest


class TestPageRequest:
    """Tests for PageRequest.of."""

    def test_defaults(self):
        """No input gives page 1 with the default limit."""
        request = PageRequest.of()

        assert request.page == 1
        assert request.limit == 10
        assert request.offset == 0

    def test_oversize_limit_is_clamped(self):
        """A limit above the maximum is clamped, not rejected."""
        request = PageRequest.of(1, 1000)

        assert request.limit == 100

    def test_custom_bounds(self):
        """Configured default and maximum limits are honoured."""
        assert PageRequest.of(default_limit=25).limit == 25
        assert PageRequest.of(limit=80, max_limit=50).limit == 50

    def test_offset(self):
        """Offset skips the preceding pages."""
        assert PageRequest.of(3, 20).offset == 40

    @pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0), (1, -5)])
    def test_rejects_values_below_one(self, page, limit):
        """Page and limit must both be at least 1."""
        with pytest.raises(ValidationError):
            PageRequest.of(page, limit)

    def test_rejects_page_beyond_largest_offset(self):
        """A page whose offset overflows a bigint is a validation error."""
        with pytest.raises(ValidationError, match="out of range"):
            PageRequest.of(10**18, 100)

    def test_last_reachable_page(self):
        """The page starting exactly at the largest offset is still accepted."""
        request = PageRequest.of(2**63, 1)

        assert request.offset == 2**63 - 1


class TestPage:
    """Tests for the Page result envelope."""

    def test_middle_page(self):
        """Totals and navigation flags for a page in the middle."""
        page = Page[int].build([4, 5, 6], PageRequest.of(2, 3), total_items=10)

        assert page.total_pages == 4
        assert page.has_next_page is True
        assert page.has_prev_page is True

    def test_last_page(self):
        """The last page has no next page."""
        page = Page[int].build([10], PageRequest.of(4, 3), total_items=10)

        assert page.has_next_page is False
        assert page.has_prev_page is True

    def test_empty(self):
        """An empty result has zero pages."""
        page = Page[int].build([], PageRequest.of(), total_items=0)

        assert page.items == []
        assert page.total_pages == 0
        assert page.has_next_page is False
        assert page.has_prev_page is False

    def test_page_past_the_end(self):
        """Requesting past the last page returns no items but keeps totals."""
        page = Page[int].build([], PageRequest.of(9, 10), total_items=15)

        assert page.items == []
        assert page.total_items == 15
        assert page.total_pages == 2
        assert page.has_next_page is False
