"""Unit tests for comment content rules."""

import pytest

from vidnest.domain.error import ValidationError
from vidnest.domain.value import normalize_comment_content


class TestNormalizeCommentContent:
    """Tests for normalize_comment_content."""

    def test_trims_whitespace(self):
        assert normalize_comment_content("  hello  ") == "hello"

    @pytest.mark.parametrize("content", [None, "", "   ", "\n\t"])
    def test_empty_rejected(self, content):
        """Empty or whitespace-only content is required."""
        with pytest.raises(ValidationError, match="Comment content is required"):
            normalize_comment_content(content)

    def test_exactly_500_characters_accepted(self):
        """500 characters is the upper bound, inclusive."""
        content = "a" * 500

        assert normalize_comment_content(content) == content

    def test_501_characters_rejected(self):
        with pytest.raises(ValidationError, match="longer than 500 characters"):
            normalize_comment_content("a" * 501)

    def test_length_counted_after_trimming(self):
        """Surrounding whitespace does not count towards the limit."""
        content = "  " + "a" * 500 + "  "

        assert len(normalize_comment_content(content)) == 500
