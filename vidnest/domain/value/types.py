"""Domain value objects for VidNest.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from pydantic import field_validator

from vidnest.domain.error import ValidationError
from vidnest.domain.value.common import RootValueObject, ValueObject
from vidnest.domain.value.identifiers import UserId

COMMENT_MIN_LENGTH = 1
COMMENT_MAX_LENGTH = 500


def normalize_comment_content(content: str | None) -> str:
    """Trim comment content and enforce its length bounds.

    Args:
        content: Raw content as submitted

    Returns:
        Content with surrounding whitespace removed

    Raises:
        ValidationError: If the trimmed content is empty or longer than 500 characters
    """
    text = (content or "").strip()
    if len(text) < COMMENT_MIN_LENGTH:
        raise ValidationError("Comment content is required")
    if len(text) > COMMENT_MAX_LENGTH:
        raise ValidationError(
            f"Comment cannot be longer than {COMMENT_MAX_LENGTH} characters"
        )
    return text


class Username(RootValueObject[str]):
    """Public handle of a user, stored lowercase."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not empty and within length limits."""
        v = v.strip().lower()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Username must be 1-255 characters")
        return v


class OwnerSummary(ValueObject):
    """The subset of a user shown next to their comments.

    Never the full user record: only what a comment listing renders.
    """

    id: UserId
    username: str
    full_name: str | None = None
    avatar_url: str | None = None
