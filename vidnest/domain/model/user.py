"""User entity.

Users are owned by the account service; this layer only reads the fields
it shows next to comments.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from vidnest.domain.model.common import DomainModel
from vidnest.domain.value import OwnerSummary, UserId, Username


class User(DomainModel):
    """User as seen by the engagement ledger."""

    id: UserId
    username: Username
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def summary(self) -> OwnerSummary:
        """Owner summary shown alongside comments."""
        return OwnerSummary(
            id=self.id,
            username=self.username.root,
            full_name=self.full_name,
            avatar_url=self.avatar_url,
        )
