"""Tweet entity (short text post on a channel)."""

from datetime import datetime

from pydantic import Field

from vidnest.domain.model.common import DomainModel
from vidnest.domain.value import TweetId, UserId


class Tweet(DomainModel):
    """Tweet entity."""

    id: TweetId
    owner_id: UserId
    content: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
