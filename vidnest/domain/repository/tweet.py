"""Tweet repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from vidnest.domain.model.tweet import Tweet
from vidnest.domain.value import TweetId


class TweetRepository(ABC):
    """Read access to tweets."""

    @abstractmethod
    async def find_by_id(self, tweet_id: TweetId) -> Optional[Tweet]:
        """Find a tweet by ID."""
        pass

    @abstractmethod
    async def save(self, tweet: Tweet) -> Tweet:
        """Save a tweet (create or update)."""
        pass
