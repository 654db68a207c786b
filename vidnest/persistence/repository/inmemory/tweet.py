"""In-memory tweet repository for testing."""

from typing import Optional

from vidnest.domain.model.tweet import Tweet
from vidnest.domain.repository.tweet import TweetRepository
from vidnest.domain.value import TweetId


class InMemoryTweetRepository(TweetRepository):
    """In-memory implementation of TweetRepository for testing."""

    def __init__(self) -> None:
        self._tweets: dict[TweetId, Tweet] = {}

    async def find_by_id(self, tweet_id: TweetId) -> Optional[Tweet]:
        """Find a tweet by ID."""
        return self._tweets.get(tweet_id)

    async def save(self, tweet: Tweet) -> Tweet:
        """Save a tweet."""
        self._tweets[tweet.id] = tweet
        return tweet
