"""PostgreSQL implementation of Tweet repository."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidnest.domain.model import Tweet
from vidnest.domain.repository import TweetRepository
from vidnest.domain.value import TweetId
from vidnest.persistence.errors import translate_storage_errors
from vidnest.persistence.mappers import row_to_tweet, tweet_to_dict
from vidnest.persistence.tables import tweets_table


class PostgresTweetRepository(TweetRepository):
    """PostgreSQL implementation of TweetRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, tweet_id: TweetId) -> Optional[Tweet]:
        """Find a tweet by ID."""
        stmt = select(tweets_table).where(tweets_table.c.id == tweet_id)
        async with translate_storage_errors("tweet.find_by_id", "tweet"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tweet(row._asdict()) if row else None

    async def save(self, tweet: Tweet) -> Tweet:
        """Insert a tweet."""
        stmt = insert(tweets_table).values(**tweet_to_dict(tweet))
        async with translate_storage_errors("tweet.save", "tweet"):
            await self.session.execute(stmt)
        return tweet
