"""PostgreSQL implementation of Video repository."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidnest.domain.model import Video
from vidnest.domain.repository import VideoRepository
from vidnest.domain.value import VideoId
from vidnest.persistence.errors import translate_storage_errors
from vidnest.persistence.mappers import row_to_video, video_to_dict
from vidnest.persistence.tables import videos_table


class PostgresVideoRepository(VideoRepository):
    """PostgreSQL implementation of VideoRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, video_id: VideoId) -> Optional[Video]:
        """Find a video by ID."""
        stmt = select(videos_table).where(videos_table.c.id == video_id)
        async with translate_storage_errors("video.find_by_id", "video"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_video(row._asdict()) if row else None

    async def save(self, video: Video) -> Video:
        """Insert a video."""
        stmt = insert(videos_table).values(**video_to_dict(video))
        async with translate_storage_errors("video.save", "video"):
            await self.session.execute(stmt)
        return video
