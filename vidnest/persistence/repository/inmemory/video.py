"""In-memory video repository for testing."""

from typing import Optional

from vidnest.domain.model.video import Video
from vidnest.domain.repository.video import VideoRepository
from vidnest.domain.value import VideoId


class InMemoryVideoRepository(VideoRepository):
    """In-memory implementation of VideoRepository for testing."""

    def __init__(self) -> None:
        self._videos: dict[VideoId, Video] = {}

    async def find_by_id(self, video_id: VideoId) -> Optional[Video]:
        """Find a video by ID."""
        return self._videos.get(video_id)

    async def save(self, video: Video) -> Video:
        """Save a video."""
        self._videos[video.id] = video
        return video
