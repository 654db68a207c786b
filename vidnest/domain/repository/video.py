"""Video repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from vidnest.domain.model.video import Video
from vidnest.domain.value import VideoId


class VideoRepository(ABC):
    """Read access to videos, owned by the upload pipeline."""

    @abstractmethod
    async def find_by_id(self, video_id: VideoId) -> Optional[Video]:
        """Find a video by ID."""
        pass

    @abstractmethod
    async def save(self, video: Video) -> Video:
        """Save a video (create or update)."""
        pass
