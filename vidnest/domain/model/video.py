"""Video entity.

Videos are uploaded and published elsewhere. Likes only need to know that
a video exists; comments additionally need its publication state.
"""

from datetime import datetime

from pydantic import Field

from vidnest.domain.model.common import DomainModel
from vidnest.domain.value import UserId, VideoId


class Video(DomainModel):
    """Video entity."""

    id: VideoId
    owner_id: UserId
    title: str = Field(min_length=1, max_length=300)
    is_published: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
