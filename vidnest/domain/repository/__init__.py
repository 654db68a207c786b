"""Repository interfaces for VidNest domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from vidnest.domain.repository.comment import CommentRepository
from vidnest.domain.repository.like import LikeRepository
from vidnest.domain.repository.tweet import TweetRepository
from vidnest.domain.repository.unit_of_work import UnitOfWork
from vidnest.domain.repository.user import UserRepository
from vidnest.domain.repository.video import VideoRepository

__all__ = [
    "UserRepository",
    "VideoRepository",
    "TweetRepository",
    "CommentRepository",
    "LikeRepository",
    "UnitOfWork",
]
