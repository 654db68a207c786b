"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .like import InMemoryLikeRepository
from .tweet import InMemoryTweetRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository
from .video import InMemoryVideoRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryLikeRepository",
    "InMemoryTweetRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
    "InMemoryVideoRepository",
]
