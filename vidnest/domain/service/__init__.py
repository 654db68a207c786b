"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .like_service import LikeService

__all__ = [
    "CommentService",
    "LikeService",
    "Service",
]
