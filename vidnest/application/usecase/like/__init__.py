"""Like use cases."""

from .common import LikeItem
from .get_like_status import (
    CountLikesRequest,
    CountLikesResponse,
    CountLikesUseCase,
    GetLikeStatusRequest,
    GetLikeStatusResponse,
    GetLikeStatusUseCase,
)
from .like_target import LikeTargetRequest, LikeTargetResponse, LikeTargetUseCase
from .list_liked import (
    LikedCommentItem,
    LikedVideoItem,
    ListLikedCommentsResponse,
    ListLikedCommentsUseCase,
    ListLikedRequest,
    ListLikedVideosResponse,
    ListLikedVideosUseCase,
)
from .list_likes import ListLikesRequest, ListLikesResponse, ListLikesUseCase
from .remove_like import RemoveLikeRequest, RemoveLikeResponse, RemoveLikeUseCase
from .toggle_like import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase
from .unlike_target import (
    UnlikeTargetRequest,
    UnlikeTargetResponse,
    UnlikeTargetUseCase,
)

__all__ = [
    "CountLikesRequest",
    "CountLikesResponse",
    "CountLikesUseCase",
    "GetLikeStatusRequest",
    "GetLikeStatusResponse",
    "GetLikeStatusUseCase",
    "LikeItem",
    "LikedCommentItem",
    "LikedVideoItem",
    "LikeTargetRequest",
    "LikeTargetResponse",
    "LikeTargetUseCase",
    "ListLikedCommentsResponse",
    "ListLikedCommentsUseCase",
    "ListLikedRequest",
    "ListLikedVideosResponse",
    "ListLikedVideosUseCase",
    "ListLikesRequest",
    "ListLikesResponse",
    "ListLikesUseCase",
    "RemoveLikeRequest",
    "RemoveLikeResponse",
    "RemoveLikeUseCase",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
    "UnlikeTargetRequest",
    "UnlikeTargetResponse",
    "UnlikeTargetUseCase",
]
