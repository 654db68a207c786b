"""Domain model entities for VidNest."""

from vidnest.domain.model.comment import Comment, CommentWithOwner
from vidnest.domain.model.like import Like, LikedComment, LikedVideo
from vidnest.domain.model.tweet import Tweet
from vidnest.domain.model.user import User
from vidnest.domain.model.video import Video

__all__ = [
    "User",
    "Video",
    "Tweet",
    "Comment",
    "CommentWithOwner",
    "Like",
    "LikedVideo",
    "LikedComment",
]
