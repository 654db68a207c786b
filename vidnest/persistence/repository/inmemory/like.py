"""In-memory like repository for testing."""

from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from vidnest.domain.error import ConflictError
from vidnest.domain.model.like import Like, LikedComment, LikedVideo
from vidnest.domain.repository.comment import CommentRepository
from vidnest.domain.repository.like import LikeRepository
from vidnest.domain.repository.user import UserRepository
from vidnest.domain.repository.video import VideoRepository
from vidnest.domain.value import (
    CommentId,
    LikeId,
    LikeTarget,
    TargetKind,
    UserId,
    VideoId,
)

LikeKey = Tuple[TargetKind, UUID, UserId]


def _key(actor_id: UserId, target: LikeTarget) -> LikeKey:
    return (target.kind, target.id, actor_id)


def _newest_first(likes: List[Like]) -> List[Like]:
    # Stable sort over reversed insertion order: later inserts win ties
    return sorted(reversed(likes), key=lambda l: l.created_at, reverse=True)


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing.

    The uniqueness key includes the target kind, mirroring the per-kind
    partial indexes. The check-and-insert in create never awaits, so it is
    atomic with respect to other tasks on the event loop.

    Liked listings are joined from the given repositories; likes whose
    target or target owner is unknown are left out, like an inner join.
    """

    def __init__(
        self,
        video_repository: VideoRepository,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ) -> None:
        self._likes: dict[LikeId, Like] = {}
        self._keys: dict[LikeKey, LikeId] = {}
        self._video_repository = video_repository
        self._comment_repository = comment_repository
        self._user_repository = user_repository

    async def find_by_id(self, like_id: LikeId) -> Optional[Like]:
        """Find a like by ID."""
        return self._likes.get(like_id)

    async def find_by_actor_and_target(
        self, actor_id: UserId, target: LikeTarget
    ) -> Optional[Like]:
        """Find a user's like on a specific target."""
        like_id = self._keys.get(_key(actor_id, target))
        return self._likes.get(like_id) if like_id else None

    async def exists(self, actor_id: UserId, target: LikeTarget) -> bool:
        """Check whether a user likes a target."""
        return _key(actor_id, target) in self._keys

    async def create(self, like: Like) -> Like:
        """Insert a like.

        Raises:
            ConflictError: If the user already likes this target
        """
        key = _key(like.liked_by, like.target)
        if key in self._keys:
            raise ConflictError("like", f"{like.liked_by} already likes {like.target}")

        self._keys[key] = like.id
        self._likes[like.id] = like
        return like

    async def delete(self, like_id: LikeId) -> bool:
        """Delete a like by ID."""
        like = self._likes.pop(like_id, None)
        if like is None:
            return False
        self._keys.pop(_key(like.liked_by, like.target), None)
        return True

    async def delete_by_actor_and_target(
        self, actor_id: UserId, target: LikeTarget
    ) -> bool:
        """Delete a user's like on a target."""
        like_id = self._keys.pop(_key(actor_id, target), None)
        if like_id is None:
            return False
        self._likes.pop(like_id, None)
        return True

    async def delete_for_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every like pointing at any of the given comments."""
        doomed = set(comment_ids)
        like_ids = [
            like.id
            for like in self._likes.values()
            if like.target.kind == TargetKind.COMMENT and like.target.id in doomed
        ]
        for like_id in like_ids:
            await self.delete(like_id)
        return len(like_ids)

    async def count_by_target(self, target: LikeTarget) -> int:
        """Count likes on a target."""
        return sum(
            1
            for kind, target_id, _ in self._keys
            if kind == target.kind and target_id == target.id
        )

    async def find_by_actor(
        self,
        actor_id: UserId,
        kind: Optional[TargetKind] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Like], int]:
        """Find a user's likes, newest first."""
        matching = [
            like
            for like in self._likes.values()
            if like.liked_by == actor_id and (kind is None or like.target.kind == kind)
        ]
        ordered = _newest_first(matching)
        return ordered[offset : offset + limit], len(ordered)

    async def find_liked_ids(
        self, actor_id: UserId, kind: TargetKind, target_ids: Sequence[UUID]
    ) -> set[UUID]:
        """Find which of the given targets a user likes."""
        return {
            target_id
            for target_id in target_ids
            if (kind, target_id, actor_id) in self._keys
        }

    async def find_liked_videos(
        self, actor_id: UserId, limit: int = 10, offset: int = 0
    ) -> Tuple[List[LikedVideo], int]:
        """Find the videos a user likes, most recently liked first."""
        joined: List[LikedVideo] = []
        for like in self._likes_of(actor_id, TargetKind.VIDEO):
            video = await self._video_repository.find_by_id(VideoId(like.target.id))
            if video is None:
                continue
            owner = await self._user_repository.find_by_id(video.owner_id)
            if owner is None:
                continue
            joined.append(
                LikedVideo(
                    like_id=like.id,
                    liked_at=like.created_at,
                    video=video,
                    owner=owner.summary(),
                )
            )
        return joined[offset : offset + limit], len(joined)

    async def find_liked_comments(
        self, actor_id: UserId, limit: int = 10, offset: int = 0
    ) -> Tuple[List[LikedComment], int]:
        """Find the comments a user likes, most recently liked first."""
        joined: List[LikedComment] = []
        for like in self._likes_of(actor_id, TargetKind.COMMENT):
            comment = await self._comment_repository.find_by_id(
                CommentId(like.target.id)
            )
            if comment is None:
                continue
            owner = await self._user_repository.find_by_id(comment.owner_id)
            if owner is None:
                continue
            joined.append(
                LikedComment(
                    like_id=like.id,
                    liked_at=like.created_at,
                    comment=comment,
                    owner=owner.summary(),
                )
            )
        return joined[offset : offset + limit], len(joined)

    def _likes_of(self, actor_id: UserId, kind: TargetKind) -> List[Like]:
        return _newest_first(
            [
                like
                for like in self._likes.values()
                if like.liked_by == actor_id and like.target.kind == kind
            ]
        )
