"""Like domain service."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID, uuid4

import logfire

from vidnest.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    TargetNotFoundError,
)
from vidnest.domain.model.like import Like, LikedComment, LikedVideo
from vidnest.domain.repository import (
    CommentRepository,
    LikeRepository,
    TweetRepository,
    VideoRepository,
)
from vidnest.domain.value import (
    CommentRef,
    LikeId,
    LikeTarget,
    Page,
    PageRequest,
    TargetKind,
    UserId,
    VideoRef,
)

from .base import Service


class LikeService(Service):
    """Domain service for like operations.

    Uniqueness is left to the repository's atomic insert. This service
    never checks "already liked?" before inserting.
    """

    def __init__(
        self,
        like_repository: LikeRepository,
        comment_repository: CommentRepository,
        video_repository: VideoRepository,
        tweet_repository: TweetRepository,
        default_timeout: Optional[float] = None,
    ) -> None:
        """Initialize like service.

        Args:
            like_repository: Like repository
            comment_repository: Comment repository (existence checks, like counters)
            video_repository: Video repository (existence checks)
            tweet_repository: Tweet repository (existence checks)
            default_timeout: Deadline in seconds when the caller gives none
        """
        self.like_repository = like_repository
        self.comment_repository = comment_repository
        self.video_repository = video_repository
        self.tweet_repository = tweet_repository
        self.default_timeout = default_timeout

    async def like(
        self, actor_id: UserId, target: LikeTarget, timeout: Optional[float] = None
    ) -> Like:
        """Record that a user likes a target.

        Args:
            actor_id: Authenticated user ID
            target: Video, comment or tweet being liked
            timeout: Deadline in seconds

        Returns:
            Created like

        Raises:
            TargetNotFoundError: If the target does not exist
            ConflictError: If the user already likes the target
            OperationTimeoutError: If the deadline expires
        """
        return await self._within_deadline(
            "like", self._like(actor_id, target), timeout
        )

    async def _like(self, actor_id: UserId, target: LikeTarget) -> Like:
        with logfire.span(
            "like_service.like", actor_id=str(actor_id), target=str(target)
        ):
            await self._ensure_target_exists(target)

            now = datetime.now()
            like = Like(
                id=LikeId(uuid4()),
                target=target,
                liked_by=actor_id,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.like_repository.create(like)
            except ConflictError:
                # Expected under double-clicks and retries; not an application error
                logfire.info(
                    "Duplicate like rejected",
                    actor_id=str(actor_id),
                    target=str(target),
                )
                raise

            if isinstance(target, CommentRef):
                await self.comment_repository.increment_like_count(target.id)

            logfire.info(
                "Like created",
                like_id=str(saved.id),
                actor_id=str(actor_id),
                target=str(target),
            )
            return saved

    async def unlike(
        self, actor_id: UserId, target: LikeTarget, timeout: Optional[float] = None
    ) -> None:
        """Withdraw a user's like on a target.

        The actor is part of the delete predicate, so only their own like
        can be removed this way.

        Raises:
            NotFoundError: If the user does not like the target
            OperationTimeoutError: If the deadline expires
        """
        await self._within_deadline("unlike", self._unlike(actor_id, target), timeout)

    async def _unlike(self, actor_id: UserId, target: LikeTarget) -> None:
        with logfire.span(
            "like_service.unlike", actor_id=str(actor_id), target=str(target)
        ):
            deleted = await self.like_repository.delete_by_actor_and_target(
                actor_id, target
            )
            if not deleted:
                logfire.info(
                    "No like to remove", actor_id=str(actor_id), target=str(target)
                )
                raise NotFoundError("like", str(target))

            if isinstance(target, CommentRef):
                await self.comment_repository.decrement_like_count(target.id)

            logfire.info("Like removed", actor_id=str(actor_id), target=str(target))

    async def remove(
        self, actor_id: UserId, like_id: LikeId, timeout: Optional[float] = None
    ) -> None:
        """Delete a like by ID. Only the user who created it may do so.

        Raises:
            NotFoundError: If the like does not exist
            ForbiddenError: If the like belongs to another user
            OperationTimeoutError: If the deadline expires
        """
        await self._within_deadline("remove_like", self._remove(actor_id, like_id), timeout)

    async def _remove(self, actor_id: UserId, like_id: LikeId) -> None:
        with logfire.span(
            "like_service.remove", actor_id=str(actor_id), like_id=str(like_id)
        ):
            like = await self.like_repository.find_by_id(like_id)
            if like is None:
                raise NotFoundError("like", str(like_id))

            if like.liked_by != actor_id:
                logfire.warn(
                    "Attempt to remove another user's like",
                    like_id=str(like_id),
                    actor_id=str(actor_id),
                )
                raise ForbiddenError("like", str(like_id), str(actor_id))

            if not await self.like_repository.delete(like_id):
                # Removed concurrently between the lookup and the delete
                raise NotFoundError("like", str(like_id))

            if isinstance(like.target, CommentRef):
                await self.comment_repository.decrement_like_count(like.target.id)

            logfire.info("Like removed", like_id=str(like_id), actor_id=str(actor_id))

    async def toggle(
        self, actor_id: UserId, target: LikeTarget, timeout: Optional[float] = None
    ) -> bool:
        """Like a target, or remove the like if it already exists.

        Returns:
            True if the target is now liked, False if the like was removed

        Raises:
            TargetNotFoundError: If the target does not exist
            OperationTimeoutError: If the deadline expires
        """
        return await self._within_deadline(
            "toggle_like", self._toggle(actor_id, target), timeout
        )

    async def _toggle(self, actor_id: UserId, target: LikeTarget) -> bool:
        with logfire.span(
            "like_service.toggle", actor_id=str(actor_id), target=str(target)
        ):
            try:
                await self._like(actor_id, target)
                return True
            except ConflictError:
                pass

            deleted = await self.like_repository.delete_by_actor_and_target(
                actor_id, target
            )
            if deleted and isinstance(target, CommentRef):
                await self.comment_repository.decrement_like_count(target.id)
            logfire.info(
                "Like toggled off", actor_id=str(actor_id), target=str(target)
            )
            return False

    async def get_like(
        self, actor_id: UserId, target: LikeTarget, timeout: Optional[float] = None
    ) -> Optional[Like]:
        """Get a user's like on a target, if any."""
        return await self._within_deadline(
            "get_like",
            self.like_repository.find_by_actor_and_target(actor_id, target),
            timeout,
        )

    async def is_liked(
        self, actor_id: UserId, target: LikeTarget, timeout: Optional[float] = None
    ) -> bool:
        """Check whether a user likes a target (single point lookup)."""
        return await self._within_deadline(
            "is_liked", self.like_repository.exists(actor_id, target), timeout
        )

    async def count_for(
        self, target: LikeTarget, timeout: Optional[float] = None
    ) -> int:
        """Count likes on a target."""
        return await self._within_deadline(
            "count_likes", self.like_repository.count_by_target(target), timeout
        )

    async def list_by_user(
        self,
        actor_id: UserId,
        page: PageRequest,
        kind: Optional[TargetKind] = None,
        timeout: Optional[float] = None,
    ) -> Page[Like]:
        """List a user's likes, newest first.

        Args:
            actor_id: User whose likes are listed
            page: Page request
            kind: Restrict to one target kind (None for all)
            timeout: Deadline in seconds

        Returns:
            One page of likes
        """
        return await self._within_deadline(
            "list_likes", self._list_by_user(actor_id, page, kind), timeout
        )

    async def _list_by_user(
        self, actor_id: UserId, page: PageRequest, kind: Optional[TargetKind]
    ) -> Page[Like]:
        with logfire.span(
            "like_service.list_by_user",
            actor_id=str(actor_id),
            kind=kind.value if kind else None,
            page=page.page,
            limit=page.limit,
        ):
            likes, total = await self.like_repository.find_by_actor(
                actor_id, kind=kind, limit=page.limit, offset=page.offset
            )
            return Page[Like].build(likes, page, total)

    async def list_liked_videos(
        self, actor_id: UserId, page: PageRequest, timeout: Optional[float] = None
    ) -> Page[LikedVideo]:
        """List the videos a user likes, each with its owner, most recently liked first.

        Args:
            actor_id: User whose liked videos are listed
            page: Page request
            timeout: Deadline in seconds

        Returns:
            One page of liked videos
        """
        return await self._within_deadline(
            "list_liked_videos", self._list_liked_videos(actor_id, page), timeout
        )

    async def _list_liked_videos(
        self, actor_id: UserId, page: PageRequest
    ) -> Page[LikedVideo]:
        with logfire.span(
            "like_service.list_liked_videos",
            actor_id=str(actor_id),
            page=page.page,
            limit=page.limit,
        ):
            entries, total = await self.like_repository.find_liked_videos(
                actor_id, limit=page.limit, offset=page.offset
            )
            return Page[LikedVideo].build(entries, page, total)

    async def list_liked_comments(
        self, actor_id: UserId, page: PageRequest, timeout: Optional[float] = None
    ) -> Page[LikedComment]:
        """List the comments a user likes, each with its author."""
        return await self._within_deadline(
            "list_liked_comments", self._list_liked_comments(actor_id, page), timeout
        )

    async def _list_liked_comments(
        self, actor_id: UserId, page: PageRequest
    ) -> Page[LikedComment]:
        with logfire.span(
            "like_service.list_liked_comments",
            actor_id=str(actor_id),
            page=page.page,
            limit=page.limit,
        ):
            entries, total = await self.like_repository.find_liked_comments(
                actor_id, limit=page.limit, offset=page.offset
            )
            return Page[LikedComment].build(entries, page, total)

    async def liked_states(
        self,
        actor_id: UserId,
        kind: TargetKind,
        target_ids: Sequence[UUID],
        timeout: Optional[float] = None,
    ) -> dict[UUID, bool]:
        """Check which of several same-kind targets a user likes.

        Args:
            actor_id: User ID
            kind: Kind shared by all target_ids
            target_ids: Targets to check

        Returns:
            Mapping of each target ID to whether the user likes it
        """
        if not target_ids:
            return {}

        # Batch query to fetch all likes at once (avoid N+1)
        liked = await self._within_deadline(
            "liked_states",
            self.like_repository.find_liked_ids(actor_id, kind, target_ids),
            timeout,
        )
        return {target_id: target_id in liked for target_id in target_ids}

    async def _ensure_target_exists(self, target: LikeTarget) -> None:
        """Raise TargetNotFoundError unless the target resolves to a stored record."""
        if isinstance(target, VideoRef):
            found = await self.video_repository.find_by_id(target.id) is not None
        elif isinstance(target, CommentRef):
            found = await self.comment_repository.find_by_id(target.id) is not None
        else:
            found = await self.tweet_repository.find_by_id(target.id) is not None

        if not found:
            logfire.warn("Like on non-existent target", target=str(target))
            raise TargetNotFoundError(target.kind.value, str(target.id))
