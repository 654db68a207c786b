"""Comment domain service."""

import logfire
from datetime import datetime
from typing import Optional
from uuid import uuid4

from vidnest.domain.error import (
    ForbiddenError,
    NotFoundError,
    ParentNotFoundError,
    ParentUnpublishedError,
    ValidationError,
)
from vidnest.domain.model.comment import Comment, CommentWithOwner
from vidnest.domain.repository import (
    CommentRepository,
    LikeRepository,
    TweetRepository,
    VideoRepository,
)
from vidnest.domain.value import (
    CommentId,
    CommentParent,
    Page,
    PageRequest,
    UserId,
    VideoRef,
    normalize_comment_content,
)

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        video_repository: VideoRepository,
        tweet_repository: TweetRepository,
        default_timeout: Optional[float] = None,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            like_repository: Like repository (cascade on delete)
            video_repository: Video repository (parent checks)
            tweet_repository: Tweet repository (parent checks)
            default_timeout: Deadline in seconds when the caller gives none
        """
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.video_repository = video_repository
        self.tweet_repository = tweet_repository
        self.default_timeout = default_timeout

    async def create_comment(
        self,
        owner_id: UserId,
        parent: CommentParent,
        content: str,
        parent_comment_id: Optional[CommentId] = None,
        timeout: Optional[float] = None,
    ) -> Comment:
        """Create a comment on a video or tweet, or reply to another comment.

        Args:
            owner_id: Authenticated user ID
            parent: Video or tweet the comment belongs to
            content: Comment text (trimmed before storing)
            parent_comment_id: Comment being replied to (None for top-level)
            timeout: Deadline in seconds

        Returns:
            Created comment

        Raises:
            ValidationError: If content is empty/too long or the reply crosses parents
            ParentNotFoundError: If the video, tweet or parent comment does not exist
            ParentUnpublishedError: If the video is not published
            OperationTimeoutError: If the deadline expires
        """
        return await self._within_deadline(
            "create_comment",
            self._create_comment(owner_id, parent, content, parent_comment_id),
            timeout,
        )

    async def _create_comment(
        self,
        owner_id: UserId,
        parent: CommentParent,
        content: str,
        parent_comment_id: Optional[CommentId],
    ) -> Comment:
        with logfire.span(
            "comment_service.create_comment",
            owner_id=str(owner_id),
            parent=str(parent),
            parent_comment_id=str(parent_comment_id) if parent_comment_id else None,
        ):
            text = normalize_comment_content(content)

            await self._ensure_parent_open(parent)

            if parent_comment_id:
                replied_to = await self.comment_repository.find_by_id(parent_comment_id)
                if not replied_to:
                    logfire.warn(
                        "Parent comment not found",
                        parent_comment_id=str(parent_comment_id),
                        parent=str(parent),
                    )
                    raise ParentNotFoundError("comment", str(parent_comment_id))
                if replied_to.parent != parent:
                    logfire.warn(
                        "Parent comment belongs to another thread",
                        parent_comment_id=str(parent_comment_id),
                        comment_parent=str(replied_to.parent),
                        target_parent=str(parent),
                    )
                    raise ValidationError(
                        f"Parent comment does not belong to this {parent.kind.value}"
                    )

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                content=text,
                parent=parent,
                owner_id=owner_id,
                parent_comment_id=parent_comment_id,
                like_count=0,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                parent=str(parent),
                owner_id=str(owner_id),
                is_reply=parent_comment_id is not None,
            )
            return saved

    async def update_comment(
        self,
        actor_id: UserId,
        comment_id: CommentId,
        content: str,
        timeout: Optional[float] = None,
    ) -> Comment:
        """Replace the content of a comment the actor owns.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the actor does not own the comment
            ValidationError: If the new content is empty or too long
            OperationTimeoutError: If the deadline expires
        """
        return await self._within_deadline(
            "update_comment",
            self._update_comment(actor_id, comment_id, content),
            timeout,
        )

    async def _update_comment(
        self, actor_id: UserId, comment_id: CommentId, content: str
    ) -> Comment:
        with logfire.span(
            "comment_service.update_comment",
            actor_id=str(actor_id),
            comment_id=str(comment_id),
        ):
            await self._get_owned(actor_id, comment_id)
            text = normalize_comment_content(content)

            updated = await self.comment_repository.update_content(comment_id, text)
            if updated is None:
                raise NotFoundError("comment", str(comment_id))

            logfire.info("Comment updated", comment_id=str(comment_id))
            return updated

    async def delete_comment(
        self,
        actor_id: UserId,
        comment_id: CommentId,
        timeout: Optional[float] = None,
    ) -> int:
        """Delete a comment the actor owns, with all replies and their likes.

        Returns:
            Number of comments deleted (the comment plus its descendants)

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the actor does not own the comment
            OperationTimeoutError: If the deadline expires
        """
        return await self._within_deadline(
            "delete_comment", self._delete_comment(actor_id, comment_id), timeout
        )

    async def _delete_comment(self, actor_id: UserId, comment_id: CommentId) -> int:
        with logfire.span(
            "comment_service.delete_comment",
            actor_id=str(actor_id),
            comment_id=str(comment_id),
        ):
            await self._get_owned(actor_id, comment_id)

            thread_ids = await self.comment_repository.find_thread_ids(comment_id)
            likes_removed = await self.like_repository.delete_for_comments(thread_ids)
            removed = await self.comment_repository.delete_many(thread_ids)

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                comments_removed=removed,
                likes_removed=likes_removed,
            )
            return removed

    async def get_comment(
        self, comment_id: CommentId, timeout: Optional[float] = None
    ) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self._within_deadline(
            "get_comment", self.comment_repository.find_by_id(comment_id), timeout
        )
        if comment is None:
            raise NotFoundError("comment", str(comment_id))
        return comment

    async def list_top_level(
        self,
        parent: CommentParent,
        page: PageRequest,
        timeout: Optional[float] = None,
    ) -> Page[CommentWithOwner]:
        """List top-level comments on a video or tweet, newest first.

        Args:
            parent: Video or tweet
            page: Page request
            timeout: Deadline in seconds

        Returns:
            One page of comments joined with their owners
        """
        return await self._within_deadline(
            "list_comments", self._list_top_level(parent, page), timeout
        )

    async def _list_top_level(
        self, parent: CommentParent, page: PageRequest
    ) -> Page[CommentWithOwner]:
        with logfire.span(
            "comment_service.list_top_level",
            parent=str(parent),
            page=page.page,
            limit=page.limit,
        ):
            items, total = await self.comment_repository.find_top_level_with_owner(
                parent, limit=page.limit, offset=page.offset
            )
            logfire.info(
                "Comments retrieved",
                parent=str(parent),
                count=len(items),
                total=total,
            )
            return Page[CommentWithOwner].build(items, page, total)

    async def list_replies(
        self,
        comment_id: CommentId,
        page: PageRequest,
        timeout: Optional[float] = None,
    ) -> Page[CommentWithOwner]:
        """List direct replies to a comment, newest first."""
        return await self._within_deadline(
            "list_replies", self._list_replies(comment_id, page), timeout
        )

    async def _list_replies(
        self, comment_id: CommentId, page: PageRequest
    ) -> Page[CommentWithOwner]:
        with logfire.span(
            "comment_service.list_replies",
            comment_id=str(comment_id),
            page=page.page,
            limit=page.limit,
        ):
            items, total = await self.comment_repository.find_replies_with_owner(
                comment_id, limit=page.limit, offset=page.offset
            )
            return Page[CommentWithOwner].build(items, page, total)

    async def _get_owned(self, actor_id: UserId, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            raise NotFoundError("comment", str(comment_id))
        if comment.owner_id != actor_id:
            logfire.warn(
                "Attempt to modify another user's comment",
                comment_id=str(comment_id),
                actor_id=str(actor_id),
            )
            raise ForbiddenError("comment", str(comment_id), str(actor_id))
        return comment

    async def _ensure_parent_open(self, parent: CommentParent) -> None:
        """Check the video or tweet exists and, for videos, is published."""
        if isinstance(parent, VideoRef):
            video = await self.video_repository.find_by_id(parent.id)
            if not video:
                raise ParentNotFoundError("video", str(parent.id))
            if not video.is_published:
                logfire.info("Comment on unpublished video rejected", video_id=str(parent.id))
                raise ParentUnpublishedError(str(parent.id))
        else:
            tweet = await self.tweet_repository.find_by_id(parent.id)
            if not tweet:
                raise ParentNotFoundError("tweet", str(parent.id))
