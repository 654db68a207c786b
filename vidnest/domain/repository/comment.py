"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from vidnest.domain.model.comment import Comment, CommentWithOwner
from vidnest.domain.value import CommentId, CommentParent


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace a comment's content and bump updated_at.

        Args:
            comment_id: Comment ID
            content: New, already validated content

        Returns:
            The updated comment, None if it does not exist
        """
        pass

    @abstractmethod
    async def find_thread_ids(self, comment_id: CommentId) -> List[CommentId]:
        """Find a comment and all of its replies, recursively.

        Args:
            comment_id: Root of the sub-thread

        Returns:
            IDs of the comment and every descendant (empty if not found)
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard-delete comments.

        Args:
            comment_ids: Comments to delete

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def find_top_level_with_owner(
        self, parent: CommentParent, limit: int = 10, offset: int = 0
    ) -> Tuple[List[CommentWithOwner], int]:
        """Find top-level comments on a video or tweet, joined with owners.

        Newest first; comments created at the same instant keep their
        insertion order (newest inserted first). Must be a single round trip.

        Args:
            parent: The video or tweet
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            The requested slice and the total number of top-level comments
        """
        pass

    @abstractmethod
    async def find_replies_with_owner(
        self, parent_comment_id: CommentId, limit: int = 10, offset: int = 0
    ) -> Tuple[List[CommentWithOwner], int]:
        """Find direct replies to a comment, joined with owners.

        Same ordering and round-trip rules as find_top_level_with_owner.

        Args:
            parent_comment_id: The comment being replied to
            limit: Maximum number of replies to return
            offset: Number of replies to skip

        Returns:
            The requested slice and the total number of replies
        """
        pass

    @abstractmethod
    async def increment_like_count(self, comment_id: CommentId) -> None:
        """Atomically increment the denormalized like counter.

        Args:
            comment_id: Comment ID
        """
        pass

    @abstractmethod
    async def decrement_like_count(self, comment_id: CommentId) -> None:
        """Atomically decrement the denormalized like counter (minimum 0).

        Args:
            comment_id: Comment ID
        """
        pass
