"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from vidnest.domain.model.comment import Comment, CommentWithOwner
from vidnest.domain.repository.comment import CommentRepository
from vidnest.domain.repository.user import UserRepository
from vidnest.domain.value import CommentId, CommentParent


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Owner summaries are joined from the given user repository; comments
    whose owner is unknown are left out of listings, like an inner join.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._user_repository = user_repository

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace a comment's content and bump updated_at."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(
            update={"content": content, "updated_at": datetime.now()}
        )
        self._comments[comment_id] = updated
        return updated

    async def find_thread_ids(self, comment_id: CommentId) -> List[CommentId]:
        """Find a comment and all of its replies, breadth first."""
        if comment_id not in self._comments:
            return []

        found = [comment_id]
        frontier = [comment_id]
        while frontier:
            children = [
                c.id
                for c in self._comments.values()
                if c.parent_comment_id in frontier
            ]
            found.extend(children)
            frontier = children
        return found

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard-delete comments."""
        removed = 0
        for comment_id in comment_ids:
            if self._comments.pop(comment_id, None) is not None:
                removed += 1
        return removed

    async def find_top_level_with_owner(
        self, parent: CommentParent, limit: int = 10, offset: int = 0
    ) -> Tuple[List[CommentWithOwner], int]:
        """Find top-level comments on a video or tweet, newest first."""
        return await self._find_with_owner(
            lambda c: c.parent == parent and c.parent_comment_id is None,
            limit,
            offset,
        )

    async def find_replies_with_owner(
        self, parent_comment_id: CommentId, limit: int = 10, offset: int = 0
    ) -> Tuple[List[CommentWithOwner], int]:
        """Find direct replies to a comment, newest first."""
        return await self._find_with_owner(
            lambda c: c.parent_comment_id == parent_comment_id, limit, offset
        )

    async def _find_with_owner(
        self, predicate: Callable[[Comment], bool], limit: int, offset: int
    ) -> Tuple[List[CommentWithOwner], int]:
        joined: List[CommentWithOwner] = []
        for comment in self._comments.values():
            if not predicate(comment):
                continue
            owner = await self._user_repository.find_by_id(comment.owner_id)
            if owner is None:
                continue
            joined.append(CommentWithOwner(comment=comment, owner=owner.summary()))

        # Stable sort over reversed insertion order: later inserts win ties
        ordered = sorted(
            reversed(joined), key=lambda item: item.comment.created_at, reverse=True
        )
        return ordered[offset : offset + limit], len(ordered)

    async def increment_like_count(self, comment_id: CommentId) -> None:
        """Increment the like counter by 1."""
        comment = self._comments.get(comment_id)
        if comment is not None:
            self._comments[comment_id] = comment.model_copy(
                update={"like_count": comment.like_count + 1}
            )

    async def decrement_like_count(self, comment_id: CommentId) -> None:
        """Decrement the like counter by 1 (minimum 0)."""
        comment = self._comments.get(comment_id)
        if comment is not None and comment.like_count > 0:
            self._comments[comment_id] = comment.model_copy(
                update={"like_count": comment.like_count - 1}
            )
