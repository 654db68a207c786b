"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from vidnest.domain.model import Comment, CommentWithOwner
from vidnest.domain.repository import CommentRepository
from vidnest.domain.value import CommentId, CommentParent, VideoRef
from vidnest.persistence.errors import translate_storage_errors
from vidnest.persistence.mappers import (
    comment_to_dict,
    row_to_comment,
    row_to_comment_with_owner,
)
from vidnest.persistence.tables import comments_table, users_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        async with translate_storage_errors("comment.find_by_id", "comment"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        async with translate_storage_errors("comment.save", "comment"):
            await self.session.execute(stmt)
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace a comment's content and bump updated_at."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(content=content, updated_at=datetime.now())
            .returning(comments_table)
        )
        async with translate_storage_errors("comment.update_content", "comment"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_thread_ids(self, comment_id: CommentId) -> List[CommentId]:
        """Find a comment and all of its replies with a recursive CTE."""
        thread = (
            select(comments_table.c.id)
            .where(comments_table.c.id == comment_id)
            .cte("thread", recursive=True)
        )
        thread = thread.union_all(
            select(comments_table.c.id).where(
                comments_table.c.parent_comment_id == thread.c.id
            )
        )
        stmt = select(thread.c.id)
        async with translate_storage_errors("comment.find_thread_ids", "comment"):
            result = await self.session.execute(stmt)
        return [CommentId(row[0]) for row in result.fetchall()]

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard-delete comments."""
        if not comment_ids:
            return 0

        stmt = delete(comments_table).where(comments_table.c.id.in_(comment_ids))
        async with translate_storage_errors("comment.delete_many", "comment"):
            result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    async def find_top_level_with_owner(
        self, parent: CommentParent, limit: int = 10, offset: int = 0
    ) -> Tuple[List[CommentWithOwner], int]:
        """Find top-level comments on a video or tweet, joined with owners."""
        parent_column = (
            comments_table.c.video_id
            if isinstance(parent, VideoRef)
            else comments_table.c.tweet_id
        )
        condition = and_(
            parent_column == parent.id,
            comments_table.c.parent_comment_id.is_(None),
        )
        return await self._find_with_owner(
            "comment.find_top_level_with_owner", condition, limit, offset
        )

    async def find_replies_with_owner(
        self, parent_comment_id: CommentId, limit: int = 10, offset: int = 0
    ) -> Tuple[List[CommentWithOwner], int]:
        """Find direct replies to a comment, joined with owners."""
        condition = comments_table.c.parent_comment_id == parent_comment_id
        return await self._find_with_owner(
            "comment.find_replies_with_owner", condition, limit, offset
        )

    async def _find_with_owner(
        self,
        operation: str,
        condition: ColumnElement[bool],
        limit: int,
        offset: int,
    ) -> Tuple[List[CommentWithOwner], int]:
        """Run a listing query: filter, join owners, order, count and slice at once."""
        stmt = (
            select(
                comments_table,
                users_table.c.username.label("owner_username"),
                users_table.c.full_name.label("owner_full_name"),
                users_table.c.avatar_url.label("owner_avatar_url"),
                func.count().over().label("total_count"),
            )
            .select_from(
                comments_table.join(
                    users_table, comments_table.c.owner_id == users_table.c.id
                )
            )
            .where(condition)
            .order_by(comments_table.c.created_at.desc(), comments_table.c.seq.desc())
            .limit(limit)
            .offset(offset)
        )

        async with translate_storage_errors(operation, "comment"):
            result = await self.session.execute(stmt)
            rows = [row._asdict() for row in result.fetchall()]

            if rows:
                total = rows[0]["total_count"]
            elif offset > 0:
                # Window count is unavailable past the last page
                count_stmt = (
                    select(func.count()).select_from(comments_table).where(condition)
                )
                total = (await self.session.execute(count_stmt)).scalar() or 0
            else:
                total = 0

        return [row_to_comment_with_owner(row) for row in rows], total

    async def increment_like_count(self, comment_id: CommentId) -> None:
        """Atomically increment the like counter by 1."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(like_count=comments_table.c.like_count + 1)
        )
        async with translate_storage_errors("comment.increment_like_count", "comment"):
            await self.session.execute(stmt)

    async def decrement_like_count(self, comment_id: CommentId) -> None:
        """Atomically decrement the like counter by 1 (minimum 0)."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.like_count > 0)  # Don't go below 0
            .values(like_count=comments_table.c.like_count - 1)
        )
        async with translate_storage_errors("comment.decrement_like_count", "comment"):
            await self.session.execute(stmt)
