"""PostgreSQL implementation of Like repository."""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import Table, and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.expression import Join

from vidnest.domain.error import ConflictError
from vidnest.domain.model import Like, LikedComment, LikedVideo
from vidnest.domain.repository import LikeRepository
from vidnest.domain.value import CommentId, LikeId, LikeTarget, TargetKind, UserId
from vidnest.persistence.errors import translate_storage_errors
from vidnest.persistence.mappers import (
    like_to_dict,
    row_to_like,
    row_to_liked_comment,
    row_to_liked_video,
)
from vidnest.persistence.tables import (
    LIKE_TARGET_COLUMNS,
    comments_table,
    likes_table,
    users_table,
    videos_table,
)


def _target_clause(target: LikeTarget) -> ColumnElement[bool]:
    """WHERE clause selecting likes on one target."""
    return likes_table.c[LIKE_TARGET_COLUMNS[target.kind]] == target.id


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository.

    Uniqueness is enforced by the per-kind partial unique indexes; create
    is a single INSERT ... ON CONFLICT DO NOTHING.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, like_id: LikeId) -> Optional[Like]:
        """Find a like by ID."""
        stmt = select(likes_table).where(likes_table.c.id == like_id)
        async with translate_storage_errors("like.find_by_id", "like"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_like(row._asdict()) if row else None

    async def find_by_actor_and_target(
        self, actor_id: UserId, target: LikeTarget
    ) -> Optional[Like]:
        """Find a user's like on a specific target."""
        stmt = select(likes_table).where(
            and_(likes_table.c.liked_by == actor_id, _target_clause(target))
        )
        async with translate_storage_errors("like.find_by_actor_and_target", "like"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_like(row._asdict()) if row else None

    async def exists(self, actor_id: UserId, target: LikeTarget) -> bool:
        """Check whether a user likes a target."""
        stmt = select(
            select(likes_table.c.id)
            .where(and_(likes_table.c.liked_by == actor_id, _target_clause(target)))
            .exists()
        )
        async with translate_storage_errors("like.exists", "like"):
            result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def create(self, like: Like) -> Like:
        """Insert a like, raising ConflictError if the user already likes the target."""
        stmt = (
            insert(likes_table)
            .values(**like_to_dict(like))
            .on_conflict_do_nothing()
            .returning(likes_table.c.id)
        )
        async with translate_storage_errors("like.create", "like"):
            result = await self.session.execute(stmt)
            inserted = result.scalar_one_or_none()

        if inserted is None:
            raise ConflictError("like", f"{like.liked_by} already likes {like.target}")
        return like

    async def delete(self, like_id: LikeId) -> bool:
        """Delete a like by ID."""
        stmt = delete(likes_table).where(likes_table.c.id == like_id)
        async with translate_storage_errors("like.delete", "like"):
            result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_actor_and_target(
        self, actor_id: UserId, target: LikeTarget
    ) -> bool:
        """Delete a user's like on a target."""
        stmt = delete(likes_table).where(
            and_(likes_table.c.liked_by == actor_id, _target_clause(target))
        )
        async with translate_storage_errors("like.delete_by_actor_and_target", "like"):
            result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_for_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every like pointing at any of the given comments."""
        if not comment_ids:
            return 0

        stmt = delete(likes_table).where(likes_table.c.comment_id.in_(comment_ids))
        async with translate_storage_errors("like.delete_for_comments", "like"):
            result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    async def count_by_target(self, target: LikeTarget) -> int:
        """Count likes on a target (index-backed)."""
        stmt = (
            select(func.count())
            .select_from(likes_table)
            .where(_target_clause(target))
        )
        async with translate_storage_errors("like.count_by_target", "like"):
            result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_actor(
        self,
        actor_id: UserId,
        kind: Optional[TargetKind] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Like], int]:
        """Find a user's likes, newest first, with the total in the same query."""
        condition = likes_table.c.liked_by == actor_id
        if kind is not None:
            condition = and_(
                condition, likes_table.c[LIKE_TARGET_COLUMNS[kind]].isnot(None)
            )

        stmt = (
            select(likes_table, func.count().over().label("total_count"))
            .where(condition)
            .order_by(likes_table.c.created_at.desc(), likes_table.c.id.desc())
            .limit(limit)
            .offset(offset)
        )
        async with translate_storage_errors("like.find_by_actor", "like"):
            result = await self.session.execute(stmt)
            rows = [row._asdict() for row in result.fetchall()]

            if rows:
                total = rows[0]["total_count"]
            elif offset > 0:
                # Window count is unavailable past the last page
                count_stmt = (
                    select(func.count()).select_from(likes_table).where(condition)
                )
                total = (await self.session.execute(count_stmt)).scalar() or 0
            else:
                total = 0

        return [row_to_like(row) for row in rows], total

    async def find_liked_ids(
        self, actor_id: UserId, kind: TargetKind, target_ids: Sequence[UUID]
    ) -> set[UUID]:
        """Find which of the given targets a user likes (batch query)."""
        if not target_ids:
            return set()

        column = likes_table.c[LIKE_TARGET_COLUMNS[kind]]
        stmt = select(column).where(
            and_(likes_table.c.liked_by == actor_id, column.in_(target_ids))
        )
        async with translate_storage_errors("like.find_liked_ids", "like"):
            result = await self.session.execute(stmt)
        return {row[0] for row in result.fetchall()}

    async def find_liked_videos(
        self, actor_id: UserId, limit: int = 10, offset: int = 0
    ) -> Tuple[List[LikedVideo], int]:
        """Find the videos a user likes, joined with video owners."""
        joined = likes_table.join(
            videos_table, likes_table.c.video_id == videos_table.c.id
        ).join(users_table, videos_table.c.owner_id == users_table.c.id)
        rows, total = await self._find_joined(
            "like.find_liked_videos", videos_table, joined, actor_id, limit, offset
        )
        return [row_to_liked_video(row) for row in rows], total

    async def find_liked_comments(
        self, actor_id: UserId, limit: int = 10, offset: int = 0
    ) -> Tuple[List[LikedComment], int]:
        """Find the comments a user likes, joined with comment authors."""
        joined = likes_table.join(
            comments_table, likes_table.c.comment_id == comments_table.c.id
        ).join(users_table, comments_table.c.owner_id == users_table.c.id)
        rows, total = await self._find_joined(
            "like.find_liked_comments", comments_table, joined, actor_id, limit, offset
        )
        return [row_to_liked_comment(row) for row in rows], total

    async def _find_joined(
        self,
        operation: str,
        target_table: Table,
        joined: Join,
        actor_id: UserId,
        limit: int,
        offset: int,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Run a liked-targets listing: join, order, count and slice at once."""
        condition = likes_table.c.liked_by == actor_id
        stmt = (
            select(
                target_table,
                likes_table.c.id.label("like_id"),
                likes_table.c.created_at.label("liked_at"),
                users_table.c.username.label("owner_username"),
                users_table.c.full_name.label("owner_full_name"),
                users_table.c.avatar_url.label("owner_avatar_url"),
                func.count().over().label("total_count"),
            )
            .select_from(joined)
            .where(condition)
            .order_by(likes_table.c.created_at.desc(), likes_table.c.id.desc())
            .limit(limit)
            .offset(offset)
        )

        async with translate_storage_errors(operation, "like"):
            result = await self.session.execute(stmt)
            rows = [row._asdict() for row in result.fetchall()]

            if rows:
                total = rows[0]["total_count"]
            elif offset > 0:
                # Window count is unavailable past the last page
                count_stmt = select(func.count()).select_from(joined).where(condition)
                total = (await self.session.execute(count_stmt)).scalar() or 0
            else:
                total = 0

        return rows, total
