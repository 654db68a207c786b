"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from vidnest.domain.model.like import Like, LikedComment, LikedVideo
from vidnest.domain.value import CommentId, LikeId, LikeTarget, TargetKind, UserId


class LikeRepository(ABC):
    """Repository for Like entity.

    Defines the contract for like persistence operations.
    Implementations live in the infrastructure layer and must enforce
    one like per (target kind, target id, actor) atomically.
    """

    @abstractmethod
    async def find_by_id(self, like_id: LikeId) -> Optional[Like]:
        """Find a like by ID.

        Args:
            like_id: The like's unique identifier

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_actor_and_target(
        self, actor_id: UserId, target: LikeTarget
    ) -> Optional[Like]:
        """Find a user's like on a specific target.

        Args:
            actor_id: The user's ID
            target: The liked video, comment or tweet

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, actor_id: UserId, target: LikeTarget) -> bool:
        """Check whether a user likes a target.

        Must be a single indexed point lookup.

        Args:
            actor_id: The user's ID
            target: The target to check

        Returns:
            True if the like exists
        """
        pass

    @abstractmethod
    async def create(self, like: Like) -> Like:
        """Insert a like.

        The insert is atomic with respect to the uniqueness rule: of any
        number of concurrent inserts for the same (target, actor) exactly
        one succeeds.

        Args:
            like: The like to insert

        Returns:
            The stored like

        Raises:
            ConflictError: If the user already likes this target
        """
        pass

    @abstractmethod
    async def delete(self, like_id: LikeId) -> bool:
        """Delete a like by ID.

        Args:
            like_id: The like ID to delete

        Returns:
            True if a like was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_actor_and_target(
        self, actor_id: UserId, target: LikeTarget
    ) -> bool:
        """Delete a user's like on a target.

        Args:
            actor_id: The user's ID
            target: The liked target

        Returns:
            True if a like was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_for_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every like pointing at any of the given comments.

        Args:
            comment_ids: Comments being removed

        Returns:
            Number of likes deleted
        """
        pass

    @abstractmethod
    async def count_by_target(self, target: LikeTarget) -> int:
        """Count likes on a target.

        Args:
            target: The target to count

        Returns:
            Number of likes
        """
        pass

    @abstractmethod
    async def find_by_actor(
        self,
        actor_id: UserId,
        kind: Optional[TargetKind] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Like], int]:
        """Find a user's likes, newest first.

        Args:
            actor_id: The user's ID
            kind: Restrict to one target kind (None for all kinds)
            limit: Maximum number of likes to return
            offset: Number of likes to skip

        Returns:
            The requested slice and the total number of matching likes
        """
        pass

    @abstractmethod
    async def find_liked_ids(
        self, actor_id: UserId, kind: TargetKind, target_ids: Sequence[UUID]
    ) -> set[UUID]:
        """Find which of the given targets a user likes (batch query).

        Args:
            actor_id: The user's ID
            kind: Kind shared by all target_ids
            target_ids: IDs to check

        Returns:
            The subset of target_ids the user likes
        """
        pass

    @abstractmethod
    async def find_liked_videos(
        self, actor_id: UserId, limit: int = 10, offset: int = 0
    ) -> Tuple[List[LikedVideo], int]:
        """Find the videos a user likes, most recently liked first.

        Each like is joined with its video and the video owner in one
        query. Likes whose video or owner no longer exists are left out.

        Args:
            actor_id: The user's ID
            limit: Maximum number of entries to return
            offset: Number of entries to skip

        Returns:
            The requested slice and the total number of joined entries
        """
        pass

    @abstractmethod
    async def find_liked_comments(
        self, actor_id: UserId, limit: int = 10, offset: int = 0
    ) -> Tuple[List[LikedComment], int]:
        """Find the comments a user likes, most recently liked first.

        Each like is joined with its comment and the comment author in one
        query. Likes whose comment or author no longer exists are left out.

        Args:
            actor_id: The user's ID
            limit: Maximum number of entries to return
            offset: Number of entries to skip

        Returns:
            The requested slice and the total number of joined entries
        """
        pass
