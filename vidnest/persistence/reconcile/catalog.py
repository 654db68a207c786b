"""Catalog of the likes table as seen by the index reconciler.

The reconciler decides; a catalog inspects and executes. Postgres and
in-memory implementations share this contract.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


def normalize_predicate(predicate: Optional[str]) -> Optional[str]:
    """Canonical form of an index predicate for comparison.

    Postgres reports `WHERE video_id IS NOT NULL` as `(video_id IS NOT NULL)`;
    both normalize to `video_id is not null`.
    """
    if predicate is None:
        return None
    return re.sub(r"[()\s]+", " ", predicate).strip().lower() or None


class IndexDefinition(BaseModel):
    """An index on the likes table, existing or desired."""

    model_config = ConfigDict(frozen=True)

    name: str
    columns: tuple[str, ...]
    unique: bool = False
    predicate: Optional[str] = None
    valid: bool = True

    def same_shape(self, other: "IndexDefinition") -> bool:
        """Whether two indexes enforce the same rule (name ignored)."""
        return (
            self.columns == other.columns
            and self.unique == other.unique
            and normalize_predicate(self.predicate)
            == normalize_predicate(other.predicate)
        )


class DuplicateGroup(BaseModel):
    """Likes sharing one (target, user) pair, blocking a unique index."""

    model_config = ConfigDict(frozen=True)

    column: str
    target_id: UUID
    liked_by: UUID
    copies: int


class LikesCatalog(ABC):
    """Inspection and repair operations on the likes table."""

    @abstractmethod
    async def list_indexes(self) -> list[IndexDefinition]:
        """List every non-primary index on the likes table."""
        pass

    @abstractmethod
    async def drop_index(self, name: str) -> None:
        """Drop an index without blocking writes."""
        pass

    @abstractmethod
    async def create_index(self, index: IndexDefinition) -> None:
        """Build an index without blocking writes (no-op if the name exists)."""
        pass

    @abstractmethod
    async def rename_index(self, name: str, new_name: str) -> None:
        """Rename an index in place."""
        pass

    @abstractmethod
    async def count_untargeted(self) -> int:
        """Count likes with no target column populated."""
        pass

    @abstractmethod
    async def delete_untargeted(self) -> int:
        """Delete likes with no target column populated.

        Returns:
            Number of rows deleted
        """
        pass

    @abstractmethod
    async def count_multi_targeted(self) -> int:
        """Count likes with more than one target column populated."""
        pass

    @abstractmethod
    async def find_duplicates(self, column: str) -> list[DuplicateGroup]:
        """Find (target, user) pairs liked more than once through a column."""
        pass

    @abstractmethod
    async def delete_duplicates(self, column: str) -> int:
        """Delete duplicate likes, keeping the oldest of each group.

        Returns:
            Number of rows deleted
        """
        pass

    @abstractmethod
    async def has_check_constraint(self, name: str) -> bool:
        """Whether the likes table carries the named CHECK constraint."""
        pass

    @abstractmethod
    async def add_check_constraint(self, name: str, expression: str) -> None:
        """Add a CHECK constraint to the likes table."""
        pass

    @abstractmethod
    async def count_like_count_drift(self) -> int:
        """Count comments whose like_count differs from their actual likes."""
        pass

    @abstractmethod
    async def resync_like_counts(self) -> int:
        """Recompute comments.like_count from the likes table.

        Returns:
            Number of comments corrected
        """
        pass
