"""In-memory likes catalog for testing the reconciler."""

from collections import Counter
from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from vidnest.persistence.reconcile.catalog import (
    DuplicateGroup,
    IndexDefinition,
    LikesCatalog,
)
from vidnest.persistence.tables import LIKE_TARGET_COLUMNS

TARGET_COLUMNS = tuple(LIKE_TARGET_COLUMNS.values())


class InMemoryLikesCatalog(LikesCatalog):
    """Likes catalog over plain dict rows.

    Rows carry the raw column layout (video_id, comment_id, tweet_id,
    liked_by, created_at) so tests can seed states the domain model refuses
    to represent.
    """

    def __init__(
        self,
        indexes: Optional[list[IndexDefinition]] = None,
        rows: Optional[list[dict[str, Any]]] = None,
        check_constraints: Optional[set[str]] = None,
        comment_like_counts: Optional[dict[UUID, int]] = None,
    ) -> None:
        self.indexes: dict[str, IndexDefinition] = {
            index.name: index for index in indexes or []
        }
        self.rows: list[dict[str, Any]] = list(rows or [])
        self.check_constraints: set[str] = set(check_constraints or ())
        self.comment_like_counts: dict[UUID, int] = dict(comment_like_counts or {})
        self.executed: list[str] = []

    def add_like(
        self,
        liked_by: UUID,
        created_at: Optional[datetime] = None,
        **targets: Optional[UUID],
    ) -> dict[str, Any]:
        """Seed a raw like row."""
        row = {
            "id": uuid4(),
            "liked_by": liked_by,
            "created_at": created_at or datetime.now(),
            **{column: targets.get(column) for column in TARGET_COLUMNS},
        }
        self.rows.append(row)
        return row

    @staticmethod
    def _targets(row: dict[str, Any]) -> int:
        return sum(1 for column in TARGET_COLUMNS if row.get(column) is not None)

    async def list_indexes(self) -> list[IndexDefinition]:
        return sorted(self.indexes.values(), key=lambda index: index.name)

    async def drop_index(self, name: str) -> None:
        self.executed.append(f"drop {name}")
        self.indexes.pop(name, None)

    async def create_index(self, index: IndexDefinition) -> None:
        self.executed.append(f"create {index.name}")
        self.indexes.setdefault(index.name, index)

    async def rename_index(self, name: str, new_name: str) -> None:
        self.executed.append(f"rename {name} {new_name}")
        index = self.indexes.pop(name)
        self.indexes[new_name] = index.model_copy(update={"name": new_name})

    async def count_untargeted(self) -> int:
        return sum(1 for row in self.rows if self._targets(row) == 0)

    async def delete_untargeted(self) -> int:
        before = len(self.rows)
        self.rows = [row for row in self.rows if self._targets(row) != 0]
        return before - len(self.rows)

    async def count_multi_targeted(self) -> int:
        return sum(1 for row in self.rows if self._targets(row) > 1)

    async def find_duplicates(self, column: str) -> list[DuplicateGroup]:
        counts = Counter(
            (row[column], row["liked_by"])
            for row in self.rows
            if row.get(column) is not None
        )
        return [
            DuplicateGroup(
                column=column, target_id=target_id, liked_by=liked_by, copies=copies
            )
            for (target_id, liked_by), copies in counts.items()
            if copies > 1
        ]

    async def delete_duplicates(self, column: str) -> int:
        kept: set[tuple[UUID, UUID]] = set()
        survivors = []
        removed = 0
        for row in sorted(self.rows, key=lambda r: (r["created_at"], str(r["id"]))):
            if row.get(column) is None:
                survivors.append(row)
                continue
            key = (row[column], row["liked_by"])
            if key in kept:
                removed += 1
                continue
            kept.add(key)
            survivors.append(row)
        self.rows = survivors
        return removed

    async def has_check_constraint(self, name: str) -> bool:
        return name in self.check_constraints

    async def add_check_constraint(self, name: str, expression: str) -> None:
        self.executed.append(f"check {name}")
        self.check_constraints.add(name)

    def _actual_counts(self) -> Counter:
        return Counter(
            row["comment_id"] for row in self.rows if row.get("comment_id") is not None
        )

    async def count_like_count_drift(self) -> int:
        actual = self._actual_counts()
        return sum(
            1
            for comment_id, stored in self.comment_like_counts.items()
            if stored != actual.get(comment_id, 0)
        )

    async def resync_like_counts(self) -> int:
        actual = self._actual_counts()
        fixed = 0
        for comment_id, stored in self.comment_like_counts.items():
            if stored != actual.get(comment_id, 0):
                self.comment_like_counts[comment_id] = actual.get(comment_id, 0)
                fixed += 1
        return fixed
