"""Unit tests for the likes index reconciler."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from vidnest.domain.value import TargetKind
from vidnest.persistence.reconcile import (
    IndexDefinition,
    IndexReconciler,
    InMemoryLikesCatalog,
    StepKind,
    desired_indexes,
    staging_index_name,
)
from vidnest.persistence.tables import LIKE_TARGET_CHECK_NAME, like_unique_index_name


class GuardCheckingCatalog(InMemoryLikesCatalog):
    """Catalog that notes any moment a guarded like kind has no unique index."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.gaps: list[str] = []
        self.guarded = self._guarded_columns()

    def _guarded_columns(self) -> set[str]:
        return {
            index.columns[0]
            for index in self.indexes.values()
            if index.valid and index.unique and index.columns[1:] == ("liked_by",)
        }

    def _check(self, operation: str) -> None:
        now = self._guarded_columns()
        for column in sorted(self.guarded - now):
            self.gaps.append(f"after {operation}: {column} has no unique index")
        self.guarded |= now

    async def drop_index(self, name: str) -> None:
        await super().drop_index(name)
        self._check(f"drop {name}")

    async def create_index(self, index: IndexDefinition) -> None:
        await super().create_index(index)
        self._check(f"create {index.name}")

    async def rename_index(self, name: str, new_name: str) -> None:
        await super().rename_index(name, new_name)
        self._check(f"rename {name}")


def _reconciled_catalog() -> InMemoryLikesCatalog:
    return InMemoryLikesCatalog(
        indexes=desired_indexes(),
        check_constraints={LIKE_TARGET_CHECK_NAME},
    )


class TestReconcile:
    """Tests for IndexReconciler.reconcile."""

    @pytest.mark.asyncio
    async def test_reconciled_table_is_in_sync(self):
        catalog = _reconciled_catalog()
        catalog.add_like(uuid4(), video_id=uuid4())

        report = await IndexReconciler(catalog).reconcile()

        assert report.in_sync
        assert catalog.executed == []

    @pytest.mark.asyncio
    async def test_legacy_composite_index_replaced(self):
        """Per-kind indexes are built first, then the all-columns index is dropped."""
        # Arrange
        legacy = IndexDefinition(
            name="uq_likes_target_user",
            columns=("video_id", "comment_id", "tweet_id", "liked_by"),
            unique=True,
        )
        catalog = InMemoryLikesCatalog(indexes=[legacy])

        # Act
        report = await IndexReconciler(catalog).reconcile()

        # Assert
        kinds = [step.kind for step in report.steps]
        assert kinds.count(StepKind.CREATE_INDEX) == 3
        last_create = max(
            i for i, kind in enumerate(kinds) if kind == StepKind.CREATE_INDEX
        )
        assert kinds.index(StepKind.DROP_INDEX) > last_create
        assert StepKind.ADD_CHECK in kinds
        assert "uq_likes_target_user" not in catalog.indexes
        for kind in TargetKind:
            assert like_unique_index_name(kind) in catalog.indexes
        assert LIKE_TARGET_CHECK_NAME in catalog.check_constraints

        second = await IndexReconciler(catalog).reconcile()
        assert second.in_sync

    @pytest.mark.asyncio
    async def test_non_unique_indexes_left_alone(self):
        catalog = _reconciled_catalog()
        lookup = IndexDefinition(
            name="idx_likes_liked_by_created_at", columns=("liked_by", "created_at")
        )
        catalog.indexes[lookup.name] = lookup

        report = await IndexReconciler(catalog).reconcile()

        assert report.in_sync
        assert lookup.name in catalog.indexes

    @pytest.mark.asyncio
    async def test_invalid_index_rebuilt(self):
        catalog = _reconciled_catalog()
        name = like_unique_index_name(TargetKind.TWEET)
        catalog.indexes[name] = catalog.indexes[name].model_copy(update={"valid": False})

        await IndexReconciler(catalog).reconcile()

        staging = staging_index_name(name)
        assert catalog.executed == [
            f"create {staging}",
            f"drop {name}",
            f"rename {staging} {name}",
        ]
        assert catalog.indexes[name].valid

    @pytest.mark.asyncio
    async def test_postgres_predicate_spelling_matches(self):
        catalog = _reconciled_catalog()
        name = like_unique_index_name(TargetKind.VIDEO)
        catalog.indexes[name] = catalog.indexes[name].model_copy(
            update={"predicate": "(video_id IS NOT NULL)"}
        )

        report = await IndexReconciler(catalog).reconcile()

        assert report.in_sync

    @pytest.mark.asyncio
    async def test_untargeted_likes_deleted(self):
        catalog = _reconciled_catalog()
        catalog.add_like(uuid4())
        catalog.add_like(uuid4(), comment_id=uuid4())

        report = await IndexReconciler(catalog).reconcile()

        assert report.rows_deleted == 1
        assert len(catalog.rows) == 1


class TestGuardedThroughout:
    """Every kind keeps a valid unique index while indexes are replaced."""

    @pytest.mark.asyncio
    async def test_legacy_per_kind_index_replaced_without_gap(self):
        """A legacy unique index is dropped only after its successor exists."""
        # Arrange
        legacy = IndexDefinition(
            name="video_1_likedBy_1", columns=("video_id", "liked_by"), unique=True
        )
        others = [
            index for index in desired_indexes() if index.columns[0] != "video_id"
        ]
        catalog = GuardCheckingCatalog(
            indexes=[legacy, *others], check_constraints={LIKE_TARGET_CHECK_NAME}
        )

        # Act
        await IndexReconciler(catalog).reconcile()

        # Assert
        assert catalog.gaps == []
        video_index = like_unique_index_name(TargetKind.VIDEO)
        assert catalog.executed == [f"create {video_index}", "drop video_1_likedBy_1"]

    @pytest.mark.asyncio
    async def test_misshaped_index_rebuilt_under_staging_name(self):
        """A wrong index holding the target name is swapped out by a rename."""
        # Arrange
        name = like_unique_index_name(TargetKind.COMMENT)
        catalog = GuardCheckingCatalog(
            indexes=desired_indexes(), check_constraints={LIKE_TARGET_CHECK_NAME}
        )
        catalog.indexes[name] = catalog.indexes[name].model_copy(
            update={"predicate": None}
        )

        # Act
        report = await IndexReconciler(catalog).reconcile()

        # Assert
        assert catalog.gaps == []
        assert [step.kind for step in report.steps] == [
            StepKind.CREATE_INDEX,
            StepKind.DROP_INDEX,
            StepKind.RENAME_INDEX,
        ]
        wanted = next(index for index in desired_indexes() if index.name == name)
        assert catalog.indexes[name].same_shape(wanted)
        assert staging_index_name(name) not in catalog.indexes
        assert (await IndexReconciler(catalog).reconcile()).in_sync

    @pytest.mark.asyncio
    async def test_blocked_kind_keeps_legacy_index(self):
        """When duplicates block the new index, the old guard stays in place."""
        # Arrange
        legacy = IndexDefinition(
            name="video_1_likedBy_1", columns=("video_id", "liked_by"), unique=True
        )
        catalog = GuardCheckingCatalog(
            indexes=[legacy], check_constraints={LIKE_TARGET_CHECK_NAME}
        )
        user, video = uuid4(), uuid4()
        catalog.add_like(user, video_id=video)
        catalog.add_like(user, video_id=video)

        # Act
        report = await IndexReconciler(catalog).reconcile()

        # Assert
        assert catalog.gaps == []
        assert report.blocked == [like_unique_index_name(TargetKind.VIDEO)]
        assert legacy.name in catalog.indexes

    @pytest.mark.asyncio
    async def test_interrupted_run_finishes_with_rename(self):
        """A staged index left by a run that stopped early is renamed, not rebuilt."""
        # Arrange
        name = like_unique_index_name(TargetKind.TWEET)
        staging = staging_index_name(name)
        indexes = [
            index.model_copy(update={"name": staging}) if index.name == name else index
            for index in desired_indexes()
        ]
        catalog = GuardCheckingCatalog(
            indexes=indexes, check_constraints={LIKE_TARGET_CHECK_NAME}
        )

        # Act
        await IndexReconciler(catalog).reconcile()

        # Assert
        assert catalog.gaps == []
        assert catalog.executed == [f"rename {staging} {name}"]
        assert name in catalog.indexes


class TestDuplicates:
    """Tests for duplicate likes blocking a unique index."""

    def _catalog_with_duplicates(self):
        catalog = InMemoryLikesCatalog(check_constraints={LIKE_TARGET_CHECK_NAME})
        user, video = uuid4(), uuid4()
        oldest = catalog.add_like(
            user, created_at=datetime.now() - timedelta(days=1), video_id=video
        )
        catalog.add_like(user, video_id=video)
        return catalog, oldest

    @pytest.mark.asyncio
    async def test_duplicates_block_without_dedupe(self):
        catalog, _ = self._catalog_with_duplicates()

        report = await IndexReconciler(catalog).reconcile()

        video_index = like_unique_index_name(TargetKind.VIDEO)
        assert report.blocked == [video_index]
        assert report.duplicates[0].copies == 2
        assert video_index not in catalog.indexes
        assert like_unique_index_name(TargetKind.TWEET) in catalog.indexes
        assert len(catalog.rows) == 2

    @pytest.mark.asyncio
    async def test_dedupe_keeps_oldest(self):
        catalog, oldest = self._catalog_with_duplicates()

        report = await IndexReconciler(catalog).reconcile(dedupe=True)

        assert report.blocked == []
        assert report.rows_deleted == 1
        assert catalog.rows == [oldest]
        assert like_unique_index_name(TargetKind.VIDEO) in catalog.indexes


class TestPlanAndCounts:
    """Tests for dry runs, the CHECK constraint and like counters."""

    @pytest.mark.asyncio
    async def test_plan_changes_nothing(self):
        catalog = InMemoryLikesCatalog()
        catalog.add_like(uuid4())

        steps = await IndexReconciler(catalog).plan()

        assert {step.kind for step in steps} == {
            StepKind.DELETE_UNTARGETED,
            StepKind.CREATE_INDEX,
            StepKind.ADD_CHECK,
        }
        assert catalog.executed == []
        assert len(catalog.rows) == 1

    @pytest.mark.asyncio
    async def test_multi_targeted_rows_block_check(self):
        catalog = InMemoryLikesCatalog(indexes=desired_indexes())
        catalog.add_like(uuid4(), video_id=uuid4(), tweet_id=uuid4())

        report = await IndexReconciler(catalog).reconcile()

        assert report.blocked == [LIKE_TARGET_CHECK_NAME]
        assert LIKE_TARGET_CHECK_NAME not in catalog.check_constraints

    @pytest.mark.asyncio
    async def test_like_counts_resynced(self):
        comment_id = uuid4()
        catalog = _reconciled_catalog()
        catalog.comment_like_counts[comment_id] = 5
        catalog.add_like(uuid4(), comment_id=comment_id)
        catalog.add_like(uuid4(), comment_id=comment_id)

        report = await IndexReconciler(catalog).reconcile()

        assert report.like_counts_fixed == 1
        assert catalog.comment_like_counts[comment_id] == 2
