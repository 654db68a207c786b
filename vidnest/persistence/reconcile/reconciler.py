"""Likes index reconciler.

Brings the likes table to its target shape: one partial unique index per
target kind on (target column, liked_by), an exactly-one-target CHECK
constraint, and comment like counters that match the likes table. Every
step is idempotent; a second run on a reconciled table plans nothing.
"""

from enum import Enum
from typing import Optional

import logfire
from pydantic import BaseModel, Field

from vidnest.persistence.reconcile.catalog import (
    DuplicateGroup,
    IndexDefinition,
    LikesCatalog,
)
from vidnest.persistence.tables import (
    LIKE_TARGET_CHECK_NAME,
    LIKE_TARGET_CHECK_SQL,
    LIKE_TARGET_COLUMNS,
    like_unique_index_name,
)


class StepKind(str, Enum):
    """Repair actions the reconciler can take."""

    DELETE_UNTARGETED = "delete_untargeted"
    DROP_INDEX = "drop_index"
    DEDUPLICATE = "deduplicate"
    CREATE_INDEX = "create_index"
    RENAME_INDEX = "rename_index"
    ADD_CHECK = "add_check"
    RESYNC_LIKE_COUNTS = "resync_like_counts"


class ReconcileStep(BaseModel):
    """One planned (or executed) repair action."""

    kind: StepKind
    subject: str
    detail: str


class ReconcileReport(BaseModel):
    """Outcome of a reconcile run."""

    dry_run: bool
    steps: list[ReconcileStep] = Field(default_factory=list)
    duplicates: list[DuplicateGroup] = Field(default_factory=list)
    blocked: list[str] = Field(default_factory=list)
    rows_deleted: int = 0
    like_counts_fixed: int = 0

    @property
    def in_sync(self) -> bool:
        """True when nothing needed doing and nothing is blocked."""
        return not self.steps and not self.blocked


def desired_indexes() -> list[IndexDefinition]:
    """The per-kind partial unique indexes the likes table must carry."""
    return [
        IndexDefinition(
            name=like_unique_index_name(kind),
            columns=(column, "liked_by"),
            unique=True,
            predicate=f"{column} IS NOT NULL",
        )
        for kind, column in LIKE_TARGET_COLUMNS.items()
    ]


def staging_index_name(name: str) -> str:
    """Name a replacement index is built under while the old one still guards."""
    return f"{name}_next"


class IndexReconciler:
    """Audits the likes table through a catalog and repairs what differs.

    Order of work:
        1. delete likes that reference no target
        2. build missing or mis-shaped per-kind indexes (after optional
           de-duplication), under a staging name while the final name is taken
        3. drop legacy, mis-shaped and invalid unique indexes whose target
           columns now carry a valid per-kind index
        4. rename staged indexes to their final names
        5. add the exactly-one-target CHECK constraint
        6. resynchronise comments.like_count

    A target kind guarded by a valid unique index stays guarded between
    any two catalog operations.
    """

    def __init__(self, catalog: LikesCatalog) -> None:
        self.catalog = catalog
        self.desired = desired_indexes()
        self._desired_by_name = {index.name: index for index in self.desired}
        self._staging_names = {
            staging_index_name(index.name) for index in self.desired
        }
        self._target_columns = set(LIKE_TARGET_COLUMNS.values())

    async def plan(self, dedupe: bool = False) -> list[ReconcileStep]:
        """Steps a reconcile run would take, without changing anything."""
        report = await self.reconcile(dry_run=True, dedupe=dedupe)
        return report.steps

    async def reconcile(
        self, dry_run: bool = False, dedupe: bool = False
    ) -> ReconcileReport:
        """Reconcile the likes table.

        Args:
            dry_run: Report the plan without executing it
            dedupe: Delete duplicate likes (keeping the oldest) when they
                would block a unique index; otherwise that index is reported
                as blocked, left unbuilt, and whatever index guards the kind
                today is kept

        Returns:
            Report of the steps taken (or planned), duplicates found and
            anything left blocked
        """
        with logfire.span(
            "index_reconciler.reconcile", dry_run=dry_run, dedupe=dedupe
        ):
            report = ReconcileReport(dry_run=dry_run)

            await self._remove_untargeted(report)
            indexes = {index.name: index for index in await self.catalog.list_indexes()}
            guarded, renames = await self._build_missing(report, indexes, dedupe)
            await self._drop_superseded(report, indexes, guarded, renames)
            await self._rename_staged(report, renames)
            await self._ensure_check(report)
            await self._resync_counts(report)

            logfire.info(
                "Likes table reconciled" if not dry_run else "Likes table audited",
                steps=[f"{step.kind.value}:{step.subject}" for step in report.steps],
                blocked=report.blocked,
                duplicate_groups=len(report.duplicates),
                rows_deleted=report.rows_deleted,
                like_counts_fixed=report.like_counts_fixed,
            )
            return report

    def _record(
        self, report: ReconcileReport, kind: StepKind, subject: str, detail: str
    ) -> None:
        report.steps.append(ReconcileStep(kind=kind, subject=subject, detail=detail))
        logfire.info(
            "Reconcile step",
            kind=kind.value,
            subject=subject,
            detail=detail,
            dry_run=report.dry_run,
        )

    async def _remove_untargeted(self, report: ReconcileReport) -> None:
        untargeted = await self.catalog.count_untargeted()
        if not untargeted:
            return
        self._record(
            report,
            StepKind.DELETE_UNTARGETED,
            "likes",
            f"{untargeted} likes reference no target",
        )
        if not report.dry_run:
            report.rows_deleted += await self.catalog.delete_untargeted()

    def _drop_reason(self, index: IndexDefinition) -> Optional[str]:
        wanted = self._desired_by_name.get(index.name)
        if wanted is not None:
            if not index.valid:
                return "invalid index left by an interrupted build"
            if not index.same_shape(wanted):
                return "shape differs from the per-kind partial unique index"
            return None

        if index.name in self._staging_names:
            return "stale staging index"
        if index.unique and self._target_columns & set(index.columns):
            if index.predicate is None:
                return "non-partial unique index over target columns"
            return "legacy unique index over target columns"
        return None

    async def _build_missing(
        self,
        report: ReconcileReport,
        indexes: dict[str, IndexDefinition],
        dedupe: bool,
    ) -> tuple[set[str], dict[str, str]]:
        """Build per-kind indexes that are absent or wrong.

        Returns:
            Target columns guarded by a valid per-kind index once this step
            is done, and the staged index names to rename afterwards
        """
        guarded: set[str] = set()
        renames: dict[str, str] = {}
        for wanted in self.desired:
            column = wanted.columns[0]
            current = indexes.get(wanted.name)
            if current is not None and current.valid and current.same_shape(wanted):
                guarded.add(column)
                continue

            staging = staging_index_name(wanted.name)
            staged = indexes.get(staging)
            if staged is not None and staged.valid and staged.same_shape(wanted):
                # Built by an earlier run that stopped before the rename
                guarded.add(column)
                renames[staging] = wanted.name
                continue

            if not await self._clear_duplicates(report, wanted, dedupe):
                continue

            build_name = wanted.name if current is None else staging
            if build_name == staging and staged is not None:
                self._record(report, StepKind.DROP_INDEX, staging, "stale staging index")
                if not report.dry_run:
                    await self.catalog.drop_index(staging)
                del indexes[staging]

            self._record(
                report,
                StepKind.CREATE_INDEX,
                build_name,
                f"unique ({', '.join(wanted.columns)}) where {wanted.predicate}",
            )
            if not report.dry_run:
                await self.catalog.create_index(
                    wanted.model_copy(update={"name": build_name})
                )
            guarded.add(column)
            if build_name != wanted.name:
                renames[build_name] = wanted.name
        return guarded, renames

    async def _clear_duplicates(
        self, report: ReconcileReport, wanted: IndexDefinition, dedupe: bool
    ) -> bool:
        """Deal with duplicates blocking an index; False if the index stays blocked."""
        column = wanted.columns[0]
        duplicates = await self.catalog.find_duplicates(column)
        if not duplicates:
            return True

        report.duplicates.extend(duplicates)
        if not dedupe:
            logfire.warn(
                "Duplicate likes block unique index",
                index=wanted.name,
                groups=len(duplicates),
            )
            report.blocked.append(wanted.name)
            return False

        extra = sum(group.copies - 1 for group in duplicates)
        self._record(
            report,
            StepKind.DEDUPLICATE,
            column,
            f"{extra} duplicate likes in {len(duplicates)} groups, keeping oldest",
        )
        if not report.dry_run:
            report.rows_deleted += await self.catalog.delete_duplicates(column)
        return True

    async def _drop_superseded(
        self,
        report: ReconcileReport,
        indexes: dict[str, IndexDefinition],
        guarded: set[str],
        renames: dict[str, str],
    ) -> None:
        for index in sorted(indexes.values(), key=lambda index: index.name):
            if index.name in renames:
                continue
            reason = self._drop_reason(index)
            if reason is None:
                continue

            covered = self._target_columns & set(index.columns)
            if index.valid and index.unique and not covered <= guarded:
                logfire.warn(
                    "Index kept until a per-kind index replaces it",
                    index=index.name,
                    reason=reason,
                    unguarded=sorted(covered - guarded),
                )
                continue

            self._record(report, StepKind.DROP_INDEX, index.name, reason)
            if not report.dry_run:
                await self.catalog.drop_index(index.name)

    async def _rename_staged(
        self, report: ReconcileReport, renames: dict[str, str]
    ) -> None:
        for staging, name in renames.items():
            self._record(report, StepKind.RENAME_INDEX, staging, f"renamed to {name}")
            if not report.dry_run:
                await self.catalog.rename_index(staging, name)

    async def _ensure_check(self, report: ReconcileReport) -> None:
        if await self.catalog.has_check_constraint(LIKE_TARGET_CHECK_NAME):
            return

        multi = await self.catalog.count_multi_targeted()
        if multi:
            logfire.warn(
                "Likes with several targets block the CHECK constraint",
                constraint=LIKE_TARGET_CHECK_NAME,
                rows=multi,
            )
            report.blocked.append(LIKE_TARGET_CHECK_NAME)
            return

        self._record(
            report, StepKind.ADD_CHECK, LIKE_TARGET_CHECK_NAME, LIKE_TARGET_CHECK_SQL
        )
        if not report.dry_run:
            await self.catalog.add_check_constraint(
                LIKE_TARGET_CHECK_NAME, LIKE_TARGET_CHECK_SQL
            )

    async def _resync_counts(self, report: ReconcileReport) -> None:
        drift = await self.catalog.count_like_count_drift()
        if not drift:
            return
        self._record(
            report,
            StepKind.RESYNC_LIKE_COUNTS,
            "comments.like_count",
            f"{drift} comments out of sync with their likes",
        )
        if not report.dry_run:
            report.like_counts_fixed = await self.catalog.resync_like_counts()
