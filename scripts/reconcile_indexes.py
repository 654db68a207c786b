#!/usr/bin/env python3
"""Audit and repair the likes table indexes and constraints.

Safe to run repeatedly, including against a live database: index changes
are made CONCURRENTLY, and a second run after a successful one does nothing.

Usage:
    python scripts/reconcile_indexes.py --dry-run     # report the plan only
    python scripts/reconcile_indexes.py               # apply it
    python scripts/reconcile_indexes.py --dedupe      # also delete duplicate likes
"""

import argparse
import asyncio
import sys

import logfire

from vidnest.config import Settings
from vidnest.persistence.reconcile import IndexReconciler, ReconcileReport
from vidnest.util.di.container import create_container
from vidnest.util.logging import setup_logging
from vidnest.util.observability import configure_logfire


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without changing anything",
    )
    parser.add_argument(
        "--dedupe",
        action="store_true",
        help="Delete duplicate likes (keeping the oldest) that block a unique index",
    )
    return parser.parse_args(argv)


def print_report(report: ReconcileReport) -> None:
    if report.in_sync:
        print("likes table is in sync")
        return

    verb = "would" if report.dry_run else "did"
    for step in report.steps:
        print(f"{verb} {step.kind.value}: {step.subject} ({step.detail})")
    for group in report.duplicates:
        print(
            f"duplicate: {group.column}={group.target_id} "
            f"liked_by={group.liked_by} x{group.copies}"
        )
    for name in report.blocked:
        print(f"blocked: {name}")
    if not report.dry_run:
        print(f"rows deleted: {report.rows_deleted}")
        print(f"like counts fixed: {report.like_counts_fixed}")


async def run(dry_run: bool, dedupe: bool) -> ReconcileReport:
    container = create_container()
    try:
        reconciler = await container.get(IndexReconciler)
        return await reconciler.reconcile(dry_run=dry_run, dedupe=dedupe)
    finally:
        await container.close()


def main(argv: list[str] | None = None) -> int:
    """Reconcile the likes table; exit 1 if anything is left blocked."""
    args = parse_args(argv)
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        report = asyncio.run(run(dry_run=args.dry_run, dedupe=args.dedupe))
    except Exception as e:
        logfire.error(
            "Index reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    print_report(report)
    return 1 if report.blocked else 0


if __name__ == "__main__":
    sys.exit(main())
