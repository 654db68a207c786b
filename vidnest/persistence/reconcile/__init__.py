"""Likes table index reconciliation."""

from .catalog import DuplicateGroup, IndexDefinition, LikesCatalog
from .inmemory import InMemoryLikesCatalog
from .postgres import PostgresLikesCatalog
from .reconciler import (
    IndexReconciler,
    ReconcileReport,
    ReconcileStep,
    StepKind,
    desired_indexes,
    staging_index_name,
)

__all__ = [
    "DuplicateGroup",
    "IndexDefinition",
    "IndexReconciler",
    "InMemoryLikesCatalog",
    "LikesCatalog",
    "PostgresLikesCatalog",
    "ReconcileReport",
    "ReconcileStep",
    "StepKind",
    "desired_indexes",
    "staging_index_name",
]
