"""Reconciliation engine: category policy, differ, equivalence check and driver."""

from __future__ import annotations

from .diff import IndexerDiff, diff
from .driver import ReconcileResult, reconcile
from .equivalence import needs_update
from .policy import (
    CategorySelection,
    apply_overrides,
    categories_equal,
    expected_categories,
    is_wanted,
    planned_selection,
    reverse_overrides,
)

__all__ = [
    "CategorySelection",
    "IndexerDiff",
    "ReconcileResult",
    "apply_overrides",
    "categories_equal",
    "diff",
    "expected_categories",
    "is_wanted",
    "needs_update",
    "planned_selection",
    "reconcile",
    "reverse_overrides",
]
