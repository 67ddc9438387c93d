"""Decide whether a stored indexer already matches its source definition."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .policy import CategorySelection, categories_equal, expected_categories, reverse_overrides

if TYPE_CHECKING:
    from arrsync.domain.model import ConsumerIndexer, ConsumerProfile, RuleTable, SourceIndexer
    from arrsync.domain.ports import IdentityCheck

log = getLogger(__name__)


def needs_update(
    existing: ConsumerIndexer,
    indexer: SourceIndexer,
    profile: ConsumerProfile,
    rules: RuleTable,
    *,
    identity: IdentityCheck | None = None,
) -> bool:
    """Return ``True`` when the stored record has drifted from the source.

    Identity fields are compared with the consumer-specific ``identity`` check
    (skipped when ``None``). Categories are compared after stripping the ones only
    an override rule put there, so override categories never count as drift.
    """

    if identity is not None and not identity(existing, indexer):
        log.debug(f"[{profile.name}] Identity fields of {indexer.id} differ")
        return True

    expected = expected_categories(profile, indexer)
    stored = reverse_overrides(
        profile,
        indexer,
        CategorySelection(existing.categories, existing.anime_categories),
        rules,
        base=CategorySelection(expected),
    )
    if not categories_equal(stored.categories, expected):
        log.debug(
            f"[{profile.name}] Categories of {indexer.id} differ: "
            f"stored={sorted(stored.categories)}, expected={sorted(expected)}"
        )
        return True
    return False
