"""Partition the source catalog against one consumer's current indexers."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .equivalence import needs_update
from .policy import is_wanted

if TYPE_CHECKING:
    from collections.abc import Iterable

    from arrsync.domain.model import (
        ConsumerIndexer,
        ConsumerProfile,
        IndexerId,
        RuleTable,
        SourceIndexer,
    )
    from arrsync.domain.ports import IdentityCheck

log = getLogger(__name__)


@dataclass(slots=True)
class IndexerDiff:
    """Outcome of comparing the source catalog with one consumer.

    ``to_create`` and ``to_update`` follow the source catalog order. Orphans are
    reported for manual removal and never end up in either write list.
    """

    to_create: list[SourceIndexer] = field(default_factory=list["SourceIndexer"])
    to_update: list[SourceIndexer] = field(default_factory=list["SourceIndexer"])
    skipped: list[IndexerId] = field(default_factory=list["IndexerId"])
    orphaned: list[IndexerId] = field(default_factory=list["IndexerId"])
    existing: dict[IndexerId, ConsumerIndexer] = field(
        default_factory=dict["IndexerId", "ConsumerIndexer"]
    )

    def app_id_for(self, indexer_id: IndexerId) -> int:
        return self.existing[indexer_id].app_id

    @property
    def is_empty(self) -> bool:
        return not self.to_create and not self.to_update


def diff(
    profile: ConsumerProfile,
    current: Iterable[ConsumerIndexer],
    catalog: Iterable[SourceIndexer],
    rules: RuleTable,
    *,
    identity: IdentityCheck | None = None,
) -> IndexerDiff:
    """Work out which source indexers the consumer is missing or holds stale."""

    sources = _index_sources(catalog)
    existing = _index_existing(profile, current)
    result = IndexerDiff(existing=existing)

    for indexer_id, indexer in sources.items():
        stored = existing.get(indexer_id)
        if stored is None:
            if is_wanted(profile, indexer, rules):
                result.to_create.append(indexer)
            else:
                log.debug(
                    f"[{profile.name}] Skipping add for {indexer_id}, "
                    "since there were no matching categories."
                )
                result.skipped.append(indexer_id)
            continue

        if needs_update(stored, indexer, profile, rules, identity=identity):
            result.to_update.append(indexer)
        else:
            log.debug(f"[{profile.name}] Skipping update for {indexer_id}, no changes detected")
            result.skipped.append(indexer_id)

    for indexer_id in existing:
        if indexer_id not in sources:
            log.warning(
                f"[{profile.name}] Found indexer {indexer_id} which is not in the source "
                "catalog, please remove manually"
            )
            result.orphaned.append(indexer_id)

    return result


def _index_sources(catalog: Iterable[SourceIndexer]) -> dict[IndexerId, SourceIndexer]:
    sources: dict[IndexerId, SourceIndexer] = {}
    for indexer in catalog:
        sources.setdefault(indexer.id, indexer)
    return sources


def _index_existing(
    profile: ConsumerProfile,
    current: Iterable[ConsumerIndexer],
) -> dict[IndexerId, ConsumerIndexer]:
    existing: dict[IndexerId, ConsumerIndexer] = {}
    for record in current:
        if record.id in existing:
            log.warning(
                f"[{profile.name}] Indexer {record.id} is configured more than once "
                f"(app ids {existing[record.id].app_id} and {record.app_id}), "
                "only the first one is kept in sync"
            )
            continue
        existing[record.id] = record
    return existing
