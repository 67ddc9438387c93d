"""Turn a diff into create/update calls against one consumer."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from arrsync.domain.errors import WriteError

from .diff import diff
from .policy import planned_selection

if TYPE_CHECKING:
    from collections.abc import Awaitable, Sequence

    from arrsync.domain.model import IndexerId, RuleTable, SourceIndexer, WriteOutcome
    from arrsync.domain.ports import ConsumerApplication

    from .diff import IndexerDiff

log = getLogger(__name__)


@dataclass(slots=True)
class ReconcileResult:
    """Per-consumer summary of one run."""

    consumer: str
    created: list[WriteOutcome] = field(default_factory=list["WriteOutcome"])
    updated: list[WriteOutcome] = field(default_factory=list["WriteOutcome"])
    skipped: list[IndexerId] = field(default_factory=list["IndexerId"])
    orphaned: list[IndexerId] = field(default_factory=list["IndexerId"])
    failed: list[str] = field(default_factory=list[str])
    planned_creates: list[IndexerId] = field(default_factory=list["IndexerId"])
    planned_updates: list[IndexerId] = field(default_factory=list["IndexerId"])


async def reconcile(
    consumer: ConsumerApplication,
    catalog: Sequence[SourceIndexer],
    rules: RuleTable,
    *,
    dry_run: bool = False,
) -> ReconcileResult:
    """Bring one consumer in line with the source catalog.

    Raises ``FetchError`` when the consumer's indexers cannot be read. Individual
    write failures are logged and collected in ``failed``; they never stop the
    other writes.
    """

    profile = consumer.profile
    current = await consumer.fetch_indexers()
    plan = diff(profile, current, catalog, rules, identity=consumer.matches_identity)

    result = ReconcileResult(
        consumer=profile.name,
        skipped=list(plan.skipped),
        orphaned=list(plan.orphaned),
        planned_creates=[indexer.id for indexer in plan.to_create],
        planned_updates=[indexer.id for indexer in plan.to_update],
    )
    log.info(
        f"[{profile.name}] {len(plan.to_create)} to add, {len(plan.to_update)} to update, "
        f"{len(plan.skipped)} skipped, {len(plan.orphaned)} orphaned"
    )
    if dry_run:
        for indexer in plan.to_create:
            log.info(f"[{profile.name}] Would add {indexer.name} ({indexer.id})")
        for indexer in plan.to_update:
            log.info(f"[{profile.name}] Would update {indexer.name} ({indexer.id})")
        return result

    created = await _gather_writes(
        profile.name,
        [(indexer.name, _create(consumer, indexer, rules)) for indexer in plan.to_create],
    )
    updated = await _gather_writes(
        profile.name,
        [(indexer.name, _update(consumer, plan, indexer, rules)) for indexer in plan.to_update],
    )
    for outcome in (*created, *updated):
        if isinstance(outcome, WriteError):
            result.failed.append(outcome.name)
    result.created = [outcome for outcome in created if not isinstance(outcome, WriteError)]
    result.updated = [outcome for outcome in updated if not isinstance(outcome, WriteError)]
    return result


async def _create(
    consumer: ConsumerApplication,
    indexer: SourceIndexer,
    rules: RuleTable,
) -> WriteOutcome:
    selection = planned_selection(consumer.profile, indexer, rules)
    return await consumer.create_indexer(
        indexer, selection.categories, selection.anime_categories
    )


async def _update(
    consumer: ConsumerApplication,
    plan: IndexerDiff,
    indexer: SourceIndexer,
    rules: RuleTable,
) -> WriteOutcome:
    selection = planned_selection(consumer.profile, indexer, rules)
    return await consumer.update_indexer(
        plan.app_id_for(indexer.id), indexer, selection.categories, selection.anime_categories
    )


async def _gather_writes(
    consumer_name: str,
    writes: Sequence[tuple[str, Awaitable[WriteOutcome]]],
) -> list[WriteOutcome | WriteError]:
    """Run all writes concurrently and collect each result or ``WriteError``."""

    async def guarded(name: str, write: Awaitable[WriteOutcome]) -> WriteOutcome | WriteError:
        try:
            return await write
        except WriteError as exc:
            log.error(f"[{consumer_name}] {exc}")
            return exc
        except Exception as exc:  # noqa: BLE001
            log.exception(f"[{consumer_name}] Unexpected error while writing {name}")
            return WriteError(name, str(exc))

    return list(await asyncio.gather(*(guarded(name, write) for name, write in writes)))
