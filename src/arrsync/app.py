"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from arrsync.adapters.arr import ArrClient
from arrsync.adapters.jackett import JackettClient
from arrsync.config import get_consumer_configs, get_jackett_config, get_rule_table
from arrsync.domain.errors import SyncError
from arrsync.domain.reconciliation import ReconcileResult, reconcile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from arrsync.domain.model import RuleTable, SourceIndexer
    from arrsync.domain.ports import ConsumerApplication, SourceCatalogFetcher


log = getLogger(__name__)


@dataclass(slots=True)
class SyncRunResult:
    """Outcome of one run across every configured consumer."""

    catalog_size: int
    results: dict[str, ReconcileResult | None] = field(
        default_factory=dict[str, "ReconcileResult | None"]
    )

    @property
    def failed_consumers(self) -> list[str]:
        return [name for name, result in self.results.items() if result is None]


async def sync_consumer(
    consumer: ConsumerApplication,
    catalog: Sequence[SourceIndexer],
    rules: RuleTable,
    *,
    dry_run: bool = False,
) -> ReconcileResult | None:
    """Sync one consumer, turning any failure into a log line and ``None``."""

    name = consumer.profile.name
    try:
        async with consumer:
            await consumer.check_status()
            log.info(f"[{name}] Starting sync")
            result = await reconcile(consumer, catalog, rules, dry_run=dry_run)
    except SyncError as exc:
        log.error(f"[{name}] Sync failed: {exc}")
        return None
    except Exception:  # noqa: BLE001
        log.exception(f"[{name}] Sync failed")
        return None

    log.info(
        f"[{name}] Sync is done! created={len(result.created)}, updated={len(result.updated)}, "
        f"failed={len(result.failed)}, orphaned={len(result.orphaned)}"
    )
    return result


async def sync_all(
    *,
    source: SourceCatalogFetcher,
    consumers: Sequence[ConsumerApplication],
    rules: RuleTable,
    dry_run: bool = False,
) -> SyncRunResult:
    """Fetch the source catalog once and reconcile every consumer concurrently.

    A ``FetchError`` for the source catalog propagates; nothing can be reconciled
    without it.
    """

    catalog = await source.fetch_source_catalog()
    outcomes = await asyncio.gather(
        *(sync_consumer(consumer, catalog, rules, dry_run=dry_run) for consumer in consumers)
    )
    return SyncRunResult(
        catalog_size=len(catalog),
        results={
            consumer.profile.name: outcome
            for consumer, outcome in zip(consumers, outcomes, strict=True)
        },
    )


def build_consumers(feed_api_key: str) -> list[ConsumerApplication]:
    return [ArrClient(config=config, feed_api_key=feed_api_key) for config in get_consumer_configs()]


def sync_indexers(
    *,
    source: SourceCatalogFetcher | None = None,
    consumers: Sequence[ConsumerApplication] | None = None,
    rules: RuleTable | None = None,
    dry_run: bool = False,
) -> SyncRunResult:
    """Synchronise Jackett indexers into every configured consumer."""

    if source is None or consumers is None:
        jackett_config = get_jackett_config()
        effective_source = source or JackettClient(config=jackett_config)
        effective_consumers = (
            consumers if consumers is not None else build_consumers(jackett_config.api_key)
        )
    else:
        effective_source = source
        effective_consumers = consumers
    effective_rules = rules if rules is not None else get_rule_table()

    if not effective_consumers:
        log.warning("No consumer application configured, set e.g. SONARR_URL and SONARR_API_KEY")

    log.info(
        f"Starting indexer sync: consumers={[c.profile.name for c in effective_consumers]}, "
        f"rules={len(effective_rules)}, dry_run={dry_run}"
    )
    result = asyncio.run(
        sync_all(
            source=effective_source,
            consumers=effective_consumers,
            rules=effective_rules,
            dry_run=dry_run,
        )
    )
    log.info(
        f"Finished indexer sync: catalog={result.catalog_size}, "
        f"failed_consumers={result.failed_consumers}"
    )
    return result
