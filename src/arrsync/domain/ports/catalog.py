"""Port for reading the source catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from arrsync.domain.model import SourceIndexer


@runtime_checkable
class SourceCatalogFetcher(Protocol):
    """Returns the aggregator's indexers or raises ``FetchError``."""

    async def fetch_source_catalog(self) -> list[SourceIndexer]: ...


__all__ = ["SourceCatalogFetcher"]
