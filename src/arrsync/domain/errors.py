"""Errors raised while talking to the aggregator and the consumers.

None of these escape the consumer-scoped operation that raised them, except a
``FetchError`` for the source catalog, which ends the run.
"""

from __future__ import annotations


class SyncError(RuntimeError):
    """Base class for failures during a sync run."""


class FetchError(SyncError):
    """Reading the source catalog or a consumer's indexers failed."""

    def __init__(self, source: str, message: str, *, status: int | None = None) -> None:
        super().__init__(f"[{source}] {message}")
        self.source = source
        self.message = message
        self.status = status


class MappingError(SyncError):
    """One raw indexer record could not be translated into a domain record."""

    def __init__(self, name: str | None, message: str) -> None:
        super().__init__(f"Indexer {name or '<unnamed>'} could not be parsed: {message}")
        self.name = name
        self.message = message


class WriteError(SyncError):
    """A create or update call was rejected by the consumer."""

    def __init__(self, name: str, message: str, *, status: int | None = None) -> None:
        super().__init__(f"Something went wrong with {name}: {message}")
        self.name = name
        self.message = message
        self.status = status
