"""Port implemented once per consumer application."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from arrsync.domain.model import (
        ConsumerIndexer,
        ConsumerProfile,
        SourceIndexer,
        WriteOutcome,
    )

IdentityCheck = Callable[["ConsumerIndexer", "SourceIndexer"], bool]


@runtime_checkable
class ConsumerApplication(Protocol):
    """Transport contract the reconciliation driver works against.

    Fetch methods raise ``FetchError``; write methods raise ``WriteError``. Calls
    happen inside ``async with consumer:``.
    """

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    @property
    def profile(self) -> ConsumerProfile: ...

    async def check_status(self) -> str: ...

    async def fetch_indexers(self) -> list[ConsumerIndexer]: ...

    async def create_indexer(
        self,
        indexer: SourceIndexer,
        categories: tuple[int, ...],
        anime_categories: tuple[int, ...],
    ) -> WriteOutcome: ...

    async def update_indexer(
        self,
        app_id: int,
        indexer: SourceIndexer,
        categories: tuple[int, ...],
        anime_categories: tuple[int, ...],
    ) -> WriteOutcome: ...

    def matches_identity(self, existing: ConsumerIndexer, indexer: SourceIndexer) -> bool: ...


__all__ = ["ConsumerApplication", "IdentityCheck"]
