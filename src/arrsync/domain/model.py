"""Domain types shared by the reconciliation engine and the adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

IndexerId = int | str
"""Join key between the aggregator and the consumers (Jackett uses string slugs)."""

ALL_CONSUMERS: Final[str] = "all"


def _normalize_selector(value: str) -> str:
    return value.strip().lower()


@dataclass(frozen=True, slots=True, kw_only=True)
class SourceIndexer:
    """Indexer definition as published by the aggregator."""

    id: IndexerId
    name: str
    categories: tuple[int, ...] = ()
    url: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class IndexerIdentity:
    """Fields besides categories that decide whether a stored indexer is current."""

    name: str
    url: str | None
    enabled: bool
    minimum_seeders: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ConsumerIndexer:
    """Indexer record as currently stored by one consumer application.

    ``id`` equals the ``SourceIndexer.id`` the record was created from. ``app_id``
    is the consumer-local primary key, used only to address update calls.
    """

    id: IndexerId
    app_id: int
    name: str
    categories: tuple[int, ...] = ()
    anime_categories: tuple[int, ...] = ()
    identity: IndexerIdentity | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ConsumerProfile:
    """What one consumer application wants from the source catalog."""

    name: str
    wanted_categories: tuple[int, ...]
    minimum_seeders: int = 1

    @property
    def selector(self) -> str:
        return _normalize_selector(self.name)


@dataclass(frozen=True, slots=True, kw_only=True)
class OverrideRule:
    """Forces an indexer (and optionally extra categories) onto a consumer.

    ``target`` is either ``"all"`` or the name of one consumer; matching is
    case-insensitive.
    """

    target: str
    indexer_id: IndexerId
    category: int | None = None
    anime_category: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", _normalize_selector(self.target))

    def applies_to(self, profile: ConsumerProfile, indexer_id: IndexerId) -> bool:
        if self.target not in (ALL_CONSUMERS, profile.selector):
            return False
        return self.indexer_id == indexer_id


@dataclass(frozen=True, slots=True)
class RuleTable:
    """Immutable collection of override rules, loaded once per process."""

    rules: tuple[OverrideRule, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[OverrideRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    @classmethod
    def of(cls, rules: Iterable[OverrideRule]) -> RuleTable:
        return cls(tuple(rules))

    def matching(self, profile: ConsumerProfile, indexer_id: IndexerId) -> tuple[OverrideRule, ...]:
        """Return every rule for this consumer/indexer pair, in table order."""

        return tuple(rule for rule in self.rules if rule.applies_to(profile, indexer_id))


@dataclass(frozen=True, slots=True, kw_only=True)
class WriteOutcome:
    """Successful create/update as reported by the consumer."""

    name: str
    status: int
