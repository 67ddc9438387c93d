"""Per-application translation between indexer records and domain types.

Every consumer variant exposes the same ``IndexerFieldMapping`` surface; the
client only ever holds the protocol type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Protocol

from pydantic import ValidationError

from arrsync.config.consumers import ConsumerKind
from arrsync.domain.errors import MappingError
from arrsync.domain.model import ConsumerIndexer, IndexerIdentity

from .schema import IndexerResource

if TYPE_CHECKING:
    from collections.abc import Mapping

    from arrsync.domain.model import ConsumerProfile, SourceIndexer

TORZNAB_IMPLEMENTATION = "Torznab"
_JACKETT_FEED = re.compile(r"/api/v2\.0/indexers/(?P<id>[^/]+)/results/torznab/?$")


class IndexerFieldMapping(Protocol):
    kind: ConsumerKind

    def map_record(self, entry: Mapping[str, object]) -> ConsumerIndexer | None: ...

    def build_body(
        self,
        indexer: SourceIndexer,
        categories: tuple[int, ...],
        anime_categories: tuple[int, ...],
        *,
        profile: ConsumerProfile,
        feed_api_key: str,
    ) -> dict[str, object]: ...

    def identity_for(self, indexer: SourceIndexer, profile: ConsumerProfile) -> IndexerIdentity: ...

    def base_url(self, url: str) -> str: ...

    def system_status_url(self, url: str) -> str: ...

    def indexer_url(self, url: str) -> str: ...

    def specific_indexer_url(self, url: str, app_id: int) -> str: ...


def jackett_id_from_url(url: str) -> str | None:
    match = _JACKETT_FEED.search(url.strip())
    return match.group("id") if match else None


def _normalize_url(url: object) -> str | None:
    if not isinstance(url, str) or not url.strip():
        return None
    return url.strip().rstrip("/")


def _int_list(value: object, *, field_name: str) -> tuple[int, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValueError(f"{field_name} is not a list")
    return tuple(int(item) for item in value)


def _optional_int(value: object) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class TorznabFieldMapping:
    """Field layout shared by all applications; subclasses add their quirks."""

    kind: ConsumerKind
    api_version: ClassVar[str] = "v3"
    supports_anime: ClassVar[bool] = False
    priority: ClassVar[int] = 25

    def base_url(self, url: str) -> str:
        return f"{url.rstrip('/')}/api/{self.api_version}"

    def indexer_url(self, url: str) -> str:
        return f"{self.base_url(url)}/indexer"

    def specific_indexer_url(self, url: str, app_id: int) -> str:
        return f"{self.indexer_url(url)}/{app_id}"

    def system_status_url(self, url: str) -> str:
        return f"{self.base_url(url)}/system/status"

    def map_record(self, entry: Mapping[str, object]) -> ConsumerIndexer | None:
        """Translate one indexer record, or return ``None`` when Jackett doesn't own it."""

        raw_name = entry.get("name")
        name = raw_name if isinstance(raw_name, str) else None
        try:
            resource = IndexerResource.model_validate(entry)
        except ValidationError as exc:
            raise MappingError(name, str(exc)) from exc

        if resource.implementation != TORZNAB_IMPLEMENTATION:
            return None
        url = _normalize_url(resource.field_value("baseUrl"))
        indexer_id = jackett_id_from_url(url) if url else None
        if indexer_id is None:
            return None

        try:
            categories = _int_list(resource.field_value("categories"), field_name="categories")
            anime_categories = (
                _int_list(resource.field_value("animeCategories"), field_name="animeCategories")
                if self.supports_anime
                else ()
            )
            minimum_seeders = _optional_int(resource.field_value("minimumSeeders"))
        except (TypeError, ValueError) as exc:
            raise MappingError(resource.name, str(exc)) from exc

        return ConsumerIndexer(
            id=indexer_id,
            app_id=resource.id,
            name=resource.name,
            categories=categories,
            anime_categories=anime_categories,
            identity=IndexerIdentity(
                name=resource.name,
                url=url,
                enabled=resource.enabled,
                minimum_seeders=minimum_seeders,
            ),
        )

    def identity_for(self, indexer: SourceIndexer, profile: ConsumerProfile) -> IndexerIdentity:
        return IndexerIdentity(
            name=indexer.name,
            url=_normalize_url(indexer.url),
            enabled=True,
            minimum_seeders=profile.minimum_seeders,
        )

    def build_body(
        self,
        indexer: SourceIndexer,
        categories: tuple[int, ...],
        anime_categories: tuple[int, ...],
        *,
        profile: ConsumerProfile,
        feed_api_key: str,
    ) -> dict[str, object]:
        fields: list[dict[str, object]] = [
            {"name": "baseUrl", "value": indexer.url},
            {"name": "apiPath", "value": "/api"},
            {"name": "apiKey", "value": feed_api_key},
            {"name": "categories", "value": list(categories)},
            {"name": "minimumSeeders", "value": profile.minimum_seeders},
            {"name": "seedCriteria.seedRatio", "value": None},
            {"name": "seedCriteria.seedTime", "value": None},
        ]
        fields.extend(self.extra_fields(anime_categories))
        return {
            "name": indexer.name,
            "enableRss": True,
            "enableAutomaticSearch": True,
            "enableInteractiveSearch": True,
            "priority": self.priority,
            "protocol": "torrent",
            "implementation": TORZNAB_IMPLEMENTATION,
            "implementationName": TORZNAB_IMPLEMENTATION,
            "configContract": "TorznabSettings",
            "tags": [],
            "fields": fields,
        }

    def extra_fields(self, anime_categories: tuple[int, ...]) -> list[dict[str, object]]:  # noqa: ARG002
        return []


@dataclass(frozen=True)
class SonarrMapping(TorznabFieldMapping):
    kind: ConsumerKind = ConsumerKind.SONARR
    supports_anime: ClassVar[bool] = True

    def extra_fields(self, anime_categories: tuple[int, ...]) -> list[dict[str, object]]:
        return [
            {"name": "animeCategories", "value": list(anime_categories)},
            {"name": "seedCriteria.seasonPackSeedTime", "value": None},
        ]


@dataclass(frozen=True)
class RadarrMapping(TorznabFieldMapping):
    kind: ConsumerKind = ConsumerKind.RADARR


@dataclass(frozen=True)
class LidarrMapping(TorznabFieldMapping):
    kind: ConsumerKind = ConsumerKind.LIDARR
    api_version: ClassVar[str] = "v1"

    def extra_fields(self, anime_categories: tuple[int, ...]) -> list[dict[str, object]]:  # noqa: ARG002
        return [
            {"name": "earlyReleaseLimit", "value": None},
            {"name": "seedCriteria.discographySeedTime", "value": None},
        ]


@dataclass(frozen=True)
class ReadarrMapping(LidarrMapping):
    kind: ConsumerKind = ConsumerKind.READARR


_MAPPINGS: dict[ConsumerKind, IndexerFieldMapping] = {
    ConsumerKind.SONARR: SonarrMapping(),
    ConsumerKind.RADARR: RadarrMapping(),
    ConsumerKind.LIDARR: LidarrMapping(),
    ConsumerKind.READARR: ReadarrMapping(),
}


def mapping_for(kind: ConsumerKind) -> IndexerFieldMapping:
    return _MAPPINGS[kind]
