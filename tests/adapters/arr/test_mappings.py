from __future__ import annotations

import pytest

from arrsync.adapters.arr import (
    LidarrMapping,
    RadarrMapping,
    ReadarrMapping,
    SonarrMapping,
    jackett_id_from_url,
    mapping_for,
)
from arrsync.config import ConsumerKind
from arrsync.domain.errors import MappingError
from arrsync.domain.model import ConsumerProfile, IndexerIdentity
from tests.support.consumers import source

from tests.support.arr import indexer_record


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (ConsumerKind.SONARR, "http://host:8989/api/v3/indexer"),
        (ConsumerKind.RADARR, "http://host:8989/api/v3/indexer"),
        (ConsumerKind.LIDARR, "http://host:8989/api/v1/indexer"),
        (ConsumerKind.READARR, "http://host:8989/api/v1/indexer"),
    ],
)
def test_indexer_urls_follow_api_version(kind: ConsumerKind, expected: str) -> None:
    mapping = mapping_for(kind)

    assert mapping.indexer_url("http://host:8989/") == expected
    assert mapping.specific_indexer_url("http://host:8989", 4) == f"{expected}/4"
    assert mapping.kind is kind


def test_jackett_id_from_url() -> None:
    assert (
        jackett_id_from_url("http://jackett:9117/api/v2.0/indexers/1337x/results/torznab/")
        == "1337x"
    )
    assert jackett_id_from_url("http://jackett:9117/api/v2.0/indexers/x/results/torznab") == "x"
    assert jackett_id_from_url("http://prowlarr:9696/1/api") is None


def test_map_record_builds_consumer_indexer() -> None:
    record = indexer_record(7, "1337x", categories=[2040, 2000], minimum_seeders=3)

    indexer = RadarrMapping().map_record(record)

    assert indexer is not None
    assert indexer.id == "1337x"
    assert indexer.app_id == 7
    assert indexer.categories == (2040, 2000)
    assert indexer.anime_categories == ()
    assert indexer.identity == IndexerIdentity(
        name="1337x",
        url="http://jackett:9117/api/v2.0/indexers/1337x/results/torznab",
        enabled=True,
        minimum_seeders=3,
    )


def test_map_record_reads_anime_categories_for_sonarr() -> None:
    record = indexer_record(2, "nyaasi", categories=[5000], anime_categories=[5070])

    indexer = SonarrMapping().map_record(record)

    assert indexer is not None
    assert indexer.anime_categories == (5070,)


def test_map_record_ignores_indexers_not_managed_by_jackett() -> None:
    newznab = indexer_record(1, "x", implementation="Newznab")
    foreign = indexer_record(2, "x")
    foreign["fields"] = [{"name": "baseUrl", "value": "https://api.nzbgeek.info"}]

    assert RadarrMapping().map_record(newznab) is None
    assert RadarrMapping().map_record(foreign) is None


def test_map_record_raises_mapping_error_for_malformed_record() -> None:
    with pytest.raises(MappingError):
        RadarrMapping().map_record({"name": "no id"})

    bad_categories = indexer_record(1, "x")
    bad_categories["fields"] = [
        {"name": "baseUrl", "value": "http://jackett:9117/api/v2.0/indexers/x/results/torznab/"},
        {"name": "categories", "value": "2000"},
    ]
    with pytest.raises(MappingError):
        RadarrMapping().map_record(bad_categories)


def test_build_body_for_sonarr_contains_anime_categories() -> None:
    profile = ConsumerProfile(name="Sonarr", wanted_categories=(5000,), minimum_seeders=2)

    body = SonarrMapping().build_body(
        source("nyaasi", (5000,)),
        (5000,),
        (5070,),
        profile=profile,
        feed_api_key="jackett-key",
    )

    fields = {field["name"]: field["value"] for field in body["fields"]}  # type: ignore[union-attr]
    assert body["implementation"] == "Torznab"
    assert body["configContract"] == "TorznabSettings"
    assert body["name"] == "indexer-nyaasi"
    assert fields["baseUrl"] == "http://jackett:9117/api/v2.0/indexers/nyaasi/results/torznab/"
    assert fields["apiKey"] == "jackett-key"
    assert fields["categories"] == [5000]
    assert fields["animeCategories"] == [5070]
    assert fields["minimumSeeders"] == 2


@pytest.mark.parametrize("mapping", [LidarrMapping(), ReadarrMapping()])
def test_build_body_for_music_and_books_has_early_release_limit(
    mapping: LidarrMapping,
) -> None:
    profile = ConsumerProfile(name="Lidarr", wanted_categories=(3000,))

    body = mapping.build_body(
        source(1, (3000,)), (3000,), (), profile=profile, feed_api_key="k"
    )

    names = [field["name"] for field in body["fields"]]  # type: ignore[union-attr]
    assert "earlyReleaseLimit" in names
    assert "animeCategories" not in names


def test_identity_for_matches_mapped_record() -> None:
    profile = ConsumerProfile(name="Radarr", wanted_categories=(2000,), minimum_seeders=1)
    mapping = RadarrMapping()
    indexer = source("1337x", (2000,), name="1337x")

    existing = mapping.map_record(indexer_record(7, "1337x", minimum_seeders=1))

    assert existing is not None
    assert existing.identity == mapping.identity_for(indexer, profile)
