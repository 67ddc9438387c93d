from __future__ import annotations

from arrsync.domain.model import ConsumerProfile, OverrideRule, RuleTable
from arrsync.domain.reconciliation import diff
from tests.support.consumers import source, stored


def test_missing_wanted_indexer_is_created(
    radarr_profile: ConsumerProfile, no_rules: RuleTable
) -> None:
    result = diff(radarr_profile, [], [source(1, (2000,))], no_rules)

    assert [indexer.id for indexer in result.to_create] == [1]
    assert result.to_update == []
    assert result.orphaned == []


def test_matching_indexer_is_left_alone(
    radarr_profile: ConsumerProfile, no_rules: RuleTable
) -> None:
    result = diff(
        radarr_profile,
        [stored(1, (2000,))],
        [source(1, (2000,))],
        no_rules,
        identity=lambda *_: True,
    )

    assert result.to_create == []
    assert result.to_update == []
    assert result.skipped == [1]
    assert result.is_empty


def test_indexer_missing_from_source_is_orphaned(
    radarr_profile: ConsumerProfile, no_rules: RuleTable
) -> None:
    result = diff(radarr_profile, [stored(5, (2000,))], [source(1, (2000,))], no_rules)

    assert result.orphaned == [5]
    assert all(indexer.id != 5 for indexer in (*result.to_create, *result.to_update))


def test_unwanted_indexer_is_skipped(radarr_profile: ConsumerProfile, no_rules: RuleTable) -> None:
    result = diff(radarr_profile, [], [source(1, (5000,))], no_rules)

    assert result.to_create == []
    assert result.skipped == [1]


def test_forced_indexer_is_created_without_overlap(radarr_profile: ConsumerProfile) -> None:
    for target in ("ALL", "Radarr"):
        rules = RuleTable.of([OverrideRule(target=target, indexer_id=1)])

        result = diff(radarr_profile, [], [source(1, (5000,))], rules)

        assert [indexer.id for indexer in result.to_create] == [1]


def test_stale_indexer_is_updated_with_its_app_id(no_rules: RuleTable) -> None:
    profile = ConsumerProfile(name="Radarr", wanted_categories=(2000, 2010))

    result = diff(
        profile,
        [stored("1337x", (2000,), app_id=7)],
        [source("1337x", (2000, 2010))],
        no_rules,
    )

    assert [indexer.id for indexer in result.to_update] == ["1337x"]
    assert result.app_id_for("1337x") == 7


def test_output_follows_source_order(radarr_profile: ConsumerProfile, no_rules: RuleTable) -> None:
    catalog = [source(3), source(1), source(2)]

    result = diff(radarr_profile, [], catalog, no_rules)

    assert [indexer.id for indexer in result.to_create] == [3, 1, 2]


def test_duplicate_records_keep_the_first(
    radarr_profile: ConsumerProfile, no_rules: RuleTable
) -> None:
    current = [stored(1, (2000,), app_id=10), stored(1, (2000,), app_id=11)]

    result = diff(radarr_profile, current, [source(1, (2000,))], no_rules)

    assert result.app_id_for(1) == 10
    assert result.to_update == []
