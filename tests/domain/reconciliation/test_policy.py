from __future__ import annotations

import pytest

from arrsync.domain.model import ConsumerProfile, OverrideRule, RuleTable
from arrsync.domain.reconciliation import (
    CategorySelection,
    apply_overrides,
    categories_equal,
    expected_categories,
    is_wanted,
    planned_selection,
    reverse_overrides,
)
from tests.support.consumers import source


def test_is_wanted_with_category_overlap(radarr_profile: ConsumerProfile, no_rules: RuleTable) -> None:
    assert is_wanted(radarr_profile, source(1, (2000, 5000)), no_rules)


def test_is_wanted_rejects_indexer_without_overlap(
    radarr_profile: ConsumerProfile, no_rules: RuleTable
) -> None:
    assert not is_wanted(radarr_profile, source(1, (5000, 5030)), no_rules)


@pytest.mark.parametrize("target", ["ALL", "all", "Radarr", "radarr"])
def test_is_wanted_forced_by_matching_rule(radarr_profile: ConsumerProfile, target: str) -> None:
    rules = RuleTable.of([OverrideRule(target=target, indexer_id=1)])

    assert is_wanted(radarr_profile, source(1, (5000,)), rules)


def test_is_wanted_ignores_rules_for_other_consumers_and_indexers(
    radarr_profile: ConsumerProfile,
) -> None:
    rules = RuleTable.of(
        [
            OverrideRule(target="Sonarr", indexer_id=1, category=2000),
            OverrideRule(target="ALL", indexer_id=2, category=2000),
        ]
    )

    assert not is_wanted(radarr_profile, source(1, (5000,)), rules)


def test_expected_categories_follow_consumer_order() -> None:
    profile = ConsumerProfile(name="Radarr", wanted_categories=(2040, 2000, 2030))
    indexer = source(1, (2000, 2030, 5000, 2040))

    assert expected_categories(profile, indexer) == (2040, 2000, 2030)


def test_expected_categories_ignore_override_rules(radarr_profile: ConsumerProfile) -> None:
    indexer = source(1, (2000, 5030))

    # the rule for 5030 only matters once overrides are applied
    assert expected_categories(radarr_profile, indexer) == (2000,)


def test_apply_overrides_appends_rule_categories(
    radarr_profile: ConsumerProfile, category_rule: RuleTable
) -> None:
    selection = apply_overrides(
        radarr_profile, source(1), CategorySelection((2000,)), category_rule
    )

    assert selection.categories == (2000, 5030)
    assert selection.anime_categories == ()


def test_apply_overrides_combines_every_matching_rule(sonarr_profile: ConsumerProfile) -> None:
    rules = RuleTable.of(
        [
            OverrideRule(target="ALL", indexer_id="nyaasi", category=5070),
            OverrideRule(target="Sonarr", indexer_id="nyaasi", anime_category=5070),
            OverrideRule(target="Sonarr", indexer_id="nyaasi", anime_category=5070),
        ]
    )

    selection = apply_overrides(
        sonarr_profile, source("nyaasi", (5000,)), CategorySelection((5000,)), rules
    )

    assert selection == CategorySelection((5000, 5070), (5070,))


def test_apply_overrides_is_idempotent(
    radarr_profile: ConsumerProfile, category_rule: RuleTable
) -> None:
    indexer = source(1)
    once = apply_overrides(radarr_profile, indexer, CategorySelection((2000,)), category_rule)
    twice = apply_overrides(radarr_profile, indexer, once, category_rule)

    assert twice == once


def test_apply_overrides_does_not_touch_input(
    radarr_profile: ConsumerProfile, category_rule: RuleTable
) -> None:
    base = CategorySelection((2000,))

    apply_overrides(radarr_profile, source(1), base, category_rule)

    assert base == CategorySelection((2000,))


@pytest.mark.parametrize(
    "base",
    [
        CategorySelection(),
        CategorySelection((2000,)),
        CategorySelection((2000, 5030)),
        CategorySelection((5030,), (5070,)),
        CategorySelection((2010, 2000), (5070, 5080)),
    ],
)
def test_reverse_undoes_apply_against_same_base(
    radarr_profile: ConsumerProfile, base: CategorySelection
) -> None:
    rules = RuleTable.of(
        [
            OverrideRule(target="ALL", indexer_id=1, category=5030, anime_category=5070),
            OverrideRule(target="Radarr", indexer_id=1, category=2045),
        ]
    )
    indexer = source(1)

    applied = apply_overrides(radarr_profile, indexer, base, rules)
    reversed_selection = reverse_overrides(radarr_profile, indexer, applied, rules, base=base)

    assert reversed_selection == base


def test_reverse_without_base_strips_every_rule_category(
    radarr_profile: ConsumerProfile, category_rule: RuleTable
) -> None:
    selection = reverse_overrides(
        radarr_profile, source(1), CategorySelection((5030, 2000, 5030)), category_rule
    )

    assert selection.categories == (2000,)


def test_planned_selection_is_natural_overlap_plus_overrides(
    radarr_profile: ConsumerProfile, category_rule: RuleTable
) -> None:
    selection = planned_selection(radarr_profile, source(1, (2000,)), category_rule)

    assert selection.categories == (2000, 5030)


def test_categories_equal_ignores_order() -> None:
    assert categories_equal((2000, 2010, 2020), [2020, 2000, 2010])
    assert not categories_equal((2000,), (2000, 2010))
