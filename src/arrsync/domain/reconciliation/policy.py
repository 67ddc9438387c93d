"""Category inclusion policy and override layering.

Responsibilities of this stage:
- decide whether an indexer is relevant to a consumer at all
- compute the category subset a consumer should store for an indexer
- layer override rules onto a category selection, and strip them back out

Every function here is pure: category collections are returned as new tuples
and never mutated, so one base selection can be reused across indexers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from arrsync.domain.model import ConsumerProfile, RuleTable, SourceIndexer


@dataclass(frozen=True, slots=True)
class CategorySelection:
    """The two category lists pushed to a consumer for one indexer."""

    categories: tuple[int, ...] = ()
    anime_categories: tuple[int, ...] = ()


def categories_equal(left: Iterable[int], right: Iterable[int]) -> bool:
    """Order-independent comparison of two category collections."""

    return frozenset(left) == frozenset(right)


def is_wanted(profile: ConsumerProfile, indexer: SourceIndexer, rules: RuleTable) -> bool:
    """Return whether the consumer should carry this indexer.

    Any category overlap is enough; so is a single matching override rule, even
    when the indexer shares no category with the consumer.
    """

    wanted = frozenset(profile.wanted_categories)
    if any(category in wanted for category in indexer.categories):
        return True
    return bool(rules.matching(profile, indexer.id))


def expected_categories(profile: ConsumerProfile, indexer: SourceIndexer) -> tuple[int, ...]:
    """Categories the consumer wants that the indexer actually offers.

    The result follows the consumer's configured order and leaves out anything an
    override rule would add.
    """

    available = frozenset(indexer.categories)
    return _unique(category for category in profile.wanted_categories if category in available)


def apply_overrides(
    profile: ConsumerProfile,
    indexer: SourceIndexer,
    selection: CategorySelection,
    rules: RuleTable,
) -> CategorySelection:
    """Append every category named by a matching rule that is not already present."""

    categories = list(selection.categories)
    anime_categories = list(selection.anime_categories)
    for rule in rules.matching(profile, indexer.id):
        if rule.category is not None and rule.category not in categories:
            categories.append(rule.category)
        if rule.anime_category is not None and rule.anime_category not in anime_categories:
            anime_categories.append(rule.anime_category)
    return CategorySelection(tuple(categories), tuple(anime_categories))


def reverse_overrides(
    profile: ConsumerProfile,
    indexer: SourceIndexer,
    selection: CategorySelection,
    rules: RuleTable,
    *,
    base: CategorySelection | None = None,
) -> CategorySelection:
    """Remove every category a matching rule would have added.

    When ``base`` is given, categories already present in it are kept, which makes
    ``reverse_overrides(apply_overrides(base), base=base)`` return ``base`` even if
    a rule names a category the base selection already had.
    """

    keep = base or CategorySelection()
    drop_categories: set[int] = set()
    drop_anime: set[int] = set()
    for rule in rules.matching(profile, indexer.id):
        if rule.category is not None and rule.category not in keep.categories:
            drop_categories.add(rule.category)
        if rule.anime_category is not None and rule.anime_category not in keep.anime_categories:
            drop_anime.add(rule.anime_category)

    return CategorySelection(
        tuple(category for category in selection.categories if category not in drop_categories),
        tuple(category for category in selection.anime_categories if category not in drop_anime),
    )


def planned_selection(
    profile: ConsumerProfile,
    indexer: SourceIndexer,
    rules: RuleTable,
) -> CategorySelection:
    """Selection sent in create and update bodies: natural overlap plus overrides."""

    natural = CategorySelection(expected_categories(profile, indexer))
    return apply_overrides(profile, indexer, natural, rules)


def _unique(values: Iterable[int]) -> tuple[int, ...]:
    return tuple(dict.fromkeys(values))
