from __future__ import annotations

import pytest

from arrsync.domain.model import ConsumerProfile, OverrideRule, RuleTable

_ENV_VARS = (
    "JACKETT_URL",
    "JACKETT_API_KEY",
    "JACKETT_INTERNAL_URL",
    "INDEXER_RULES",
    *(
        f"{app}_{suffix}"
        for app in ("SONARR", "RADARR", "LIDARR", "READARR")
        for suffix in ("URL", "API_KEY", "CATEGORIES", "SEEDS")
    ),
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def radarr_profile() -> ConsumerProfile:
    return ConsumerProfile(name="Radarr", wanted_categories=(2000,), minimum_seeders=1)


@pytest.fixture
def sonarr_profile() -> ConsumerProfile:
    return ConsumerProfile(name="Sonarr", wanted_categories=(5000, 5030, 5040))


@pytest.fixture
def no_rules() -> RuleTable:
    return RuleTable()


@pytest.fixture
def category_rule() -> RuleTable:
    return RuleTable.of([OverrideRule(target="ALL", indexer_id=1, category=5030)])
