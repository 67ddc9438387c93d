from __future__ import annotations

import pytest

from arrsync.config import ConsumerConfig, ConsumerKind, ResilienceConfig


@pytest.fixture
def radarr_config() -> ConsumerConfig:
    return ConsumerConfig(
        kind=ConsumerKind.RADARR,
        url="http://radarr:7878",
        api_key="radarr-key",
        categories=(2000, 2040),
        minimum_seeders=1,
        resilience=ResilienceConfig(
            name="radarr",
            base_url="http://radarr:7878",
            default_headers={"X-Api-Key": "radarr-key"},
        ),
    )
