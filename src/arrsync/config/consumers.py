"""Consumer application (Sonarr, Radarr, Lidarr, Readarr) configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from arrsync.domain.model import ConsumerProfile

from .env import env_int, env_int_list, optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

CONSUMER_TIMEOUT_SECONDS = 60.0


class ConsumerKind(StrEnum):
    SONARR = "sonarr"
    RADARR = "radarr"
    LIDARR = "lidarr"
    READARR = "readarr"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def env_prefix(self) -> str:
        return self.value.upper()


DEFAULT_CATEGORIES: Final[dict[ConsumerKind, tuple[int, ...]]] = {
    ConsumerKind.SONARR: (5000, 5030, 5040),
    ConsumerKind.RADARR: (2000, 2010, 2020, 2030, 2040, 2045, 2050, 2060),
    ConsumerKind.LIDARR: (3000, 3010, 3030, 3040),
    ConsumerKind.READARR: (3030, 7000, 7020),
}
DEFAULT_MINIMUM_SEEDERS = 1


@dataclass(frozen=True)
class ConsumerConfig:
    """Connection and category settings for one consumer application."""

    kind: ConsumerKind
    url: str
    api_key: str
    categories: tuple[int, ...]
    minimum_seeders: int
    resilience: ResilienceConfig

    @property
    def name(self) -> str:
        return self.kind.display_name

    @property
    def profile(self) -> ConsumerProfile:
        return ConsumerProfile(
            name=self.name,
            wanted_categories=self.categories,
            minimum_seeders=self.minimum_seeders,
        )


def get_consumer_config(kind: ConsumerKind) -> ConsumerConfig | None:
    """Read one consumer's settings, or ``None`` when ``<APP>_URL`` is not set."""

    prefix = kind.env_prefix
    url = optional_env_var(f"{prefix}_URL")
    if url is None:
        return None
    api_key = require_env_vars((f"{prefix}_API_KEY",))[f"{prefix}_API_KEY"]
    minimum_seeders = env_int(f"{prefix}_SEEDS", DEFAULT_MINIMUM_SEEDERS)
    if minimum_seeders < 0:
        raise ConfigurationError(f"{prefix}_SEEDS must be non-negative")

    base_url = url.rstrip("/")
    return ConsumerConfig(
        kind=kind,
        url=base_url,
        api_key=api_key,
        categories=env_int_list(f"{prefix}_CATEGORIES", DEFAULT_CATEGORIES[kind]),
        minimum_seeders=minimum_seeders,
        resilience=ResilienceConfig(
            name=kind.value,
            base_url=base_url,
            timeout_seconds=CONSUMER_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={"X-Api-Key": api_key},
        ),
    )


def get_consumer_configs() -> list[ConsumerConfig]:
    """Return the configured consumers in a fixed order."""

    configs: list[ConsumerConfig] = []
    for kind in ConsumerKind:
        config = get_consumer_config(kind)
        if config is not None:
            configs.append(config)
    return configs
