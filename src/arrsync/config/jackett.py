"""Jackett configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

JACKETT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class JackettConfig:
    """Holds the Jackett connection settings.

    ``internal_url`` is the address the consumer applications use to reach
    Jackett, which differs from ``url`` when Jackett runs in the same container
    network as the consumers.
    """

    url: str
    api_key: str
    internal_url: str
    resilience: ResilienceConfig

    @property
    def feed_base_url(self) -> str:
        return self.internal_url.rstrip("/")

    def torznab_url(self, indexer_id: int | str) -> str:
        return f"{self.feed_base_url}/api/v2.0/indexers/{indexer_id}/results/torznab/"


def get_jackett_config(*, resilience: ResilienceConfig | None = None) -> JackettConfig:
    values = require_env_vars(("JACKETT_URL", "JACKETT_API_KEY"))
    url = values["JACKETT_URL"].rstrip("/")
    return JackettConfig(
        url=url,
        api_key=values["JACKETT_API_KEY"],
        internal_url=optional_env_var("JACKETT_INTERNAL_URL") or url,
        resilience=resilience
        or ResilienceConfig(
            name="jackett",
            base_url=url,
            timeout_seconds=JACKETT_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        ),
    )
