"""Application configuration helpers."""

from __future__ import annotations

from .consumers import (
    DEFAULT_CATEGORIES,
    ConsumerConfig,
    ConsumerKind,
    get_consumer_config,
    get_consumer_configs,
)
from .env import env_int, env_int_list, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .jackett import JackettConfig, get_jackett_config
from .logging import configure_logging
from .rules import get_rule_table, parse_rule_table

__all__ = [
    "DEFAULT_CATEGORIES",
    "ConfigurationError",
    "ConsumerConfig",
    "ConsumerKind",
    "JackettConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_int",
    "env_int_list",
    "get_consumer_config",
    "get_consumer_configs",
    "get_jackett_config",
    "get_rule_table",
    "optional_env_var",
    "parse_rule_table",
    "require_env_vars",
]
