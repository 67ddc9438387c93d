"""Override rule table loaded from ``INDEXER_RULES``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from arrsync.domain.model import OverrideRule, RuleTable

from .env import optional_env_var
from .errors import ConfigurationError

RULES_ENV_VAR = "INDEXER_RULES"


class OverrideRuleModel(BaseModel):
    """One entry of the JSON rule list, e.g.

    ``{"service": "ALL", "indexerId": "nyaasi", "category": 5070, "animeCategory": 5070}``
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    service: str = "ALL"
    indexer_id: str = Field(alias="indexerId")
    category: int | None = None
    anime_category: int | None = Field(default=None, alias="animeCategory")

    @field_validator("indexer_id", mode="before")
    @classmethod
    def _coerce_indexer_id(cls, value: object) -> object:
        # Jackett ids are strings; accept bare numbers for convenience
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_rule(self) -> OverrideRule:
        return OverrideRule(
            target=self.service,
            indexer_id=self.indexer_id,
            category=self.category,
            anime_category=self.anime_category,
        )


_RULE_LIST = TypeAdapter(list[OverrideRuleModel])


def parse_rule_table(raw: str | bytes) -> RuleTable:
    try:
        models = _RULE_LIST.validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"{RULES_ENV_VAR} is not a valid rule list: {exc}") from exc
    return RuleTable.of(model.to_rule() for model in models)


def get_rule_table() -> RuleTable:
    raw = optional_env_var(RULES_ENV_VAR)
    if raw is None:
        return RuleTable()
    return parse_rule_table(raw)
