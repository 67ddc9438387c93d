"""Pydantic models describing the Sonarr/Radarr/Lidarr/Readarr indexer API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ArrBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FieldPayload(ArrBaseModel):
    name: str
    value: object = None


class IndexerResource(ArrBaseModel):
    id: int
    name: str
    implementation: str | None = None
    enable_rss: bool = Field(default=False, alias="enableRss")
    enable_automatic_search: bool = Field(default=False, alias="enableAutomaticSearch")
    enable_interactive_search: bool = Field(default=False, alias="enableInteractiveSearch")
    fields: list[FieldPayload] = Field(default_factory=list[FieldPayload])

    @property
    def enabled(self) -> bool:
        return self.enable_rss and self.enable_automatic_search and self.enable_interactive_search

    def field_value(self, name: str) -> object:
        for item in self.fields:
            if item.name == name:
                return item.value
        return None


class SystemStatus(ArrBaseModel):
    version: str = "unknown"


class ValidationFailure(ArrBaseModel):
    property_name: str | None = Field(default=None, alias="propertyName")
    error_message: str | None = Field(default=None, alias="errorMessage")
