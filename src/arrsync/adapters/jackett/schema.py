"""Pydantic models describing Jackett's Torznab ``t=indexers`` feed."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element


class JackettBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CategoryPayload(JackettBaseModel):
    id: int
    name: str | None = None
    subcats: list[CategoryPayload] = Field(default_factory=list["CategoryPayload"])

    def flatten(self) -> list[int]:
        ids = [self.id]
        for subcat in self.subcats:
            ids.extend(subcat.flatten())
        return ids


class IndexerPayload(JackettBaseModel):
    id: str
    title: str
    configured: bool = True
    categories: list[CategoryPayload] = Field(default_factory=list[CategoryPayload])

    @field_validator("id", "title")
    @classmethod
    def _require_text(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    def category_ids(self) -> tuple[int, ...]:
        ids: list[int] = []
        for category in self.categories:
            ids.extend(category.flatten())
        return tuple(dict.fromkeys(ids))


class ErrorPayload(JackettBaseModel):
    code: int | None = None
    description: str = "Unknown error"


def category_to_dict(element: Element) -> dict[str, object]:
    return {
        "id": element.get("id"),
        "name": element.get("name"),
        "subcats": [category_to_dict(child) for child in element.findall("subcat")],
    }


def indexer_to_dict(element: Element) -> dict[str, object]:
    """Flatten one ``<indexer>`` element into the shape ``IndexerPayload`` expects."""

    configured = element.get("configured")
    return {
        "id": element.get("id"),
        "title": element.findtext("title") or element.get("id"),
        "configured": configured is None or configured.lower() == "true",
        "categories": [
            category_to_dict(category) for category in element.findall("caps/categories/category")
        ],
    }
