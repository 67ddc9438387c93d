"""Translate Jackett payloads into source indexers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from arrsync.domain.errors import MappingError
from arrsync.domain.model import SourceIndexer

from .schema import IndexerPayload, indexer_to_dict

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from arrsync.config.jackett import JackettConfig


def parse_indexer_payload(element: Element) -> IndexerPayload:
    data = indexer_to_dict(element)
    try:
        return IndexerPayload.model_validate(data)
    except ValidationError as exc:
        name = data.get("title") or data.get("id")
        raise MappingError(str(name) if name else None, str(exc)) from exc


def parse_source_indexer(payload: IndexerPayload, config: JackettConfig) -> SourceIndexer:
    return SourceIndexer(
        id=payload.id,
        name=payload.title,
        categories=payload.category_ids(),
        url=config.torznab_url(payload.id),
    )
