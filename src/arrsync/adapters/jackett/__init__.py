"""Public interface for the Jackett adapter."""

from __future__ import annotations

from .client import JackettClient
from .schema import CategoryPayload, IndexerPayload
from .translator import parse_indexer_payload, parse_source_indexer

__all__ = [
    "CategoryPayload",
    "IndexerPayload",
    "JackettClient",
    "parse_indexer_payload",
    "parse_source_indexer",
]
