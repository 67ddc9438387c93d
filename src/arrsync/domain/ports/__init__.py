"""Ports between the reconciliation engine and the HTTP adapters."""

from __future__ import annotations

from .catalog import SourceCatalogFetcher
from .consumer import ConsumerApplication, IdentityCheck

__all__ = ["ConsumerApplication", "IdentityCheck", "SourceCatalogFetcher"]
