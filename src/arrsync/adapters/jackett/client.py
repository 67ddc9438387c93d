"""HTTP client for the Jackett Torznab API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from xml.etree import ElementTree

import httpx

from arrsync.adapters.http_resilience import ResilientClient, default_client_factory
from arrsync.config.jackett import JackettConfig, get_jackett_config
from arrsync.domain.errors import FetchError, MappingError
from arrsync.domain.ports import SourceCatalogFetcher

from .schema import ErrorPayload
from .translator import parse_indexer_payload, parse_source_indexer

if TYPE_CHECKING:
    from collections.abc import Callable

    from arrsync.config.http_resilience import ResilienceConfig
    from arrsync.domain.model import SourceIndexer

log = getLogger(__name__)

JACKETT_NAME = "Jackett"
INDEXERS_PATH = "/api/v2.0/indexers/all/results/torznab/api"


@dataclass(slots=True)
class JackettClient:
    config: JackettConfig = field(default_factory=get_jackett_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    async def fetch_source_catalog(self) -> list[SourceIndexer]:
        """Return every configured Jackett indexer.

        Malformed entries are skipped with a warning; transport problems raise
        ``FetchError``.
        """

        params = {"t": "indexers", "configured": "true", "apikey": self.config.api_key}
        async with self.client_factory(self.config.resilience) as client:
            try:
                response = await client.get(f"{self.config.url}{INDEXERS_PATH}", params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                raise FetchError(
                    JACKETT_NAME, f"Couldn't get indexers, status {status}", status=status
                ) from exc
            except httpx.HTTPError as exc:
                raise FetchError(JACKETT_NAME, f"Couldn't get indexers: {exc}") from exc

        root = self._parse_document(response.text)
        indexers: list[SourceIndexer] = []
        for element in root.findall("indexer"):
            try:
                payload = parse_indexer_payload(element)
            except MappingError as exc:
                log.warning(f"[{JACKETT_NAME}] {exc}, skipping")
                continue
            if not payload.configured:
                log.debug(f"[{JACKETT_NAME}] Skipping unconfigured indexer {payload.id}")
                continue
            indexers.append(parse_source_indexer(payload, self.config))

        log.info(f"[{JACKETT_NAME}] Found {len(indexers)} configured indexers")
        return indexers

    @staticmethod
    def _parse_document(text: str) -> ElementTree.Element:
        try:
            root = ElementTree.fromstring(text)
        except ElementTree.ParseError as exc:
            raise FetchError(JACKETT_NAME, f"Unexpected response payload: {exc}") from exc

        if root.tag == "error":
            error = ErrorPayload.model_validate(dict(root.attrib))
            raise FetchError(JACKETT_NAME, f"API error {error.code}: {error.description}")
        if root.tag != "indexers":
            raise FetchError(JACKETT_NAME, f"Unexpected response root <{root.tag}>")
        return root


if TYPE_CHECKING:
    _fetcher_check: SourceCatalogFetcher = JackettClient()
