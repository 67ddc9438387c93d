"""HTTP client shared by Sonarr, Radarr, Lidarr and Readarr."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Self

import httpx
from pydantic import TypeAdapter, ValidationError

from arrsync.adapters.http_resilience import ResilientClient, default_client_factory
from arrsync.domain.errors import FetchError, MappingError, WriteError
from arrsync.domain.model import WriteOutcome
from arrsync.domain.ports import ConsumerApplication

from .mappings import mapping_for
from .schema import SystemStatus, ValidationFailure

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from arrsync.config.consumers import ConsumerConfig
    from arrsync.config.http_resilience import ResilienceConfig
    from arrsync.domain.model import ConsumerIndexer, ConsumerProfile, SourceIndexer

    from .mappings import IndexerFieldMapping

log = getLogger(__name__)

HTTP_CREATED = 201
HTTP_ACCEPTED = 202

_FAILURES = TypeAdapter(list[ValidationFailure])


def _error_detail(response: httpx.Response) -> str:
    """Pull the first ``errorMessage`` out of an *arr validation error list."""

    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, list):
        try:
            failures = _FAILURES.validate_python(payload)
        except ValidationError:
            return str(payload)
        messages = [failure.error_message for failure in failures if failure.error_message]
        if messages:
            return messages[0]
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return str(payload)


@dataclass(slots=True)
class ArrClient:
    """``ConsumerApplication`` backed by one *arr REST API.

    Use as an async context manager so that all calls of one run share a single
    connection pool.
    """

    config: ConsumerConfig
    feed_api_key: str
    mapping: IndexerFieldMapping | None = None
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )
    _http: ResilientClient | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.mapping is None:
            self.mapping = mapping_for(self.config.kind)

    @property
    def profile(self) -> ConsumerProfile:
        return self.config.profile

    @property
    def name(self) -> str:
        return self.config.name

    async def __aenter__(self) -> Self:
        self._http = self.client_factory(self.config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    @property
    def _client(self) -> ResilientClient:
        if self._http is None:
            raise RuntimeError(f"{self.name} client used outside of 'async with'")
        return self._http

    @property
    def _mapping(self) -> IndexerFieldMapping:
        if self.mapping is None:
            raise RuntimeError(f"{self.name} has no indexer field mapping")
        return self.mapping

    async def check_status(self) -> str:
        """Validate url and api key, returning the application's version."""

        response = await self._get(self._mapping.system_status_url(self.config.url), "status")
        try:
            status = SystemStatus.model_validate(response.json())
        except ValueError as exc:
            raise FetchError(self.name, f"Unexpected system status payload: {exc}") from exc
        log.info(f"[{self.name}] Tested url & apiKey, running version {status.version}")
        return status.version

    async def fetch_indexers(self) -> list[ConsumerIndexer]:
        response = await self._get(self._mapping.indexer_url(self.config.url), "indexers")
        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(self.name, "Couldn't get indexers, response is not JSON") from exc
        if not isinstance(payload, list):
            raise FetchError(self.name, "Couldn't get indexers, unexpected response payload")

        indexers: list[ConsumerIndexer] = []
        for entry in payload:
            if not isinstance(entry, dict):
                log.warning(f"[{self.name}] Skipping unexpected indexer entry {entry!r}")
                continue
            try:
                indexer = self._mapping.map_record(entry)
            except MappingError as exc:
                log.warning(f"[{self.name}] {exc}, skipping for check")
                continue
            if indexer is not None:
                indexers.append(indexer)
        return indexers

    async def create_indexer(
        self,
        indexer: SourceIndexer,
        categories: tuple[int, ...],
        anime_categories: tuple[int, ...],
    ) -> WriteOutcome:
        body = self._mapping.build_body(
            indexer,
            categories,
            anime_categories,
            profile=self.profile,
            feed_api_key=self.feed_api_key,
        )
        url = self._mapping.indexer_url(self.config.url)
        return await self._write("POST", url, body, indexer.name)

    async def update_indexer(
        self,
        app_id: int,
        indexer: SourceIndexer,
        categories: tuple[int, ...],
        anime_categories: tuple[int, ...],
    ) -> WriteOutcome:
        body = self._mapping.build_body(
            indexer,
            categories,
            anime_categories,
            profile=self.profile,
            feed_api_key=self.feed_api_key,
        )
        body["id"] = app_id
        url = self._mapping.specific_indexer_url(self.config.url, app_id)
        return await self._write("PUT", url, body, indexer.name)

    def matches_identity(self, existing: ConsumerIndexer, indexer: SourceIndexer) -> bool:
        return existing.identity == self._mapping.identity_for(indexer, self.profile)

    async def _get(self, url: str, what: str) -> httpx.Response:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            log.error(
                f"[{self.name}][{status}] Couldn't get {what}, "
                f"error: {_error_detail(exc.response)}, url: {url}"
            )
            raise FetchError(self.name, f"Couldn't get {what}", status=status) from exc
        except httpx.HTTPError as exc:
            raise FetchError(self.name, f"Couldn't get {what}: {exc}") from exc
        return response

    async def _write(
        self,
        method: str,
        url: str,
        body: dict[str, object],
        name: str,
    ) -> WriteOutcome:
        try:
            response = await self._client.request(method, url, json=body)
        except httpx.HTTPError as exc:
            raise WriteError(name, f"Unexpected error during request: {exc}") from exc

        if response.is_error:
            raise WriteError(name, _error_detail(response), status=response.status_code)

        if response.status_code == HTTP_CREATED:
            log.info(f"[{self.name}] Added {name} successfully!")
        elif response.status_code == HTTP_ACCEPTED:
            log.info(f"[{self.name}] Updated {name} successfully!")
        else:
            log.info(
                f"[{self.name}] Request successful, but unknown response status "
                f"{response.status_code} for {name}"
            )
        return WriteOutcome(name=name, status=response.status_code)


if TYPE_CHECKING:
    _consumer_check: type[ConsumerApplication] = ArrClient
