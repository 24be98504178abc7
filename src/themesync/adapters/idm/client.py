"""HTTP client for the IDM item and datamodel APIs."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from themesync.adapters.http_resilience import (
    ClientFactory,
    ResilientClient,
    default_client_factory,
    describe_http_error,
    status_code_of,
)
from themesync.domain.errors import UpstreamFetchError

from .schema import IdmEntityResponse, IdmItemResponse
from .translator import translate_attributes, translate_value_lists

if TYPE_CHECKING:
    from types import TracebackType

    from pydantic import BaseModel

    from themesync.adapters.auth import CredentialCache
    from themesync.config.plm import PlmConfig
    from themesync.domain.model import AttributeRecord, ValueListMap

log = getLogger(__name__)


class IdmClient:
    """Reads classification items and their entity value lists.

    Entity definitions change rarely; the IDM resilience profile caches successful
    entity responses in memory, so repeated lookups for one entity reuse the first
    response. Item reads are never cached.
    """

    def __init__(
        self,
        *,
        config: PlmConfig,
        credentials: CredentialCache,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._credentials = credentials
        self._client_factory = client_factory or default_client_factory
        self._http: ResilientClient | None = None

    async def __aenter__(self) -> IdmClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> ResilientClient:
        if self._http is None:
            self._http = self._client_factory(self._config.idm)
        return self._http

    async def _get[ModelT: BaseModel](self, path: str, model: type[ModelT]) -> ModelT:
        headers = {
            "Authorization": await self._credentials.get_authorization_value(),
            "Content-Type": "application/json",
        }
        try:
            response = await self._client().get(path, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(
                f"IDM read failed: {describe_http_error(exc)}", status_code=status_code_of(exc)
            ) from exc
        except ValueError as exc:
            raise UpstreamFetchError(f"IDM returned a non-JSON body for {path}") from exc

        if not isinstance(payload, dict):
            raise UpstreamFetchError(f"Unexpected IDM payload for {path}")
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamFetchError(f"Unexpected IDM payload for {path}") from exc

    async def fetch_attributes_for_pid(self, pid: str) -> list[AttributeRecord]:
        response = await self._get(f"items/{quote(pid, safe='')}", IdmItemResponse)
        attributes = translate_attributes(response)
        log.info("Fetched %s attribute(s) for %s", len(attributes), pid)
        return attributes

    async def fetch_value_lists(self, entity_name: str) -> ValueListMap:
        response = await self._get(
            f"datamodel/entities/{quote(entity_name, safe='')}", IdmEntityResponse
        )
        value_lists = translate_value_lists(response)
        log.info("Fetched %s value list(s) for entity %s", len(value_lists), entity_name)
        return value_lists
