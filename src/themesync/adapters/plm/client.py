"""HTTP client for the FASHIONPLM OData and job APIs."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from themesync.adapters.http_resilience import (
    ClientFactory,
    ResilientClient,
    default_client_factory,
    describe_http_error,
    status_code_of,
)
from themesync.domain.errors import UpstreamFetchError, UpstreamWriteError

from .schema import ColorwayCollection, StyleCollection
from .translator import (
    colorway_patch_payloads,
    reindex_task_payload,
    translate_colorway,
    translate_style,
    translate_style_with_colorways,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import TracebackType

    from themesync.adapters.auth import CredentialCache
    from themesync.config.plm import PlmConfig
    from themesync.domain.model import (
        ColorwayPatch,
        ColorwayRecord,
        StyleRecord,
        StyleWithColorways,
    )

log = getLogger(__name__)

ODATA_PATH = "odata2/api/odata2"
JOB_TASKS_PATH = "job/api/job/tasks"
STYLE_SELECT = "StyleId,Status,ThemeId"
STYLE_COLORWAYS_EXPAND = (
    "StyleColorways($expand=Theme($select=ThemeId,Name,Code,Description);"
    "$select=StyleColorwayId,StyleId,ColorrngId,Code,Name,HexValue,ThemeId,ColorwayStatus)"
)


class PlmClient:
    """Reads and writes styles and colorways; one HTTP client per instance."""

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

    async def __aenter__(self) -> PlmClient:
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
            self._http = self._client_factory(self._config.plm)
        return self._http

    async def _headers(self) -> dict[str, str]:
        return {
            "Authorization": await self._credentials.get_authorization_value(),
            "Content-Type": "application/json",
        }

    async def _get_json(self, path: str, params: Mapping[str, str]) -> object:
        headers = await self._headers()
        try:
            response = await self._client().get(path, params=dict(params), headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(
                f"PLM read failed: {describe_http_error(exc)}", status_code=status_code_of(exc)
            ) from exc
        except ValueError as exc:
            raise UpstreamFetchError(f"PLM returned a non-JSON body for {path}") from exc

    async def _write(self, method: str, path: str, payload: object) -> None:
        headers = await self._headers()
        try:
            response = await self._client().request(method, path, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamWriteError(
                f"PLM write failed: {describe_http_error(exc)}", status_code=status_code_of(exc)
            ) from exc

    async def fetch_colorways_for_theme(self, theme_id: int) -> list[ColorwayRecord]:
        payload = await self._get_json(
            f"{ODATA_PATH}/STYLECOLORWAYS",
            {"$filter": f"ThemeId eq {theme_id}", "$expand": "Theme"},
        )
        try:
            collection = ColorwayCollection.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamFetchError(f"Unexpected STYLECOLORWAYS payload for theme {theme_id}") from exc
        colorways = [translate_colorway(item) for item in collection.value]
        log.info("Fetched %s colorway(s) for theme %s", len(colorways), theme_id)
        return colorways

    async def _fetch_styles(self, style_id: int, params: dict[str, str]) -> StyleCollection:
        payload = await self._get_json(f"{ODATA_PATH}/STYLE", params)
        try:
            return StyleCollection.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamFetchError(f"Unexpected STYLE payload for style {style_id}") from exc

    async def fetch_style(self, style_id: int) -> StyleRecord | None:
        collection = await self._fetch_styles(
            style_id, {"$filter": f"StyleId eq {style_id}", "$select": STYLE_SELECT}
        )
        if not collection.value:
            return None
        style = translate_style(collection.value[0])
        log.debug("Style %s: status=%s, theme=%s", style_id, style.status, style.theme_id)
        return style

    async def fetch_style_with_colorways(self, style_id: int) -> StyleWithColorways | None:
        collection = await self._fetch_styles(
            style_id,
            {
                "$filter": f"StyleId eq {style_id}",
                "$select": STYLE_SELECT,
                "$expand": STYLE_COLORWAYS_EXPAND,
            },
        )
        if not collection.value:
            return None
        return translate_style_with_colorways(collection.value[0])

    async def patch_style(self, style_id: int, fields: Mapping[str, int]) -> None:
        log.info("Patching style %s with %s", style_id, dict(fields))
        await self._write("PATCH", f"{ODATA_PATH}/STYLE({style_id})", dict(fields))

    async def patch_colorways(self, patches: Sequence[ColorwayPatch]) -> None:
        payloads = colorway_patch_payloads(patches)
        log.info("Patching %s colorway(s)", len(payloads))
        await self._write("PATCH", f"{ODATA_PATH}/STYLECOLORWAYS", payloads)

    async def trigger_reindex(self, style_id: int) -> None:
        payload = reindex_task_payload(style_id, schema=self._config.search_schema)
        log.info("Triggering search re-index for style %s (%s)", style_id, self._config.search_schema)
        await self._write("POST", JOB_TASKS_PATH, payload)
