"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from themesync.adapters.auth import CredentialCache
from themesync.adapters.idm import IdmClient
from themesync.adapters.plm import PlmClient
from themesync.config import get_plm_config
from themesync.domain.attributes import AttributeMapper
from themesync.domain.theme_sync import (
    collect_theme,
    describe_theme_attributes,
    format_theme_attributes,
    update_style_colorways,
    update_theme_colorways,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from themesync.adapters.auth import TokenInfo
    from themesync.adapters.http_resilience import ClientFactory
    from themesync.config import PlmConfig
    from themesync.domain.formatting import ThemeAttributesReport
    from themesync.domain.theme_sync import (
        StyleUpdateResult,
        ThemeAttributeView,
        ThemeColorways,
        ThemeUpdateResult,
    )

log = getLogger(__name__)


@dataclass(slots=True)
class Services:
    """Adapters and domain services sharing one credential cache."""

    config: PlmConfig
    credentials: CredentialCache
    plm: PlmClient
    idm: IdmClient
    mapper: AttributeMapper

    async def aclose(self) -> None:
        await self.plm.aclose()
        await self.idm.aclose()


def build_services(
    config: PlmConfig | None = None,
    *,
    client_factory: ClientFactory | None = None,
) -> Services:
    effective_config = config or get_plm_config()
    credentials = CredentialCache(effective_config, client_factory=client_factory)
    plm = PlmClient(
        config=effective_config, credentials=credentials, client_factory=client_factory
    )
    idm = IdmClient(
        config=effective_config, credentials=credentials, client_factory=client_factory
    )
    return Services(
        config=effective_config,
        credentials=credentials,
        plm=plm,
        idm=idm,
        mapper=AttributeMapper(idm),
    )


@asynccontextmanager
async def open_services(
    config: PlmConfig | None = None,
    *,
    client_factory: ClientFactory | None = None,
) -> AsyncIterator[Services]:
    services = build_services(config, client_factory=client_factory)
    try:
        yield services
    finally:
        await services.aclose()


def _run[T](
    flow: Callable[[Services], Awaitable[T]],
    config: PlmConfig | None,
    client_factory: ClientFactory | None,
) -> T:
    async def runner() -> T:
        async with open_services(config, client_factory=client_factory) as services:
            return await flow(services)

    return asyncio.run(runner())


def sync_theme(
    theme_id: int,
    *,
    config: PlmConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> ThemeColorways:
    """Fetch a theme's colorways grouped by style."""

    log.info("Collecting theme %s", theme_id)
    return _run(lambda s: collect_theme(theme_id, store=s.plm), config, client_factory)


def theme_attributes(
    theme_id: int,
    *,
    config: PlmConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> ThemeAttributeView:
    log.info("Resolving attributes for theme %s", theme_id)
    return _run(
        lambda s: describe_theme_attributes(theme_id, store=s.plm, mapper=s.mapper),
        config,
        client_factory,
    )


def update_theme(
    theme_id: int,
    *,
    config: PlmConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> ThemeUpdateResult:
    """Push theme attributes onto every colorway of the theme and reconcile its styles."""

    log.info("Starting theme update for theme %s", theme_id)
    result = _run(
        lambda s: update_theme_colorways(theme_id, store=s.plm, mapper=s.mapper),
        config,
        client_factory,
    )
    log.info(
        "Finished theme update: theme=%s, styles=%s, failed=%s, colorways=%s, styles_updated=%s",
        theme_id,
        result.total_styles,
        result.failed_styles,
        result.total_updated_colorways,
        result.styles_updated,
    )
    return result


def update_style(
    style_id: int,
    *,
    config: PlmConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> StyleUpdateResult | None:
    """Refresh one style's colorways from their themes and reconcile the style."""

    log.info("Starting style update for style %s", style_id)
    result = _run(
        lambda s: update_style_colorways(style_id, store=s.plm, mapper=s.mapper),
        config,
        client_factory,
    )
    if result is not None:
        log.info(
            "Finished style update: style=%s, colorways=%s/%s, updated=%s",
            style_id,
            result.updated_colorways,
            result.total_colorways,
            result.reconciliation.updated,
        )
    return result


def format_theme(
    pid: str,
    *,
    config: PlmConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> ThemeAttributesReport:
    log.info("Formatting attributes of %s", pid)
    return _run(lambda s: format_theme_attributes(pid, mapper=s.mapper), config, client_factory)


async def _acquire_and_describe(services: Services) -> TokenInfo:
    await services.credentials.get_authorization_value()
    return services.credentials.describe()


async def _acquire_and_revoke(services: Services) -> TokenInfo:
    await services.credentials.get_authorization_value()
    await services.credentials.revoke()
    return services.credentials.describe()


def token_info(
    *,
    config: PlmConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> TokenInfo:
    """Acquire an access token and report its type and expiry."""

    return _run(_acquire_and_describe, config, client_factory)


def revoke_token(
    *,
    config: PlmConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> TokenInfo:
    """Acquire the session token and revoke it at the provider."""

    return _run(_acquire_and_revoke, config, client_factory)
