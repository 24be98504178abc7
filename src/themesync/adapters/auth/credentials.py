"""OAuth2 password-grant credential cache for the ION API."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from themesync.adapters.http_resilience import (
    ClientFactory,
    default_client_factory,
    describe_http_error,
)
from themesync.domain.errors import AuthError

from .schema import TokenResponse

if TYPE_CHECKING:
    from themesync.config.plm import PlmConfig

log = getLogger(__name__)

REFRESH_BUFFER = timedelta(minutes=5)
DEFAULT_TOKEN_TYPE = "Bearer"
DEFAULT_EXPIRES_IN_SECONDS = 3600

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class Credential:
    token: str
    token_type: str
    expires_at: datetime

    def is_stale(self, now: datetime, buffer: timedelta = REFRESH_BUFFER) -> bool:
        return now >= self.expires_at - buffer

    @property
    def authorization_value(self) -> str:
        return f"{self.token_type} {self.token}"

    def __repr__(self) -> str:
        return f"Credential(token_type={self.token_type!r}, expires_at={self.expires_at!r})"


@dataclass(slots=True, frozen=True)
class TokenInfo:
    has_token: bool
    is_valid: bool
    expires_at: datetime | None
    token_type: str | None


class CredentialCache:
    """Holds one bearer credential and refreshes it before expiry.

    Concurrent callers that find the credential stale share a single grant
    request: the first one refreshes under the lock, the rest re-check after
    acquiring it and reuse the new token.
    """

    def __init__(
        self,
        config: PlmConfig,
        *,
        client_factory: ClientFactory | None = None,
        clock: Clock = _utcnow,
        refresh_buffer: timedelta = REFRESH_BUFFER,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or default_client_factory
        self._clock = clock
        self._refresh_buffer = refresh_buffer
        self._credential: Credential | None = None
        self._refresh_lock = asyncio.Lock()

    @property
    def credential(self) -> Credential | None:
        return self._credential

    def _fresh_credential(self) -> Credential | None:
        credential = self._credential
        if credential is None or credential.is_stale(self._clock(), self._refresh_buffer):
            return None
        return credential

    async def get_authorization_value(self) -> str:
        credential = self._fresh_credential()
        if credential is not None:
            log.debug("Using cached access token")
            return credential.authorization_value

        async with self._refresh_lock:
            credential = self._fresh_credential()
            if credential is None:
                credential = await self._fetch_credential()
                self._credential = credential
        return credential.authorization_value

    async def _fetch_credential(self) -> Credential:
        account = self._config.account
        form = {
            "grant_type": "password",
            "username": account.access_key,
            "password": account.secret_key,
        }
        log.info("Requesting new access token for tenant %s", self._config.tenant_id)
        try:
            async with self._client_factory(self._config.sso) as client:
                response = await client.post(
                    self._config.token_url,
                    data=form,
                    auth=(account.client_id, account.client_secret),
                )
                response.raise_for_status()
                payload = TokenResponse.model_validate(response.json())
        except httpx.HTTPError as exc:
            raise AuthError(
                f"Failed to acquire access token: {describe_http_error(exc)}"
            ) from exc
        except (ValueError, ValidationError) as exc:
            raise AuthError("Failed to acquire access token: unreadable grant response") from exc

        if not payload.access_token:
            raise AuthError("Failed to acquire access token: access_token not found")

        expires_in = payload.expires_in or DEFAULT_EXPIRES_IN_SECONDS
        credential = Credential(
            token=payload.access_token,
            token_type=payload.token_type or DEFAULT_TOKEN_TYPE,
            expires_at=self._clock() + timedelta(seconds=expires_in),
        )
        log.info(
            "Access token acquired (type=%s, expires_at=%s)",
            credential.token_type,
            credential.expires_at.isoformat(),
        )
        return credential

    async def revoke(self) -> None:
        """Revoke the cached token at the provider; local state is cleared either way."""

        credential = self._credential
        if credential is None:
            log.info("No token to revoke")
            return

        account = self._config.account
        try:
            async with self._client_factory(self._config.sso) as client:
                response = await client.post(
                    self._config.revoke_url,
                    data={"token": credential.token},
                    auth=(account.client_id, account.client_secret),
                )
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise AuthError(f"Failed to revoke token: {describe_http_error(exc)}") from exc
        finally:
            self._credential = None
        log.info("Token revoked")

    def describe(self) -> TokenInfo:
        credential = self._credential
        return TokenInfo(
            has_token=credential is not None,
            is_valid=self._fresh_credential() is not None,
            expires_at=credential.expires_at if credential is not None else None,
            token_type=credential.token_type if credential is not None else None,
        )

