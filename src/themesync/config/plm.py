"""PLM/ION API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import NO_RETRY, CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_ION_API_URL = "https://mingle-ionapi.eu1.inforcloudsuite.com"
DEFAULT_SSO_HOST = "https://mingle-sso.eu1.inforcloudsuite.com:443"
DEFAULT_SEARCH_SCHEMA = "FSH1"

TOKEN_ENDPOINT = "token.oauth2"
REVOKE_ENDPOINT = "revoke_token.oauth2"

PLM_TIMEOUT_SECONDS = 30.0
SSO_TIMEOUT_SECONDS = 15.0
VALUE_LIST_CACHE_TTL_SECONDS = 900.0


@dataclass(frozen=True, slots=True)
class ServiceAccount:
    """Client credentials plus the service-account key pair used for the password grant."""

    client_id: str
    client_secret: str
    access_key: str
    secret_key: str

    def __repr__(self) -> str:
        return f"ServiceAccount(client_id={self.client_id!r})"


@dataclass(frozen=True, slots=True)
class PlmConfig:
    tenant_id: str
    account: ServiceAccount
    ion_api_url: str
    sso_url: str
    search_schema: str
    sso: ResilienceConfig
    plm: ResilienceConfig
    idm: ResilienceConfig

    @property
    def token_url(self) -> str:
        return f"{self.sso_url}{TOKEN_ENDPOINT}"

    @property
    def revoke_url(self) -> str:
        return f"{self.sso_url}{REVOKE_ENDPOINT}"


def is_value_list_catalog(payload: object) -> bool:
    """Only datamodel entity bodies are cached; item reads always go upstream."""

    return isinstance(payload, dict) and isinstance(payload.get("entity"), dict)


def _tenant_base(ion_api_url: str, tenant_id: str) -> str:
    return f"{ion_api_url.rstrip('/')}/{tenant_id}"


def build_plm_config(
    *,
    tenant_id: str,
    account: ServiceAccount,
    ion_api_url: str = DEFAULT_ION_API_URL,
    sso_url: str | None = None,
    search_schema: str = DEFAULT_SEARCH_SCHEMA,
) -> PlmConfig:
    """Assemble a config with the default resilience profile of each upstream."""

    resolved_sso = sso_url or f"{DEFAULT_SSO_HOST}/{tenant_id}/as/"
    if not resolved_sso.endswith("/"):
        resolved_sso = f"{resolved_sso}/"
    tenant_base = _tenant_base(ion_api_url, tenant_id)

    return PlmConfig(
        tenant_id=tenant_id,
        account=account,
        ion_api_url=ion_api_url,
        sso_url=resolved_sso,
        search_schema=search_schema,
        sso=ResilienceConfig(
            name="sso",
            base_url=resolved_sso,
            timeout_seconds=SSO_TIMEOUT_SECONDS,
            retry=NO_RETRY,
        ),
        plm=ResilienceConfig(
            name="plm",
            base_url=f"{tenant_base}/FASHIONPLM",
            timeout_seconds=PLM_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        ),
        idm=ResilienceConfig(
            name="idm",
            base_url=f"{tenant_base}/IDM/api",
            timeout_seconds=PLM_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            cache=CacheConfig(
                default_ttl_seconds=VALUE_LIST_CACHE_TTL_SECONDS,
                should_cache=is_value_list_catalog,
            ),
        ),
    )


def get_plm_config() -> PlmConfig:
    values = require_env_vars(
        (
            "PLM_TENANT_ID",
            "PLM_CLIENT_ID",
            "PLM_CLIENT_SECRET",
            "PLM_SERVICE_ACCOUNT_ACCESS_KEY",
            "PLM_SERVICE_ACCOUNT_SECRET_KEY",
        )
    )
    tenant_id = values["PLM_TENANT_ID"]
    account = ServiceAccount(
        client_id=values["PLM_CLIENT_ID"],
        client_secret=values["PLM_CLIENT_SECRET"],
        access_key=values["PLM_SERVICE_ACCOUNT_ACCESS_KEY"],
        secret_key=values["PLM_SERVICE_ACCOUNT_SECRET_KEY"],
    )
    return build_plm_config(
        tenant_id=tenant_id,
        account=account,
        ion_api_url=optional_env_var("PLM_ION_API_URL", DEFAULT_ION_API_URL),
        sso_url=optional_env_var("PLM_SSO_URL", f"{DEFAULT_SSO_HOST}/{tenant_id}/as/"),
        search_schema=optional_env_var("PLM_SEARCH_SCHEMA", DEFAULT_SEARCH_SCHEMA),
    )
