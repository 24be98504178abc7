from __future__ import annotations

import pytest

from themesync.config import PlmConfig, ServiceAccount, build_plm_config

ION_API_URL = "https://ion.test"
SSO_URL = "https://sso.test/TENANT/as/"

PLM_ENV_VARS = (
    "PLM_TENANT_ID",
    "PLM_CLIENT_ID",
    "PLM_CLIENT_SECRET",
    "PLM_SERVICE_ACCOUNT_ACCESS_KEY",
    "PLM_SERVICE_ACCOUNT_SECRET_KEY",
    "PLM_ION_API_URL",
    "PLM_SSO_URL",
    "PLM_SEARCH_SCHEMA",
)


@pytest.fixture
def plm_config() -> PlmConfig:
    return build_plm_config(
        tenant_id="TENANT",
        account=ServiceAccount(
            client_id="client-id",
            client_secret="client-secret",
            access_key="access-key",
            secret_key="secret-key",
        ),
        ion_api_url=ION_API_URL,
        sso_url=SSO_URL,
    )


@pytest.fixture
def clean_plm_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in PLM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
