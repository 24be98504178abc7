from __future__ import annotations

import asyncio

import httpx
import pytest

from themesync.adapters.auth import CredentialCache
from themesync.adapters.idm import IdmClient
from themesync.config import PlmConfig
from themesync.domain.errors import UpstreamFetchError
from themesync.domain.model import AttributeRecord, AttributeType

from tests.support.http import Handler, make_client_factory, make_transport_factory

TOKEN_PATH = "/TENANT/as/token.oauth2"
IDM = "/TENANT/IDM/api"

ITEM_PAYLOAD = {
    "item": {
        "pid": "Theme_Attributes-42-1-LATEST",
        "attrs": {
            "attr": [
                {"name": "Cluster", "type": "1", "qual": "Cluster", "value": "C1"},
                {"name": "LifeStyleGrup", "type": "3", "value": "003"},
                {"name": "InStoreDate", "type": "7", "value": "2025-03-01"},
                {"name": "Empty", "type": "1"},
            ]
        },
    }
}

ENTITY_PAYLOAD = {
    "entity": {
        "name": "Theme_Attributes",
        "attrs": {
            "attr": [
                {
                    "name": "Cluster",
                    "desc": "Küme",
                    "type": "1",
                    "valueset": {"value": [{"name": "C1", "desc": "Urban"}, {"name": 2, "desc": "Two"}]},
                },
                {"name": "Sezon", "type": "1", "valueset": {"value": [{"name": "A", "desc": "Kış"}]}},
                {"name": "Tema_Adi", "desc": "Tema Adı", "type": "1"},
            ]
        },
    }
}


def _client(config: PlmConfig, handler: Handler) -> IdmClient:
    factory = make_client_factory(handler)
    credentials = CredentialCache(config, client_factory=factory)
    return IdmClient(config=config, credentials=credentials, client_factory=factory)


def _serve(routes: dict[str, tuple[int, object]]) -> tuple[Handler, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == TOKEN_PATH:
            return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
        seen.append(request)
        status, payload = routes.get(request.url.path, (404, {"error": "not found"}))
        return httpx.Response(status, json=payload)

    return handler, seen


def test_fetch_attributes_for_pid(plm_config: PlmConfig) -> None:
    handler, seen = _serve({f"{IDM}/items/Theme_Attributes-42-1-LATEST": (200, ITEM_PAYLOAD)})
    client = _client(plm_config, handler)

    async def runner() -> list[AttributeRecord]:
        async with client:
            return await client.fetch_attributes_for_pid("Theme_Attributes-42-1-LATEST")

    attributes = asyncio.run(runner())

    assert [(a.name, a.type, a.raw_value) for a in attributes] == [
        ("Cluster", AttributeType.STRING, "C1"),
        ("LifeStyleGrup", AttributeType.INTEGER, "003"),
        ("InStoreDate", AttributeType.DATE, "2025-03-01"),
        ("Empty", AttributeType.STRING, None),
    ]
    assert attributes[0].qualifier == "Cluster"
    assert attributes[1].parsed_value == 3
    assert seen[0].headers["Authorization"] == "Bearer tok"


def test_item_without_attributes_is_empty(plm_config: PlmConfig) -> None:
    handler, _ = _serve({f"{IDM}/items/X-1": (200, {"item": {"pid": "X-1"}})})
    client = _client(plm_config, handler)

    assert asyncio.run(client.fetch_attributes_for_pid("X-1")) == []


def test_fetch_value_lists_skips_attributes_without_value_set(plm_config: PlmConfig) -> None:
    handler, _ = _serve({f"{IDM}/datamodel/entities/Theme_Attributes": (200, ENTITY_PAYLOAD)})
    client = _client(plm_config, handler)

    value_lists = asyncio.run(client.fetch_value_lists("Theme_Attributes"))

    assert sorted(value_lists) == ["Cluster", "Sezon"]
    cluster = value_lists["Cluster"]
    assert cluster.display_name == "Küme"
    assert cluster.find("C1") is not None
    assert cluster.find("2") is not None
    assert value_lists["Sezon"].display_name == "Sezon"


def test_missing_item_maps_to_fetch_error(plm_config: PlmConfig) -> None:
    handler, _ = _serve({})
    client = _client(plm_config, handler)

    with pytest.raises(UpstreamFetchError) as exc:
        asyncio.run(client.fetch_attributes_for_pid("Theme_Attributes-1"))

    assert exc.value.status_code == 404


def test_non_object_payload_maps_to_fetch_error(plm_config: PlmConfig) -> None:
    handler, _ = _serve({f"{IDM}/datamodel/entities/Theme_Attributes": (200, ["unexpected"])})
    client = _client(plm_config, handler)

    with pytest.raises(UpstreamFetchError):
        asyncio.run(client.fetch_value_lists("Theme_Attributes"))


def _cached_client(config: PlmConfig, handler: Handler) -> IdmClient:
    factory = make_transport_factory(handler)
    credentials = CredentialCache(config, client_factory=factory)
    return IdmClient(config=config, credentials=credentials, client_factory=factory)


def test_value_lists_are_served_from_cache(plm_config: PlmConfig) -> None:
    handler, seen = _serve({f"{IDM}/datamodel/entities/Theme_Attributes": (200, ENTITY_PAYLOAD)})
    client = _cached_client(plm_config, handler)

    async def runner() -> tuple[list[str], list[str]]:
        async with client:
            first = await client.fetch_value_lists("Theme_Attributes")
            second = await client.fetch_value_lists("Theme_Attributes")
        return sorted(first), sorted(second)

    first, second = asyncio.run(runner())

    assert first == second == ["Cluster", "Sezon"]
    assert len(seen) == 1


def test_item_reads_bypass_cache(plm_config: PlmConfig) -> None:
    handler, seen = _serve({f"{IDM}/items/Theme_Attributes-42-1-LATEST": (200, ITEM_PAYLOAD)})
    client = _cached_client(plm_config, handler)

    async def runner() -> None:
        async with client:
            await client.fetch_attributes_for_pid("Theme_Attributes-42-1-LATEST")
            await client.fetch_attributes_for_pid("Theme_Attributes-42-1-LATEST")

    asyncio.run(runner())

    assert len(seen) == 2


def test_failed_value_list_reads_are_not_cached(plm_config: PlmConfig) -> None:
    handler, seen = _serve({})
    client = _cached_client(plm_config, handler)

    async def runner() -> None:
        async with client:
            for _ in range(2):
                with pytest.raises(UpstreamFetchError):
                    await client.fetch_value_lists("Theme_Attributes")

    asyncio.run(runner())

    assert len(seen) == 2
