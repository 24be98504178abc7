"""Async HTTP client with retries, rate limiting and optional response caching."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import (
    TYPE_CHECKING,
    TypedDict,
    Unpack,
)

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Request as HishelCacheRequest
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheTransport
from httpx_retries import Retry, RetryTransport

from themesync.config.http_resilience import (
    CacheConfig,
    ResilienceConfig,
    RetryPolicy,
    ShouldCacheHook,
)

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import (
        AuthTypes,
        HeaderTypes,
        QueryParamTypes,
        RequestData,
        TimeoutTypes,
        URLTypes,
    )

ClientFactory = Callable[[ResilienceConfig], "ResilientClient"]

CACHEABLE_METHODS = frozenset({"GET"})


class RequestOptions(TypedDict, total=False):
    data: RequestData | None
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    auth: AuthTypes | UseClientDefault | None
    timeout: TimeoutTypes | UseClientDefault


class AsyncClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    transport: httpx.AsyncBaseTransport


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class ResilientClient:
    """Thin wrapper over ``httpx.AsyncClient`` configured from a :class:`ResilienceConfig`.

    The transport stack is cache (when configured) over retries over ``transport``,
    which defaults to httpx's network transport.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )

        outer: httpx.AsyncBaseTransport = RetryTransport(
            transport=transport, retry=build_retry(config.retry)
        )
        cache_components = _build_cache_components(config.cache)
        if cache_components is not None:
            storage, policy = cache_components
            outer = AsyncCacheTransport(next_transport=outer, storage=storage, policy=policy)

        client_kwargs: AsyncClientOptions = {
            "timeout": config.timeout_seconds,
            "transport": outer,
        }
        if config.base_url is not None:
            client_kwargs["base_url"] = config.base_url
        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        async def do_request() -> httpx.Response:
            return await self._client.request(method, url, **kwargs)

        return await self._send(do_request)

    async def get(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def _send(self, func: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
        if self._limiter is None:
            return await func()
        async with self._limiter:
            return await func()


class _CacheableRequestFilter(BaseFilter[HishelCacheRequest]):
    """Only reads are looked up in or stored to the cache."""

    def needs_body(self) -> bool:
        return False

    def apply(self, item: HishelCacheRequest, body: bytes | None) -> bool:  # noqa: ARG002
        return item.method.upper() in CACHEABLE_METHODS


class _ShouldCacheResponseFilter(BaseFilter[HishelCacheResponse]):
    """Hishel response filter that delegates successful JSON bodies to a predicate."""

    def __init__(self, predicate: ShouldCacheHook | None) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:
        if not 200 <= item.status_code < 300:
            return False
        if self._predicate is None:
            return True
        if body is None:
            return False
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return bool(self._predicate(payload))


def _build_cache_components(
    config: CacheConfig | None,
) -> tuple[AsyncSqliteStorage, FilterPolicy] | None:
    if config is None or not config.enabled:
        return None

    storage = AsyncSqliteStorage(
        database_path=":memory:",
        default_ttl=config.default_ttl_seconds,
    )
    policy = FilterPolicy(
        request_filters=[_CacheableRequestFilter()],
        response_filters=[_ShouldCacheResponseFilter(config.should_cache)],
    )
    return storage, policy


def default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def describe_http_error(exc: httpx.HTTPError) -> str:
    """Render an httpx error as ``METHOD path -> status`` without headers or bodies."""

    if isinstance(exc, httpx.HTTPStatusError):
        request = exc.request
        return f"{request.method} {request.url.path} -> HTTP {exc.response.status_code}"
    try:
        request = exc.request
    except RuntimeError:
        return f"{type(exc).__name__}: {exc}"
    return f"{request.method} {request.url.path} -> {type(exc).__name__}"


def status_code_of(exc: httpx.HTTPError) -> int | None:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    return None
