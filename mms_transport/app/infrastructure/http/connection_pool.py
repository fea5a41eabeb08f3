"""Keep-alive connection pool shared by every MMS transaction (httpcore based).

One httpcore pool exists per (proxy, resolver, TLS context) route; clients borrow
a PooledTransport over it. Pools are HTTP/1.1 only: carrier gateways are known to
mishandle newer protocol negotiation.
"""
from __future__ import annotations

import contextlib
import ssl
import threading
from typing import Iterator, Union

import httpcore
import httpx
from loguru import logger

from mms_transport.app.domain.models import ProxyAddress
from mms_transport.app.infrastructure.http.host_resolver import ResolvingNetworkBackend
from mms_transport.app.ports.connection_pool import ConnectionPool
from mms_transport.app.ports.host_resolver import HostResolver

_PoolKey = tuple[Union[ProxyAddress, None], HostResolver, Union[ssl.SSLContext, None]]
_HttpcorePool = Union[httpcore.ConnectionPool, httpcore.HTTPProxy]

# Matched along the raised exception's MRO, so the most specific type wins.
_HTTPCORE_EXCEPTIONS: dict[type[Exception], type[httpx.TransportError]] = {
    httpcore.ConnectTimeout: httpx.ConnectTimeout,
    httpcore.ReadTimeout: httpx.ReadTimeout,
    httpcore.WriteTimeout: httpx.WriteTimeout,
    httpcore.PoolTimeout: httpx.PoolTimeout,
    httpcore.TimeoutException: httpx.TimeoutException,
    httpcore.ConnectError: httpx.ConnectError,
    httpcore.ReadError: httpx.ReadError,
    httpcore.WriteError: httpx.WriteError,
    httpcore.NetworkError: httpx.NetworkError,
    httpcore.ProxyError: httpx.ProxyError,
    httpcore.UnsupportedProtocol: httpx.UnsupportedProtocol,
    httpcore.LocalProtocolError: httpx.LocalProtocolError,
    httpcore.RemoteProtocolError: httpx.RemoteProtocolError,
    httpcore.ProtocolError: httpx.ProtocolError,
}


@contextlib.contextmanager
def _translate_httpcore_errors(request: httpx.Request) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        mapped = next(
            (_HTTPCORE_EXCEPTIONS[cls] for cls in type(exc).__mro__ if cls in _HTTPCORE_EXCEPTIONS),
            None,
        )
        if mapped is None:
            raise
        raise mapped(str(exc), request=request) from exc


class _PooledResponseStream(httpx.SyncByteStream):
    def __init__(self, stream: object, request: httpx.Request) -> None:
        self._stream = stream
        self._request = request

    def __iter__(self) -> Iterator[bytes]:
        with _translate_httpcore_errors(self._request):
            for part in self._stream:  # type: ignore[attr-defined]
                yield part

    def close(self) -> None:
        if hasattr(self._stream, "close"):
            self._stream.close()


class PooledTransport(httpx.BaseTransport):
    """httpx transport borrowing connections from a shared httpcore pool."""

    def __init__(self, pool: _HttpcorePool) -> None:
        self._pool = pool

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        core_request = httpcore.Request(
            method=request.method,
            url=httpcore.URL(
                scheme=request.url.raw_scheme,
                host=request.url.raw_host,
                port=request.url.port,
                target=request.url.raw_path,
            ),
            headers=request.headers.raw,
            content=request.stream,
            extensions=request.extensions,
        )
        with _translate_httpcore_errors(request):
            core_response = self._pool.handle_request(core_request)

        return httpx.Response(
            status_code=core_response.status,
            headers=core_response.headers,
            stream=_PooledResponseStream(core_response.stream, request),
            extensions=core_response.extensions,
        )

    def close(self) -> None:
        # Borrowed: the pool owner closes connections via HttpcoreConnectionPool.close().
        return None


class HttpcoreConnectionPool(ConnectionPool):
    """Thread-safe registry of httpcore pools, one per route."""

    def __init__(
        self,
        *,
        max_connections: int = 5,
        keepalive_expiry: float | None = 300.0,
    ) -> None:
        self._max_connections = max_connections
        self._keepalive_expiry = keepalive_expiry
        self._pools: dict[_PoolKey, _HttpcorePool] = {}
        self._lock = threading.Lock()

    def acquire(
        self,
        *,
        proxy: ProxyAddress | None,
        resolver: HostResolver,
        ssl_context: ssl.SSLContext | None,
    ) -> httpx.BaseTransport:
        key: _PoolKey = (proxy, resolver, ssl_context)
        with self._lock:
            pool = self._pools.get(key)
            if pool is None:
                pool = self._create_pool(proxy, resolver, ssl_context)
                self._pools[key] = pool
                logger.debug("HTTP: new connection pool, proxy={}, routes={}", proxy, len(self._pools))
        return PooledTransport(pool)

    def _create_pool(
        self,
        proxy: ProxyAddress | None,
        resolver: HostResolver,
        ssl_context: ssl.SSLContext | None,
    ) -> _HttpcorePool:
        backend = ResolvingNetworkBackend(resolver)
        if proxy is not None:
            return httpcore.HTTPProxy(
                proxy_url=proxy.url,
                ssl_context=ssl_context,
                max_connections=self._max_connections,
                keepalive_expiry=self._keepalive_expiry,
                http1=True,
                http2=False,
                network_backend=backend,
            )
        return httpcore.ConnectionPool(
            ssl_context=ssl_context,
            max_connections=self._max_connections,
            keepalive_expiry=self._keepalive_expiry,
            http1=True,
            http2=False,
            network_backend=backend,
        )

    @property
    def route_count(self) -> int:
        with self._lock:
            return len(self._pools)

    def close(self) -> None:
        with self._lock:
            pools = list(self._pools.values())
            self._pools.clear()
        for pool in pools:
            pool.close()
