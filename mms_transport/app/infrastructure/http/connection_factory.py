"""Connection factory: builds the single-use httpx client for one MMS transaction."""
from __future__ import annotations

import ssl

import httpx

from mms_transport.app.domain.models import ProxyAddress
from mms_transport.app.ports.connection_pool import ConnectionPool
from mms_transport.app.ports.host_resolver import HostResolver


class ConnectionFactory:
    """Configures clients over a shared pool and resolver.

    Every client speaks HTTP/1.1 only, applies one timeout to connect, read, write
    and pool acquisition, never answers authentication challenges and ignores
    proxy/netrc environment variables. Plain HTTP never follows redirects; HTTPS
    uses the platform's default certificate and hostname verification.
    """

    def __init__(
        self,
        connection_pool: ConnectionPool,
        host_resolver: HostResolver,
        *,
        ssl_context: ssl.SSLContext | None = None,
    ) -> None:
        self._connection_pool = connection_pool
        self._host_resolver = host_resolver
        self._ssl_context = ssl_context or ssl.create_default_context()

    def build(self, scheme: str, proxy: ProxyAddress | None, timeout_millis: int) -> httpx.Client:
        if scheme == "http":
            follow_redirects = False
            ssl_context: ssl.SSLContext | None = None
        elif scheme == "https":
            follow_redirects = True
            ssl_context = self._ssl_context
        else:
            raise ValueError(f"Invalid URL or unrecognized protocol {scheme}")

        transport = self._connection_pool.acquire(
            proxy=proxy,
            resolver=self._host_resolver,
            ssl_context=ssl_context,
        )
        return httpx.Client(
            transport=transport,
            timeout=httpx.Timeout(timeout_millis / 1000.0),
            follow_redirects=follow_redirects,
            auth=None,
            trust_env=False,
        )
