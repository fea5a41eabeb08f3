"""Connection pool port: keep-alive connection reuse behind an httpx transport.

The pool is long-lived and owned by the caller. Transports it hands out are
borrowed: closing them must not tear down pooled connections.
"""
from __future__ import annotations

import ssl
from typing import Protocol, runtime_checkable

import httpx

from mms_transport.app.domain.models import ProxyAddress
from mms_transport.app.ports.host_resolver import HostResolver


@runtime_checkable
class ConnectionPool(Protocol):
    def acquire(
        self,
        *,
        proxy: ProxyAddress | None,
        resolver: HostResolver,
        ssl_context: ssl.SSLContext | None,
    ) -> httpx.BaseTransport:
        """Return a transport routed through proxy (if any), resolving hosts with resolver."""
        ...

    def close(self) -> None:
        """Drop every pooled connection."""
        ...
