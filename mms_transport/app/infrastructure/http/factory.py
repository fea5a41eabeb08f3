"""HTTP infrastructure factories: build pool and resolver from settings (no provider logic in composition)."""
from __future__ import annotations

from mms_transport.app.config.settings import Settings
from mms_transport.app.infrastructure.http.connection_pool import HttpcoreConnectionPool
from mms_transport.app.infrastructure.http.host_resolver import SystemHostResolver
from mms_transport.app.ports.connection_pool import ConnectionPool
from mms_transport.app.ports.host_resolver import HostResolver


def create_connection_pool(settings: Settings) -> ConnectionPool:
    return HttpcoreConnectionPool(
        max_connections=settings.pool_max_connections,
        keepalive_expiry=settings.pool_keepalive_expiry_seconds,
    )


def create_host_resolver(settings: Settings) -> HostResolver:
    """System resolver; settings carry no resolver options yet."""
    return SystemHostResolver()
