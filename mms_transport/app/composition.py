"""Composition root: build and lifecycle-manage the long-lived transport dependencies.

Composition may: import concrete classes, call factories, store interface types,
manage high-level lifecycle. The connection pool and host resolver created here
are shared by every transaction the executor runs.
"""
from __future__ import annotations

from loguru import logger

from mms_transport.app.application.transport_executor import TransportExecutor
from mms_transport.app.config.settings import Settings
from mms_transport.app.domain.config_snapshot import MmsConfigSnapshot
from mms_transport.app.domain.models import ProxyAddress
from mms_transport.app.infrastructure.http.connection_factory import ConnectionFactory
from mms_transport.app.infrastructure.http.factory import create_connection_pool, create_host_resolver
from mms_transport.app.ports.connection_pool import ConnectionPool
from mms_transport.app.ports.host_resolver import HostResolver


class TransportDependencies:
    """Holds wired transport dependencies and their lifecycle."""

    def __init__(self, *, settings: Settings) -> None:
        self._settings = settings
        self._connection_pool: ConnectionPool | None = None
        self._host_resolver: HostResolver | None = None
        self._executor: TransportExecutor | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def executor(self) -> TransportExecutor:
        if self._executor is None:
            raise RuntimeError("executor is not initialized")
        return self._executor

    @property
    def connection_pool(self) -> ConnectionPool:
        if self._connection_pool is None:
            raise RuntimeError("connection_pool is not initialized")
        return self._connection_pool

    def config_snapshot(self) -> MmsConfigSnapshot:
        return MmsConfigSnapshot.from_settings(self._settings)

    def proxy(self) -> ProxyAddress | None:
        return ProxyAddress.from_flag(
            self._settings.proxy_enabled,
            self._settings.proxy_host,
            self._settings.proxy_port,
        )

    def open(self) -> None:
        self._host_resolver = create_host_resolver(self._settings)
        self._connection_pool = create_connection_pool(self._settings)
        factory = ConnectionFactory(self._connection_pool, self._host_resolver)

        configured_locale = self._settings.locale
        if configured_locale:
            self._executor = TransportExecutor(factory, locale_provider=lambda: configured_locale)
        else:
            self._executor = TransportExecutor(factory)

    def close(self) -> None:
        if self._connection_pool is not None:
            try:
                self._connection_pool.close()
            except Exception as exc:
                logger.warning("connection pool close failed: {}", exc)
            self._connection_pool = None

        self._host_resolver = None
        self._executor = None

    def __enter__(self) -> "TransportDependencies":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_transport_dependencies(settings: Settings | None = None) -> TransportDependencies:
    return TransportDependencies(settings=settings or Settings())
