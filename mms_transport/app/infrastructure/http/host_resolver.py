"""Host resolution adapters: system resolver and the httpcore backend that uses any HostResolver."""
from __future__ import annotations

import socket
from typing import Any, Iterable

import httpcore

from mms_transport.app.ports.host_resolver import HostResolver


class SystemHostResolver(HostResolver):
    """Resolves through getaddrinfo; stateless and safe to share between threads."""

    def resolve(self, host: str) -> list[str]:
        try:
            infos = socket.getaddrinfo(host, None, type=socket.SOCK_STREAM)
        except UnicodeError as exc:
            # idna rejects empty labels and labels over 63 characters.
            raise OSError(f"invalid host name {host}: {exc}") from exc
        addresses: list[str] = []
        for _family, _type, _proto, _canonname, sockaddr in infos:
            address = str(sockaddr[0])
            if address not in addresses:
                addresses.append(address)
        return addresses


class ResolvingNetworkBackend(httpcore.SyncBackend):
    """Sync network backend that connects to the addresses an injected HostResolver returns.

    Only the TCP connect target changes; TLS SNI and hostname verification still
    use the origin host, which httpcore passes separately to start_tls.
    """

    def __init__(self, resolver: HostResolver) -> None:
        self._resolver = resolver

    def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: float | None = None,
        local_address: str | None = None,
        socket_options: Iterable[Any] | None = None,
    ) -> httpcore.NetworkStream:
        try:
            addresses = self._resolver.resolve(host)
        except (OSError, UnicodeError) as exc:
            raise httpcore.ConnectError(f"unable to resolve host {host}: {exc}") from exc
        last_error = httpcore.ConnectError(f"no addresses for host {host}")
        for address in addresses:
            try:
                return super().connect_tcp(
                    address,
                    port,
                    timeout=timeout,
                    local_address=local_address,
                    socket_options=socket_options,
                )
            except httpcore.ConnectError as exc:
                last_error = exc
        raise last_error
