"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass

from mms_transport.app.ports.config_provider import ConfigProvider


@dataclass(frozen=True)
class ProxyAddress:
    """HTTP proxy in front of the MMSC."""

    host: str
    port: int

    @staticmethod
    def from_flag(is_proxy_set: bool, host: str, port: int) -> "ProxyAddress | None":
        """Carrier APN settings carry host/port even when no proxy applies; only the flag counts."""
        if not is_proxy_set:
            return None
        return ProxyAddress(host=host, port=port)

    @property
    def url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"http://{host}:{self.port}"

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class RequestDescriptor:
    """One MMS transaction as requested by the caller."""

    method: str
    url: str
    config: ConfigProvider
    payload: bytes | None = None
    proxy: ProxyAddress | None = None

    @property
    def payload_size(self) -> int:
        return len(self.payload) if self.payload else 0


@dataclass(frozen=True)
class MmsRequest:
    """Fully assembled HTTP request (value object)."""

    method: str
    url: str
    headers: tuple[tuple[str, str], ...]
    content: bytes | None = None

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None
