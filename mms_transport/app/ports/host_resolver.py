"""Host resolver port: hostname to addresses.

Shared across concurrent transactions; implementations must be thread-safe.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HostResolver(Protocol):
    def resolve(self, host: str) -> list[str]:
        """Return candidate addresses for host, in preference order. Raise OSError on failure."""
        ...
