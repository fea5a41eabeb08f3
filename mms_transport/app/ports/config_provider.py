"""Config provider port: the read-only carrier configuration one transaction needs.

Deliberately narrow; the transport never sees a general environment handle.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfigProvider(Protocol):
    """Per-call configuration snapshot supplied by the caller."""

    @property
    def user_agent(self) -> str: ...

    @property
    def ua_prof_tag_name(self) -> str: ...

    @property
    def ua_prof_url(self) -> str | None: ...

    @property
    def timeout_millis(self) -> int: ...

    @property
    def support_charset_header(self) -> bool: ...

    @property
    def extra_header_spec(self) -> str: ...

    def resolve_macro(self, name: str) -> str | None:
        """Return the value for a header macro, or None when the carrier does not define it."""
        ...
