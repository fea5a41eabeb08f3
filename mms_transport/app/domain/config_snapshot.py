"""Immutable per-call carrier configuration and the default carrier macro table."""
from __future__ import annotations

import base64
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping

from mms_transport.app.config.settings import Settings
from mms_transport.app.constants import (
    DEFAULT_HTTP_SOCKET_TIMEOUT_MS,
    DEFAULT_UA_PROF_TAG_NAME,
    DEFAULT_USER_AGENT,
)

MACRO_LINE1 = "LINE1"
MACRO_LINE1_NO_COUNTRY_CODE = "LINE1NOCOUNTRYCODE"
MACRO_NAI = "NAI"


@dataclass(frozen=True)
class CarrierMacros:
    """Values the carrier's header macros expand to.

    LINE1 is the subscriber's own number, LINE1NOCOUNTRYCODE the same number in
    national form, NAI the base64 of the network access identifier plus suffix.
    """

    line1_number: str = ""
    country_calling_code: str = ""
    nai: str = ""
    nai_suffix: str = ""
    extra: Mapping[str, str] = field(default_factory=dict)

    def lookup(self, name: str) -> str | None:
        if name == MACRO_LINE1:
            return self.line1_number or None
        if name == MACRO_LINE1_NO_COUNTRY_CODE:
            return self._national_number() or None
        if name == MACRO_NAI:
            return self._encoded_nai() or None
        return self.extra.get(name)

    def _national_number(self) -> str:
        number = self.line1_number.strip()
        code = self.country_calling_code.strip().lstrip("+")
        if number.startswith("+"):
            number = number[1:]
            if code and number.startswith(code):
                number = number[len(code):]
        return number

    def _encoded_nai(self) -> str:
        if not self.nai:
            return ""
        return base64.b64encode((self.nai + self.nai_suffix).encode("utf-8")).decode("ascii")


@dataclass(frozen=True)
class MmsConfigSnapshot:
    """ConfigProvider implementation: read once, shared by nothing."""

    user_agent: str = DEFAULT_USER_AGENT
    ua_prof_tag_name: str = DEFAULT_UA_PROF_TAG_NAME
    ua_prof_url: str | None = None
    timeout_millis: int = DEFAULT_HTTP_SOCKET_TIMEOUT_MS
    support_charset_header: bool = False
    extra_header_spec: str = ""
    macro_lookup: Callable[[str], str | None] = field(default=CarrierMacros().lookup, compare=False)

    def resolve_macro(self, name: str) -> str | None:
        return self.macro_lookup(name)

    @staticmethod
    def from_macros(macros: Mapping[str, str], **kwargs: object) -> "MmsConfigSnapshot":
        """Snapshot whose macro table is a plain mapping (tests, static carrier files)."""
        frozen = MappingProxyType(dict(macros))
        return MmsConfigSnapshot(macro_lookup=frozen.get, **kwargs)  # type: ignore[arg-type]

    @staticmethod
    def from_settings(settings: Settings) -> "MmsConfigSnapshot":
        macros = CarrierMacros(
            line1_number=settings.line1_number,
            country_calling_code=settings.country_calling_code,
            nai=settings.nai,
            nai_suffix=settings.nai_suffix,
            extra=MappingProxyType(dict(settings.extra_macros)),
        )
        return MmsConfigSnapshot(
            user_agent=settings.user_agent,
            ua_prof_tag_name=settings.ua_prof_tag_name,
            ua_prof_url=settings.ua_prof_url or None,
            timeout_millis=settings.http_socket_timeout_ms,
            support_charset_header=settings.support_http_charset_header,
            extra_header_spec=settings.http_params,
            macro_lookup=macros.lookup,
        )
