"""Request builder: turns a RequestDescriptor into an immutable MmsRequest.

Header order is fixed so identical inputs always produce identical requests.
Carrier extra headers go last and replace any earlier header with the same name.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from mms_transport.app.constants import (
    HEADER,
    HEADER_VALUE_ACCEPT,
    HEADER_VALUE_CONTENT_TYPE_WITH_CHARSET,
    HEADER_VALUE_CONTENT_TYPE_WITHOUT_CHARSET,
    HTTP_METHOD,
)
from mms_transport.app.domain.accept_language import resolve_accept_language
from mms_transport.app.domain.macro_resolver import parse_extra_headers
from mms_transport.app.domain.models import MmsRequest, RequestDescriptor

if TYPE_CHECKING:
    from loguru import Logger


def _override(headers: list[tuple[str, str]], name: str, value: str) -> list[tuple[str, str]]:
    lowered = name.lower()
    kept = [(key, existing) for key, existing in headers if key.lower() != lowered]
    kept.append((name, value))
    return kept


def assemble_request(
    descriptor: RequestDescriptor,
    *,
    locale: str,
    logger: "Logger | None" = None,
) -> MmsRequest:
    config = descriptor.config
    headers: list[tuple[str, str]] = [
        (HEADER.ACCEPT, HEADER_VALUE_ACCEPT),
        (HEADER.ACCEPT_LANGUAGE, resolve_accept_language(locale)),
        (HEADER.USER_AGENT, config.user_agent),
    ]
    if config.ua_prof_url:
        headers.append((config.ua_prof_tag_name, config.ua_prof_url))

    content: bytes | None = None
    if descriptor.method == HTTP_METHOD.POST:
        content_type = (
            HEADER_VALUE_CONTENT_TYPE_WITH_CHARSET
            if config.support_charset_header
            else HEADER_VALUE_CONTENT_TYPE_WITHOUT_CHARSET
        )
        headers.append((HEADER.CONTENT_TYPE, content_type))
        content = descriptor.payload

    for name, value in parse_extra_headers(config.extra_header_spec, config.resolve_macro, logger=logger):
        headers = _override(headers, name, value)

    return MmsRequest(
        method=descriptor.method,
        url=descriptor.url,
        headers=tuple(headers),
        content=content,
    )
