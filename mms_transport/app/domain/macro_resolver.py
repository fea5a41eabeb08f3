"""Carrier header macros and the extra-header specification.

Carrier configuration ships extra request headers as ``"name:value|name:value"``.
Values may embed macros such as ``##LINE1##`` which are expanded per request from
the carrier's macro table. Unknown macros expand to the empty string with a
warning: carriers ship configurations referencing macros that are not
implemented everywhere, and that must not fail the transaction.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, Mapping, Union

from loguru import logger as _default_logger

if TYPE_CHECKING:
    from loguru import Logger

MacroLookup = Union[Callable[[str], "str | None"], Mapping[str, str]]

MACRO_PATTERN = re.compile(r"##(\S+?)##")
PARAM_SEPARATOR = "|"
KEY_VALUE_SEPARATOR = ":"


def _as_callable(lookup: "MacroLookup | None") -> Callable[[str], "str | None"]:
    if lookup is None:
        return lambda name: None
    if isinstance(lookup, Mapping):
        return lookup.get
    return lookup


def resolve_macros(value: str, lookup: "MacroLookup | None" = None, *, logger: "Logger | None" = None) -> str:
    """Expand every ``##NAME##`` token in value, left to right."""
    if not value:
        return value
    log = logger or _default_logger
    find = _as_callable(lookup)

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        resolved = find(name)
        if resolved is None:
            log.warning("HTTP: invalid macro {}", name)
            return ""
        return resolved

    return MACRO_PATTERN.sub(_substitute, value)


def parse_extra_headers(
    spec: str,
    lookup: "MacroLookup | None" = None,
    *,
    logger: "Logger | None" = None,
) -> list[tuple[str, str]]:
    """Parse the carrier extra-header spec into (name, value) pairs, macros resolved.

    Pairs without a ``:`` are ignored; pairs whose name or resolved value is empty
    are dropped.
    """
    headers: list[tuple[str, str]] = []
    if not spec:
        return headers
    for pair in spec.split(PARAM_SEPARATOR):
        if KEY_VALUE_SEPARATOR not in pair:
            continue
        raw_name, raw_value = pair.split(KEY_VALUE_SEPARATOR, 1)
        name = raw_name.strip()
        value = resolve_macros(raw_value.strip(), lookup, logger=logger)
        if name and value:
            headers.append((name, value))
    return headers
