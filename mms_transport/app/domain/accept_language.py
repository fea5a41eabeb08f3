"""Accept-Language header value for MMS requests: the current locale, then US English."""
from __future__ import annotations

import locale as _locale
import re

from mms_transport.app.constants import ACCEPT_LANG_FOR_US_LOCALE

_OBSOLETE_LANGUAGE_CODES = {
    "iw": "he",  # Hebrew
    "in": "id",  # Indonesian
    "ji": "yi",  # Yiddish
}

_LOCALE_SEPARATORS = re.compile(r"[-_]")
_SCRIPT = re.compile(r"[A-Za-z]{4}")
_REGION = re.compile(r"[A-Za-z]{2}|[0-9]{3}")
_POSIX_LOCALES = frozenset({"c", "posix"})


def _split_locale(locale: str) -> tuple[str, str]:
    # Drop encoding ("fr_FR.UTF-8") and modifier ("de_DE@euro") suffixes.
    base = locale.split(".", 1)[0].split("@", 1)[0].strip()
    subtags = _LOCALE_SEPARATORS.split(base)
    language = subtags[0].lower()
    rest = subtags[1:]
    if rest and _SCRIPT.fullmatch(rest[0]):
        rest = rest[1:]
    region = rest[0].upper() if rest and _REGION.fullmatch(rest[0]) else ""
    return language, region


def resolve_accept_language(locale: str) -> str:
    language, region = _split_locale(locale)
    language = _OBSOLETE_LANGUAGE_CODES.get(language, language)

    preferences: list[str] = []
    if language:
        preferences.append(f"{language}-{region}" if region else language)

    primary = preferences[0] if preferences else ""
    if primary != ACCEPT_LANG_FOR_US_LOCALE:
        preferences.append(ACCEPT_LANG_FOR_US_LOCALE)
    return ", ".join(preferences)


def current_locale() -> str:
    """Locale of the running process, e.g. "fr_FR"; "en_US" for the C/POSIX locale."""
    name = _locale.getlocale()[0]
    if not name or name.lower() in _POSIX_LOCALES:
        return "en_US"
    return name
