"""Transport-level constants shared across modules."""
from __future__ import annotations


class HTTP_METHOD:
    GET = "GET"
    POST = "POST"


SUPPORTED_METHODS = frozenset({HTTP_METHOD.GET, HTTP_METHOD.POST})
SUPPORTED_SCHEMES = frozenset({"http", "https"})


class HEADER:
    ACCEPT = "Accept"
    ACCEPT_LANGUAGE = "Accept-Language"
    CONTENT_TYPE = "Content-Type"
    USER_AGENT = "User-Agent"


HEADER_VALUE_ACCEPT = "*/*, application/vnd.wap.mms-message, application/vnd.wap.sic"
HEADER_VALUE_CONTENT_TYPE_WITH_CHARSET = "application/vnd.wap.mms-message; charset=utf-8"
HEADER_VALUE_CONTENT_TYPE_WITHOUT_CHARSET = "application/vnd.wap.mms-message"

ACCEPT_LANG_FOR_US_LOCALE = "en-US"

# Status code reported for failures that never produced an HTTP response.
NO_HTTP_STATUS = 0

DEFAULT_USER_AGENT = "Android-Mms/2.0"
DEFAULT_UA_PROF_TAG_NAME = "x-wap-profile"
DEFAULT_HTTP_SOCKET_TIMEOUT_MS = 60_000
