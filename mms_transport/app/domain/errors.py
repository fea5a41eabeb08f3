"""Transport error taxonomy and the tagged result returned by the executor.

Callers branch on ``TransportError.kind`` to pick a retry policy, so every
failure is reported as exactly one of the kinds below. ``status_code`` is a real
HTTP status only for ``HTTP_STATUS``; every other kind reports 0.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Union

from mms_transport.app.constants import NO_HTTP_STATUS

HeaderItems = Union[Mapping[str, str], Iterable[tuple[str, str]]]


class TransportErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    INVALID_URL = "invalid_url"
    PROTOCOL_MISMATCH = "protocol_mismatch"
    NETWORK_IO = "network_io"
    HTTP_STATUS = "http_status"


class TransportError(Exception):
    """A failed MMS HTTP transaction."""

    def __init__(
        self,
        kind: TransportErrorKind,
        message: str,
        *,
        status_code: int = NO_HTTP_STATUS,
        cause: BaseException | None = None,
        headers: HeaderItems | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.cause = cause
        # Response headers as received, repeated names kept in order.
        self.headers: tuple[tuple[str, str], ...] = _header_items(headers)
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def invalid_input(cls, message: str) -> "TransportError":
        return cls(TransportErrorKind.INVALID_INPUT, message)

    @classmethod
    def invalid_url(cls, url: str, cause: BaseException | None = None) -> "TransportError":
        return cls(TransportErrorKind.INVALID_URL, f"Invalid URL {url}", cause=cause)

    @classmethod
    def protocol_mismatch(cls, url: str) -> "TransportError":
        return cls(TransportErrorKind.PROTOCOL_MISMATCH, f"Invalid URL protocol {url}")

    @classmethod
    def network_io(cls, cause: BaseException) -> "TransportError":
        return cls(TransportErrorKind.NETWORK_IO, f"IO failure: {cause}", cause=cause)

    @classmethod
    def http_status(
        cls,
        status_code: int,
        message: str,
        headers: HeaderItems | None = None,
    ) -> "TransportError":
        return cls(TransportErrorKind.HTTP_STATUS, message, status_code=status_code, headers=headers)

    def header_values(self, name: str) -> list[str]:
        """Every value of a response header, case-insensitive; empty when absent."""
        wanted = name.lower()
        return [value for key, value in self.headers if key.lower() == wanted]

    @property
    def is_http_status(self) -> bool:
        return self.kind is TransportErrorKind.HTTP_STATUS

    def __repr__(self) -> str:
        return f"TransportError(kind={self.kind.value}, status_code={self.status_code}, message={self.message!r})"


def _header_items(headers: "HeaderItems | None") -> tuple[tuple[str, str], ...]:
    if not headers:
        return ()
    if hasattr(headers, "multi_items"):
        headers = headers.multi_items()
    elif isinstance(headers, Mapping):
        headers = headers.items()
    return tuple((str(k), str(v)) for k, v in headers)


@dataclass(frozen=True)
class TransportResult:
    """Outcome of one execute call: a body (possibly None) or an error, never both."""

    body: bytes | None = None
    error: TransportError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.body is not None:
            raise ValueError("TransportResult cannot carry both a body and an error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @staticmethod
    def success(body: bytes | None) -> "TransportResult":
        return TransportResult(body=body or None)

    @staticmethod
    def failure(error: TransportError) -> "TransportResult":
        return TransportResult(error=error)

    def unwrap(self) -> bytes | None:
        """Return the body, raising the TransportError for failed transactions."""
        if self.error is not None:
            raise self.error
        return self.body
