"""MMS HTTP transport: one synchronous POST (send) or GET (download) against an MMSC.

Inputs are validated before anything touches the network. Exactly one network
attempt is made per call; retry, backoff and fallback-proxy policy belong to the
caller, which branches on the returned TransportError.kind.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable, Iterable

import httpx
from loguru import logger as _default_logger

from mms_transport.app.constants import HEADER, HTTP_METHOD, SUPPORTED_METHODS, SUPPORTED_SCHEMES
from mms_transport.app.core import SERVICE_NAME
from mms_transport.app.domain.accept_language import current_locale
from mms_transport.app.domain.errors import TransportError, TransportResult
from mms_transport.app.domain.models import MmsRequest, ProxyAddress, RequestDescriptor
from mms_transport.app.domain.request_builder import assemble_request
from mms_transport.app.infrastructure.http.connection_factory import ConnectionFactory
from mms_transport.app.ports.config_provider import ConfigProvider

if TYPE_CHECKING:
    from loguru import Logger

MAX_PORT = 65535
MAX_HOST_LENGTH = 253
MAX_LABEL_LENGTH = 63

# RFC 7230 token.
_HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_FORBIDDEN_VALUE_CHARS = frozenset("\r\n\0")


class TransportExecutor:
    """Executes MMS HTTP transactions over clients built by a ConnectionFactory.

    Holds no per-call state; one instance may serve concurrent calls from many
    threads. Diagnostics go to the injected loguru logger.
    """

    def __init__(
        self,
        connection_factory: ConnectionFactory,
        *,
        locale_provider: Callable[[], str] = current_locale,
        logger: "Logger | None" = None,
    ) -> None:
        self._connection_factory = connection_factory
        self._locale_provider = locale_provider
        self._logger = logger or _default_logger

    def execute(
        self,
        url: str,
        payload: bytes | None,
        method: str,
        proxy: ProxyAddress | None,
        config: ConfigProvider,
        *,
        locale: str | None = None,
    ) -> TransportResult:
        """Send payload (POST) or download (GET) url; return the response body or a typed error."""
        self._log(
            "mms_http_request",
            method=method,
            url=url,
            proxy=str(proxy) if proxy else None,
            pdu_size=len(payload) if payload else 0,
        )
        error = self._validate_input(method, payload, proxy, config)
        if error is not None:
            return self._fail(error)

        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            return self._fail(TransportError.invalid_url(url, exc))
        if not parsed.scheme:
            return self._fail(TransportError.invalid_url(url))
        if parsed.scheme not in SUPPORTED_SCHEMES:
            return self._fail(TransportError.protocol_mismatch(url))
        if not parsed.host or not _is_valid_host(parsed.host):
            return self._fail(TransportError.invalid_url(url))

        descriptor = RequestDescriptor(method=method, url=url, config=config, payload=payload, proxy=proxy)
        request = assemble_request(
            descriptor,
            locale=locale or self._locale_provider(),
            logger=self._logger,
        )
        error = _validate_headers(request.headers)
        if error is not None:
            return self._fail(error)
        try:
            headers = httpx.Headers(list(request.headers))
        except UnicodeEncodeError as exc:
            return self._fail(TransportError.invalid_input(f"Header value is not ASCII: {exc}"))
        self._logger.info("HTTP: User-Agent={}", request.header(HEADER.USER_AGENT))
        self._log_headers(request.headers)

        try:
            return self._send(parsed.scheme, descriptor, request, headers)
        except httpx.HTTPError as exc:
            return self._fail(TransportError.network_io(exc))

    def _send(
        self,
        scheme: str,
        descriptor: RequestDescriptor,
        request: MmsRequest,
        headers: httpx.Headers,
    ) -> TransportResult:
        with self._connection_factory.build(scheme, descriptor.proxy, descriptor.config.timeout_millis) as client:
            http_request = client.build_request(
                request.method,
                request.url,
                headers=headers,
                content=request.content,
            )
            response = client.send(http_request, stream=True)
            try:
                status_code = response.status_code
                reason = response.reason_phrase
                self._logger.debug("HTTP: {} {}", status_code, reason)
                if not response.is_success:
                    return self._fail(TransportError.http_status(status_code, reason, response.headers.multi_items()))

                self._log_headers(response.headers.multi_items())
                body = response.read()
                self._logger.debug("HTTP: response size={}", len(body))
                self._log("mms_http_completed", status_code=status_code, size=len(body))
                return TransportResult.success(body)
            finally:
                response.close()

    @staticmethod
    def _validate_input(
        method: str,
        payload: bytes | None,
        proxy: ProxyAddress | None,
        config: ConfigProvider,
    ) -> TransportError | None:
        if method not in SUPPORTED_METHODS:
            return TransportError.invalid_input(f"Invalid method {method}")
        if method == HTTP_METHOD.POST and not payload:
            return TransportError.invalid_input("Sending empty PDU")
        if proxy is not None and not 0 < proxy.port <= MAX_PORT:
            return TransportError.invalid_input(f"Invalid proxy port {proxy.port}")
        if proxy is not None and not proxy.host.strip():
            return TransportError.invalid_input("Missing proxy host")
        if config.timeout_millis <= 0:
            return TransportError.invalid_input(f"Invalid timeout {config.timeout_millis}ms")
        return None

    def _fail(self, error: TransportError) -> TransportResult:
        self._log(
            "mms_http_failed",
            level="WARNING",
            kind=error.kind.value,
            status_code=error.status_code,
            error=error.message,
        )
        return TransportResult.failure(error)

    def _log_headers(self, headers: Iterable[tuple[str, str]]) -> None:
        lines = "".join(f"{name}={value}\n" for name, value in headers)
        self._logger.trace("HTTP: headers\n{}", lines)

    def _log(self, event: str, *, level: str = "INFO", **kwargs: Any) -> None:
        self._logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).log(level, event)


def _is_valid_host(host: str) -> bool:
    if ":" in host:
        # IPv6 literal; httpx has already validated it.
        return True
    if len(host.rstrip(".")) > MAX_HOST_LENGTH:
        return False
    labels = host.rstrip(".").split(".")
    return all(0 < len(label) <= MAX_LABEL_LENGTH for label in labels)


def _validate_headers(headers: Iterable[tuple[str, str]]) -> TransportError | None:
    for name, value in headers:
        if not _HEADER_NAME.fullmatch(name):
            return TransportError.invalid_input(f"Invalid header name {name!r}")
        if _FORBIDDEN_VALUE_CHARS.intersection(value):
            return TransportError.invalid_input(f"Invalid character in {name} header value")
    return None
