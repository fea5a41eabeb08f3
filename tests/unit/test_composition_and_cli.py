"""Unit tests for the composition root lifecycle and the CLI entry point."""
from __future__ import annotations

import httpx
import pytest

from mms_transport.app import main as cli
from mms_transport.app.composition import TransportDependencies
from mms_transport.app.config.settings import Settings
from mms_transport.app.domain.models import ProxyAddress
from mms_transport.app.infrastructure.http.connection_factory import ConnectionFactory
from tests.fakes import FakeHostResolver, StubConnectionPool
from tests.test_data import RETRIEVE_CONF_PDU, SEND_CONF_PDU, SEND_REQ_PDU


def test_dependencies_require_open():
    deps = TransportDependencies(settings=Settings(_env_file=None))

    with pytest.raises(RuntimeError, match="executor is not initialized"):
        _ = deps.executor


def test_dependencies_open_and_close():
    deps = TransportDependencies(settings=Settings(_env_file=None))

    with deps:
        assert deps.executor is not None
        assert deps.connection_pool is not None

    with pytest.raises(RuntimeError):
        _ = deps.connection_pool


def test_proxy_follows_enabled_flag():
    disabled = TransportDependencies(settings=Settings(_env_file=None, proxy_host="10.0.0.172", proxy_port=80))
    enabled = TransportDependencies(
        settings=Settings(_env_file=None, proxy_enabled=True, proxy_host="10.0.0.172", proxy_port=80)
    )

    assert disabled.proxy() is None
    assert enabled.proxy() == ProxyAddress("10.0.0.172", 80)


def test_close_logs_pool_failure_and_continues(log_records):
    class BrokenPool(StubConnectionPool):
        def close(self) -> None:
            raise OSError("socket already gone")

    deps = TransportDependencies(settings=Settings(_env_file=None))
    deps.open()
    deps._connection_pool = BrokenPool()

    deps.close()

    assert any("connection pool close failed" in r["message"] for r in log_records)


@pytest.fixture()
def stubbed_dependencies(monkeypatch):
    pool = StubConnectionPool()

    def create(settings=None):
        deps = TransportDependencies(settings=settings or Settings(_env_file=None))

        def open_with_stub() -> None:
            deps._connection_pool = pool
            from mms_transport.app.application.transport_executor import TransportExecutor

            deps._executor = TransportExecutor(
                ConnectionFactory(pool, FakeHostResolver()),
                locale_provider=lambda: "en_US",
            )

        deps.open = open_with_stub  # type: ignore[method-assign]
        return deps

    monkeypatch.setattr(cli, "create_transport_dependencies", create)
    return pool


def test_cli_post_writes_response(stubbed_dependencies, tmp_path):
    stubbed_dependencies.respond_with(lambda request: httpx.Response(200, content=SEND_CONF_PDU))
    pdu = tmp_path / "send.pdu"
    pdu.write_bytes(SEND_REQ_PDU)
    output = tmp_path / "conf.pdu"

    code = cli.run(["post", "http://mmsc.example.net/mms", str(pdu), "--output", str(output)])

    assert code == 0
    assert output.read_bytes() == SEND_CONF_PDU
    assert stubbed_dependencies.requests[0].content == SEND_REQ_PDU


def test_cli_get_writes_response(stubbed_dependencies, tmp_path):
    stubbed_dependencies.respond_with(lambda request: httpx.Response(200, content=RETRIEVE_CONF_PDU))
    output = tmp_path / "retrieve.pdu"

    code = cli.run(["get", "http://mmsc.example.net/retrieve?id=1", "--output", str(output)])

    assert code == 0
    assert output.read_bytes() == RETRIEVE_CONF_PDU
    assert stubbed_dependencies.requests[0].method == "GET"


def test_cli_reports_failure_exit_code(stubbed_dependencies, tmp_path):
    stubbed_dependencies.respond_with(lambda request: httpx.Response(404))

    code = cli.run(["get", "http://mmsc.example.net/retrieve?id=1", "--output", str(tmp_path / "out")])

    assert code == 1
    assert not (tmp_path / "out").exists()
