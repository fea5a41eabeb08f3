"""Unit tests for ConnectionFactory client configuration."""
from __future__ import annotations

import ssl

import pytest

from mms_transport.app.domain.models import ProxyAddress
from mms_transport.app.infrastructure.http.connection_factory import ConnectionFactory
from mms_transport.app.infrastructure.http.connection_pool import HttpcoreConnectionPool
from tests.fakes import FakeHostResolver, StubConnectionPool


def test_http_client_does_not_follow_redirects_and_has_no_tls(stub_pool, fake_resolver):
    client = ConnectionFactory(stub_pool, fake_resolver).build("http", None, 30_000)

    assert client.follow_redirects is False
    assert stub_pool.acquisitions[0]["ssl_context"] is None


def test_https_client_uses_default_verification(stub_pool, fake_resolver):
    client = ConnectionFactory(stub_pool, fake_resolver).build("https", None, 30_000)

    context = stub_pool.acquisitions[0]["ssl_context"]
    assert client.follow_redirects is True
    assert isinstance(context, ssl.SSLContext)
    assert context.verify_mode == ssl.CERT_REQUIRED
    assert context.check_hostname is True


def test_single_timeout_applies_to_every_phase(stub_pool, fake_resolver):
    client = ConnectionFactory(stub_pool, fake_resolver).build("http", None, 2_500)

    assert client.timeout.connect == 2.5
    assert client.timeout.read == 2.5
    assert client.timeout.write == 2.5
    assert client.timeout.pool == 2.5


def test_client_ignores_environment_and_auth(stub_pool, fake_resolver, monkeypatch):
    monkeypatch.setenv("HTTP_PROXY", "http://env-proxy.example:3128")
    client = ConnectionFactory(stub_pool, fake_resolver).build("http", None, 1_000)

    assert client.trust_env is False
    assert client.auth is None


def test_proxy_and_resolver_forwarded_to_pool(stub_pool):
    resolver = FakeHostResolver()
    proxy = ProxyAddress("10.0.0.172", 80)

    ConnectionFactory(stub_pool, resolver).build("https", proxy, 1_000)

    assert stub_pool.acquisitions[0]["proxy"] is proxy
    assert stub_pool.acquisitions[0]["resolver"] is resolver


@pytest.mark.parametrize("scheme", ["ftp", "ws", ""])
def test_unsupported_scheme_is_a_contract_violation(stub_pool, fake_resolver, scheme):
    with pytest.raises(ValueError, match="unrecognized protocol"):
        ConnectionFactory(stub_pool, fake_resolver).build(scheme, None, 1_000)
    assert stub_pool.acquisitions == []


def test_closing_client_keeps_shared_pool_open(fake_resolver):
    pool = HttpcoreConnectionPool()
    factory = ConnectionFactory(pool, fake_resolver)

    with factory.build("http", None, 1_000):
        pass
    with factory.build("http", None, 1_000):
        pass

    assert pool.route_count == 1
    pool.close()
    assert pool.route_count == 0
