from __future__ import annotations

from typing import Any

import pytest
from loguru import logger

from mms_transport.app.application.transport_executor import TransportExecutor
from mms_transport.app.domain.config_snapshot import MmsConfigSnapshot
from mms_transport.app.infrastructure.http.connection_factory import ConnectionFactory
from tests.fakes import FakeHostResolver, StubConnectionPool


@pytest.fixture()
def stub_pool() -> StubConnectionPool:
    return StubConnectionPool()


@pytest.fixture()
def fake_resolver() -> FakeHostResolver:
    return FakeHostResolver()


@pytest.fixture()
def executor(stub_pool: StubConnectionPool, fake_resolver: FakeHostResolver) -> TransportExecutor:
    factory = ConnectionFactory(stub_pool, fake_resolver)
    return TransportExecutor(factory, locale_provider=lambda: "en_US")


@pytest.fixture()
def config() -> MmsConfigSnapshot:
    return MmsConfigSnapshot(user_agent="TestMms/1.0", timeout_millis=5_000)


@pytest.fixture()
def log_records():
    """Loguru records emitted during the test (every level)."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE")
    yield records
    logger.remove(handler_id)
