"""Tests for per-engine adapter construction."""

from __future__ import annotations

import pytest
from conftest import RecordingConstructor

from queueboard_api.domain.enums import EngineVersion
from queueboard_api.domain.models import ConnectionProfile
from queueboard_api.errors import AdapterConstructionError
from queueboard_api.queue.legacy import LegacyQueue
from queueboard_api.services.adapter_factory import (
    DEFAULT_CONSTRUCTORS,
    AdapterFactory,
    build_current_options,
    build_legacy_options,
)

PROFILE = ConnectionProfile(
    host="redis.internal",
    port=6380,
    db=2,
    password="s3cret",
    tls=True,
    prefix="jobs",
    connect_timeout_seconds=3.0,
)


def _factory(engine: EngineVersion) -> tuple[AdapterFactory, RecordingConstructor]:
    constructor = RecordingConstructor()
    return AdapterFactory(PROFILE, engine, constructors={engine: constructor}), constructor


class TestCurrentEngine:
    """BullMQ clients get connection parameters nested under 'connection'."""

    def test_options_are_nested(self) -> None:
        factory, constructor = _factory(EngineVersion.CURRENT)

        adapter = factory.create("emails")

        name, opts = constructor.calls[0]
        assert name == "emails"
        assert set(opts) == {"connection", "prefix"}
        assert opts["connection"] == {
            "host": "redis.internal",
            "port": 6380,
            "db": 2,
            "password": "s3cret",
            "ssl": True,
            "socket_connect_timeout": 3.0,
        }
        assert opts["prefix"] == "jobs"
        assert adapter.name == "emails"
        assert adapter.engine == EngineVersion.CURRENT
        assert adapter.queue is constructor.created["emails"]

    def test_optional_fields_are_omitted(self) -> None:
        profile = ConnectionProfile(host="localhost", port=6379)

        opts = build_current_options(profile)

        assert "prefix" not in opts
        assert "password" not in opts["connection"]


class TestLegacyEngine:
    """Bull v3 clients get flat connection parameters."""

    def test_options_are_flat(self) -> None:
        factory, constructor = _factory(EngineVersion.LEGACY)

        adapter = factory.create("reports")

        _, opts = constructor.calls[0]
        assert "connection" not in opts
        assert opts == {
            "host": "redis.internal",
            "port": 6380,
            "db": 2,
            "password": "s3cret",
            "tls": True,
            "connect_timeout": 3.0,
            "prefix": "jobs",
        }
        assert adapter.engine == EngineVersion.LEGACY

    def test_optional_fields_are_omitted(self) -> None:
        opts = build_legacy_options(ConnectionProfile())

        assert "prefix" not in opts
        assert "password" not in opts

    def test_default_constructor_builds_legacy_queue(self) -> None:
        factory = AdapterFactory(PROFILE, EngineVersion.LEGACY)

        adapter = factory.create("reports")

        assert isinstance(adapter.queue, LegacyQueue)
        assert adapter.queue.name == "reports"
        assert adapter.queue.prefix == "jobs"


def test_each_call_gets_fresh_options() -> None:
    factory, constructor = _factory(EngineVersion.CURRENT)

    factory.create("a")
    constructor.calls[0][1]["connection"]["host"] = "mutated"
    factory.create("b")

    assert constructor.calls[1][1]["connection"]["host"] == "redis.internal"


def test_constructor_failure_is_wrapped() -> None:
    constructor = RecordingConstructor(fail_for=["broken"])
    factory = AdapterFactory(
        PROFILE, EngineVersion.CURRENT, constructors={EngineVersion.CURRENT: constructor}
    )

    with pytest.raises(AdapterConstructionError) as exc_info:
        factory.create("broken")

    assert exc_info.value.queue_name == "broken"
    assert exc_info.value.details == {"queue": "broken"}
    assert "connection refused" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)


def test_every_engine_has_a_default_constructor() -> None:
    assert set(DEFAULT_CONSTRUCTORS) == set(EngineVersion)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("BULLMQ", EngineVersion.CURRENT),
        ("bullmq", EngineVersion.CURRENT),
        (" BULL ", EngineVersion.LEGACY),
        ("legacy", EngineVersion.LEGACY),
        ("current", EngineVersion.CURRENT),
    ],
)
def test_engine_version_parse(raw: str, expected: EngineVersion) -> None:
    assert EngineVersion.parse(raw) == expected


def test_engine_version_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown queue engine"):
        EngineVersion.parse("celery")
