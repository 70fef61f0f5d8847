"""Tests for structured logging configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from queueboard_api.config import Settings
from queueboard_api.domain.enums import EngineVersion
from queueboard_api.observability.logging import bind_queue_context, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
    root.handlers[:] = handlers
    root.setLevel(level)


def _last_json_line(out: str) -> dict:
    return json.loads(out.strip().splitlines()[-1])


def test_stdlib_records_carry_queue_context(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(Settings(debug=False, log_level="INFO"))
    bind_queue_context(prefix="jobs", engine=EngineVersion.LEGACY)

    logging.getLogger("queueboard_api.services.discovery").info("Skipping queue %s", "emails")

    record = _last_json_line(capsys.readouterr().out)
    assert record["event"] == "Skipping queue emails"
    assert record["level"] == "info"
    assert record["logger"] == "queueboard_api.services.discovery"
    assert record["prefix"] == "jobs"
    assert record["engine"] == "BULL"


def test_log_level_filters_records(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(Settings(debug=False, log_level="WARNING"))

    logging.getLogger("queueboard_api.test").info("hidden")
    logging.getLogger("queueboard_api.test").warning("shown")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert _last_json_line(out)["event"] == "shown"
