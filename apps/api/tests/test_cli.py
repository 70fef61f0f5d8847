"""Tests for the queueboard CLI."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from queueboard_api import cli


def test_reset_requires_confirmation(capsys: pytest.CaptureFixture[str]) -> None:
    with patch.object(cli, "configure_logging"), patch.object(cli, "bind_queue_context"):
        assert cli.main(["reset"]) == 2

    assert "--yes" in capsys.readouterr().err


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_serve_passes_overrides_to_uvicorn() -> None:
    with (
        patch.object(cli, "configure_logging"),
        patch.object(cli, "bind_queue_context"),
        patch("uvicorn.run") as run,
    ):
        assert cli.main(["serve", "--port", "4567"]) == 0

    assert run.call_args.kwargs["port"] == 4567
    assert run.call_args.args == ("queueboard_api.main:app",)
