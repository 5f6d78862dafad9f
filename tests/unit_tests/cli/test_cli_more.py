"""Additional unit tests for CLI helpers and presentation collaborators."""

from __future__ import annotations

import pytest

from highres_converter.application.ports import ConfirmationRequest
from highres_converter.application.results import ConversionRecord, ConversionStatus
from highres_converter.cli import cli as cli_module
from highres_converter.errors import DocumentError


def test_print_error_debug_path(capsys: pytest.CaptureFixture[str]) -> None:
    """Print traceback details in debug mode and return the error's exit code."""
    try:
        raise DocumentError("bad document")
    except DocumentError as exc:
        code = cli_module._print_error(exc, debug=True)
    captured = capsys.readouterr()
    assert code == DocumentError.exit_code
    assert "Traceback" in captured.err
    assert "bad document" in captured.err


def test_print_error_defaults_to_one(capsys: pytest.CaptureFixture[str]) -> None:
    """Errors without an exit code map to 1."""
    assert cli_module._print_error(RuntimeError("boom"), debug=False) == 1
    assert "RuntimeError" in capsys.readouterr().err


def test_prompt_gate_assume_yes(capsys: pytest.CaptureFixture[str]) -> None:
    """--yes answers the confirmation without prompting."""
    gate = cli_module.PromptConfirmationGate(assume_yes=True)
    assert gate.confirm(ConfirmationRequest(structure_ids=("E", "F"))) is True
    out = capsys.readouterr().out
    assert "2 structures will be converted to high resolution:" in out
    assert "cannot be undone" in out


def test_prompt_gate_asks_typer(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without --yes the answer comes from typer.confirm, defaulting to no."""
    seen: dict[str, object] = {}

    def fake_confirm(text: str, default: bool) -> bool:
        seen["text"] = text
        seen["default"] = default
        return False

    monkeypatch.setattr(cli_module.typer, "confirm", fake_confirm)
    gate = cli_module.PromptConfirmationGate()
    assert gate.confirm(ConfirmationRequest(structure_ids=("E",))) is False
    assert seen == {
        "text": "This operation cannot be undone. Proceed?",
        "default": False,
    }


def test_echo_sink_and_progress(capsys: pytest.CaptureFixture[str]) -> None:
    """Report lines and progress lines are echoed in order."""
    cli_module.EchoReportSink().publish("Conversion complete:", ["a", "b"])
    progress = cli_module.EchoProgressObserver()
    progress.started(1)
    progress.advanced(ConversionRecord("E", ConversionStatus.CONVERTED), 1, 1)
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Conversion complete:",
        "  a",
        "  b",
        "Converting structures to high resolution... 0/1",
        "[1/1] E: Successfully converted",
    ]
