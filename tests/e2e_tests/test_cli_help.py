"""End-to-end checks of the installed ``highres-convert`` entrypoint."""

from __future__ import annotations

import os
import subprocess

import highres_converter
from highres_converter.errors import StructureSetUnavailableError


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    env = {k: v for k, v in os.environ.items() if not k.startswith("HIGHRES_")}
    return subprocess.run(
        ["highres-convert", *args],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )


def test_package_exposes_version() -> None:
    assert highres_converter.__version__ == "0.1.0"


def test_cli_help_lists_commands() -> None:
    """The entrypoint describes itself and its three commands."""
    result = _run("--help")

    assert result.returncode == 0, result.stderr
    assert "high resolution" in result.stdout
    for command in ("classify", "convert", "doctor"):
        assert command in result.stdout


def test_cli_missing_document_is_a_usage_error() -> None:
    """A path that does not exist is rejected before any workflow runs."""
    result = _run("convert", "/tmp/definitely-missing-structure-set.json", "--yes")

    assert result.returncode == 2, result.stderr
    assert "does not exist" in result.stderr.lower()
    assert "Saved:" not in result.stdout


def test_cli_without_document_reports_no_structure_set() -> None:
    """Without a document the unavailable error and its exit code surface."""
    result = _run("convert", "--yes")

    assert result.returncode == StructureSetUnavailableError.exit_code
    assert "StructureSetUnavailableError" in result.stderr
    assert "No structure set loaded. Please open a structure set." in result.stderr
