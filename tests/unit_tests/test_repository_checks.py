"""Unit tests for repository guard scripts."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest

SCRIPTS = Path(__file__).resolve().parents[2] / "scripts"


def _load(name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(name, SCRIPTS / f"{name}.py")
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_architecture_boundaries_hold(capsys: pytest.CaptureFixture[str]) -> None:
    """The application layer stays free of transport and adapter imports."""
    module = _load("check_architecture")
    assert module.find_violations() == []
    module.main()
    assert "passed" in capsys.readouterr().out


def test_architecture_check_flags_banned_import(tmp_path: Path) -> None:
    """A typer import inside the application layer is reported."""
    module = _load("check_architecture")
    (tmp_path / "application").mkdir()
    (tmp_path / "application" / "bad.py").write_text("import typer\n", encoding="utf-8")
    assert module.find_violations(tmp_path) == ["application/bad.py: imports 'typer'"]


def test_orchestrators_stay_small() -> None:
    """Use-case, batch and classifier functions stay under the threshold."""
    module = _load("check_orchestrator_complexity")
    assert module.find_violations() == []
