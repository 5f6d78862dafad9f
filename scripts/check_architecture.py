#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/highres_converter"

# Layer -> import prefixes it must never reach.
BANNED_IMPORTS: dict[str, tuple[str, ...]] = {
    "application": (
        "typer",
        "fastapi",
        "uvicorn",
        "highres_converter.adapters",
        "highres_converter.cli",
        "highres_converter.service",
    ),
    "adapters": (
        "typer",
        "fastapi",
        "highres_converter.cli",
        "highres_converter.service",
    ),
    "cli": ("fastapi", "uvicorn", "highres_converter.service"),
}


def _imported_modules(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            modules.append(node.module)
    return modules


def find_violations(package: Path = PACKAGE) -> list[str]:
    """Return one message per import that crosses a layer boundary."""
    violations: list[str] = []
    for layer, banned in BANNED_IMPORTS.items():
        for path in sorted((package / layer).glob("*.py")):
            for module in _imported_modules(path):
                if any(
                    module == prefix or module.startswith(f"{prefix}.")
                    for prefix in banned
                ):
                    violations.append(f"{path.relative_to(package)}: imports '{module}'")
    return violations


def main() -> None:
    """Run repository architecture boundary checks."""
    violations = find_violations()
    if violations:
        raise SystemExit(
            "Architecture violations:\n" + "\n".join(f"- {v}" for v in violations)
        )
    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
