#!/usr/bin/env python3
"""Simple complexity guard for application orchestrators."""

from __future__ import annotations

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
TARGETS = (
    ROOT / "src/highres_converter/application/use_cases.py",
    ROOT / "src/highres_converter/application/batch.py",
    ROOT / "src/highres_converter/application/classifier.py",
)
MAX_STATEMENTS = 25


def find_violations(targets: tuple[Path, ...] = TARGETS) -> list[str]:
    """Return top-level functions whose body exceeds the statement threshold."""
    violations: list[str] = []
    for target in targets:
        tree = ast.parse(target.read_text(encoding="utf-8"))
        for node in tree.body:
            if isinstance(node, ast.FunctionDef):
                stmt_count = sum(
                    1 for child in ast.walk(node) if isinstance(child, ast.stmt)
                ) - 1
                if stmt_count > MAX_STATEMENTS:
                    violations.append(
                        f"{target.name}:{node.name}: {stmt_count} statements"
                    )
    return violations


def main() -> None:
    """Fail when orchestrator functions exceed the statement threshold."""
    violations = find_violations()
    if violations:
        raise SystemExit(
            "Use-case complexity threshold exceeded:\n"
            + "\n".join(f"- {v}" for v in violations)
        )
    print("Orchestrator complexity check passed.")


if __name__ == "__main__":
    main()
