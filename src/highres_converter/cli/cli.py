#!/usr/bin/env python3
"""
highres_converter.cli.cli

Typer-based CLI for converting the structures of a structure-set document to
high resolution.

Examples
--------
Preview which structures would be converted:

    highres-convert classify structures.json

Convert after an interactive confirmation:

    highres-convert convert structures.json

Convert without prompting and write the result elsewhere:

    highres-convert convert structures.json --yes --output converted.json
"""

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Sequence
from pathlib import Path

import typer

from highres_converter.application.ports import ConfirmationRequest
from highres_converter.application.results import (
    BatchReport,
    ConversionRecord,
    WorkflowStatus,
)
from highres_converter.errors import WorkflowAbortedError

app = typer.Typer(
    name="highres-convert",
    help="Convert eligible structures of a structure set to high resolution.",
    no_args_is_help=True,
)

DOCUMENT_HELP = "Structure-set JSON document. Omit when no structure set is open."
EXCLUDE_ID_MARKERS_HELP = "Also skip structures whose id contains ETD or zOrig."
UNSUPPORTED_TYPE_HELP = "DICOM type that is never converted (repeatable)."


# -----------------------------
# Presentation collaborators
# -----------------------------
class PromptConfirmationGate:
    """Ask on the terminal unless the user already agreed with ``--yes``."""

    def __init__(self, assume_yes: bool = False) -> None:
        self.assume_yes = assume_yes

    def confirm(self, request: ConfirmationRequest) -> bool:
        typer.echo(request.message.removesuffix(request.warning).rstrip())
        typer.echo("")
        if self.assume_yes:
            typer.echo(f"{request.warning} yes (--yes)")
            return True
        return typer.confirm(request.warning, default=False)


class EchoReportSink:
    """Print the report lines under their title."""

    def publish(self, title: str, lines: Sequence[str]) -> None:
        typer.echo(title)
        for line in lines:
            typer.echo(f"  {line}")


class EchoProgressObserver:
    """Print one progress line per attempted structure.

    The counter counts attempts, so failures advance it too.
    """

    def started(self, total: int) -> None:
        typer.echo(f"Converting structures to high resolution... 0/{total}")

    def advanced(self, record: ConversionRecord, completed: int, total: int) -> None:
        typer.echo(f"[{completed}/{total}] {record.line}")

    def finished(self, report: BatchReport) -> None:
        typer.echo("")


# -----------------------------
# Utilities
# -----------------------------
def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly workflow error.

    Parameters
    ----------
    exc : Exception
        Exception raised by the workflow.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    if isinstance(exc, WorkflowAbortedError) and exc.partial_report:
        typer.echo("Partial report:", err=True)
        for line in exc.partial_report:
            typer.echo(f"  {line}", err=True)
    typer.echo(f"[red]✗ {type(exc).__name__}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to log classification and conversion details.
    """
    _configure_logging(verbose)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("classify")
def classify_cmd(
    ctx: typer.Context,
    document: Path | None = typer.Argument(
        None,
        envvar="HIGHRES_DOCUMENT",
        exists=True,
        dir_okay=False,
        readable=True,
        help=DOCUMENT_HELP,
    ),
    exclude_id_markers: bool = typer.Option(
        False,
        "--exclude-id-markers",
        envvar="HIGHRES_EXCLUDE_ID_MARKERS",
        help=EXCLUDE_ID_MARKERS_HELP,
    ),
    unsupported_types: list[str] | None = typer.Option(
        None, "--unsupported-type", help=UNSUPPORTED_TYPE_HELP
    ),
) -> None:
    """Show which structures would be converted, without changing anything."""
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from highres_converter.api import classify_document

        result = classify_document(
            document_path=document,
            exclude_id_markers=exclude_id_markers,
            unsupported_dicom_types=unsupported_types or None,
        )
    except Exception as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    eligible_ids = result.eligible_ids
    typer.echo(f"{len(eligible_ids)} structures would be converted:")
    for structure_id in eligible_ids:
        typer.echo(f"  {structure_id}")
    if result.skip_reasons:
        typer.echo(f"{len(result.skip_reasons)} structures skipped:")
        for line in result.skip_reasons:
            typer.echo(f"  {line}")


@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    document: Path | None = typer.Argument(
        None,
        envvar="HIGHRES_DOCUMENT",
        exists=True,
        dir_okay=False,
        readable=True,
        help=DOCUMENT_HELP,
    ),
    output_path: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        help="Where to write the modified structure set (default: in place).",
    ),
    assume_yes: bool = typer.Option(
        False, "--yes", "-y", help="Do not ask for confirmation."
    ),
    exclude_id_markers: bool = typer.Option(
        False,
        "--exclude-id-markers",
        envvar="HIGHRES_EXCLUDE_ID_MARKERS",
        help=EXCLUDE_ID_MARKERS_HELP,
    ),
    unsupported_types: list[str] | None = typer.Option(
        None, "--unsupported-type", help=UNSUPPORTED_TYPE_HELP
    ),
) -> None:
    """Convert eligible structures to high resolution.

    Notes
    -----
    - Conversion cannot be undone. Structures converted before a failure stay
      converted.
    - A structure that fails to convert is reported and the batch continues.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from highres_converter.api import convert_document

        outcome = convert_document(
            document_path=document,
            output_path=output_path,
            exclude_id_markers=exclude_id_markers,
            unsupported_dicom_types=unsupported_types or None,
            gate=PromptConfirmationGate(assume_yes=assume_yes),
            sink=EchoReportSink(),
            progress=EchoProgressObserver(),
        )
    except Exception as exc:
        # HighResError subclasses carry their own exit code.
        raise typer.Exit(code=_print_error(exc, debug))

    if outcome.status is WorkflowStatus.CANCELLED:
        typer.echo("Conversion cancelled. No structures were modified.")
        return
    if outcome.status is WorkflowStatus.COMPLETED:
        typer.echo(f"[green]✓ Saved:[/green] {output_path or document}")
        if outcome.report is not None and outcome.report.failed:
            raise typer.Exit(code=1)


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed dependency versions."""
    import importlib.metadata as metadata

    modules = ["pydantic", "typer", "fastapi", "uvicorn"]

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in modules:
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")


if __name__ == "__main__":
    app()
