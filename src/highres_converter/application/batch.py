"""Sequential best-effort batch conversion."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from highres_converter.application.classifier import read_structure
from highres_converter.application.ports import ProgressObserver, StructureConverter
from highres_converter.application.results import (
    BatchReport,
    ConversionRecord,
    ConversionStatus,
)
from highres_converter.errors import WorkflowAbortedError
from highres_converter.types import Structure

logger = logging.getLogger(__name__)


def _error_message(exc: Exception) -> str:
    message = str(exc).strip()
    return message or type(exc).__name__


def attempt_conversion(
    structure: Structure, converter: StructureConverter
) -> ConversionRecord:
    """Convert one structure and return its outcome instead of raising."""
    structure_id = read_structure(structure).id
    try:
        converter.convert_to_high_resolution(structure)
    except Exception as exc:
        message = _error_message(exc)
        logger.warning("Conversion of %s failed: %s", structure_id, message)
        return ConversionRecord(
            structure_id=structure_id,
            status=ConversionStatus.FAILED,
            error_message=message,
        )
    logger.debug("Converted %s", structure_id)
    return ConversionRecord(structure_id=structure_id, status=ConversionStatus.CONVERTED)


def convert_all(
    eligible: Sequence[Structure],
    converter: StructureConverter,
    skip_reasons: Sequence[str] = (),
    progress: ProgressObserver | None = None,
) -> BatchReport:
    """Attempt every eligible structure once, in order.

    A failing structure is recorded and the batch moves on; conversions that
    already succeeded are never rolled back.

    Parameters
    ----------
    eligible : Sequence[Structure]
        Structures to convert, in classification order.
    converter : StructureConverter
        Adapter performing the irreversible conversion.
    skip_reasons : Sequence[str], default=()
        Skip lines from classification, placed before the results.
    progress : ProgressObserver | None, default=None
        Optional observer notified after each attempt.

    Returns
    -------
    BatchReport
        Report with one record per eligible structure.

    Raises
    ------
    WorkflowAbortedError
        If anything outside the per-structure boundary fails. The error
        carries the report lines gathered so far.
    """
    total = len(eligible)
    records: list[ConversionRecord] = []
    logger.info("Converting %d structures to high resolution", total)
    try:
        if progress is not None:
            progress.started(total)
        for structure in eligible:
            record = attempt_conversion(structure, converter)
            records.append(record)
            if progress is not None:
                progress.advanced(record, len(records), total)
        report = BatchReport(skip_reasons=tuple(skip_reasons), records=tuple(records))
        if progress is not None:
            progress.finished(report)
    except Exception as exc:
        partial = BatchReport(skip_reasons=tuple(skip_reasons), records=tuple(records))
        pending = [
            f"{read_structure(structure).id}: Not attempted (batch aborted)"
            for structure in eligible[len(records):]
        ]
        raise WorkflowAbortedError(
            f"Batch conversion aborted after {len(records)}/{total} structures: "
            f"{_error_message(exc)}",
            [*partial.lines, *pending],
        ) from exc

    logger.info("%s", report.summary_line)
    return report
