"""Classify structures and convert eligible ones to high resolution."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from highres_converter.application.ports import (
    ConfirmationGate,
    ProgressObserver,
    ReportSink,
)
from highres_converter.application.results import (
    ClassificationResult,
    WorkflowOutcome,
)

__version__ = "0.1.0"


def classify_document(
    document_path: Path | None,
    *,
    exclude_id_markers: bool = False,
    unsupported_dicom_types: Iterable[str] | None = None,
) -> ClassificationResult:
    """Classify the structures of a structure-set document.

    Parameters
    ----------
    document_path : Path | None
        JSON structure-set document. ``None`` means no structure set is open.
    exclude_id_markers : bool, default=False
        Also skip structures whose id contains ``ETD`` or ``zOrig``.
    unsupported_dicom_types : Iterable[str] | None, default=None
        DICOM types that are never converted. Defaults to SUPPORT and MARKER.

    Returns
    -------
    ClassificationResult
        Eligible structures and skip reasons, in document order.
    """
    from .api import classify_document as _impl

    return _impl(
        document_path=document_path,
        exclude_id_markers=exclude_id_markers,
        unsupported_dicom_types=unsupported_dicom_types,
    )


def convert_document(
    document_path: Path | None,
    output_path: Path | None = None,
    *,
    exclude_id_markers: bool = False,
    unsupported_dicom_types: Iterable[str] | None = None,
    gate: ConfirmationGate | None = None,
    sink: ReportSink | None = None,
    progress: ProgressObserver | None = None,
) -> WorkflowOutcome:
    """Convert the eligible structures of a structure-set document.

    Parameters
    ----------
    document_path : Path | None
        JSON structure-set document. ``None`` means no structure set is open.
    output_path : Path | None, default=None
        Where to write the modified document. Defaults to ``document_path``.
    gate : ConfirmationGate | None, default=None
        Confirmation collaborator. When omitted the conversion is declined.
    sink : ReportSink | None, default=None
        Receives the finished report lines.
    progress : ProgressObserver | None, default=None
        Notified after every attempted structure.

    Returns
    -------
    WorkflowOutcome
        Status, classification and report of the run.
    """
    from .api import convert_document as _impl

    return _impl(
        document_path=document_path,
        output_path=output_path,
        exclude_id_markers=exclude_id_markers,
        unsupported_dicom_types=unsupported_dicom_types,
        gate=gate,
        sink=sink,
        progress=progress,
    )


__all__ = [
    "classify_document",
    "convert_document",
]
