"""Public document-based API (delegates to application use-cases)."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from highres_converter.adapters.json_document import (
    DocumentStructureConverter,
    DocumentStructureSource,
    load_document,
    save_document,
)
from highres_converter.adapters.presentation import (
    CollectingReportSink,
    FixedAnswerGate,
)
from highres_converter.application.ports import (
    ConfirmationGate,
    ProgressObserver,
    ReportSink,
)
from highres_converter.application.results import (
    ClassificationResult,
    WorkflowOutcome,
    WorkflowStatus,
)
from highres_converter.application.use_cases import (
    build_classification_policy,
    classify_structure_set,
    run_highres_conversion,
)
from highres_converter.errors import WorkflowAbortedError

logger = logging.getLogger(__name__)


def classify_document(
    document_path: Path | None,
    exclude_id_markers: bool = False,
    unsupported_dicom_types: Iterable[str] | None = None,
) -> ClassificationResult:
    """Classify the structures of a document without modifying it."""
    policy = build_classification_policy(
        exclude_id_markers=exclude_id_markers,
        unsupported_dicom_types=unsupported_dicom_types,
    )
    document = load_document(document_path) if document_path is not None else None
    return classify_structure_set(DocumentStructureSource(document), policy)


def convert_document(
    document_path: Path | None,
    output_path: Path | None = None,
    exclude_id_markers: bool = False,
    unsupported_dicom_types: Iterable[str] | None = None,
    gate: ConfirmationGate | None = None,
    sink: ReportSink | None = None,
    progress: ProgressObserver | None = None,
) -> WorkflowOutcome:
    """Convert eligible structures of a document and write it back.

    Without a ``gate`` every confirmation is declined, so nothing changes.
    The document is written to ``output_path`` (default: in place) whenever
    a batch ran, including one that aborted part way.
    """
    policy = build_classification_policy(
        exclude_id_markers=exclude_id_markers,
        unsupported_dicom_types=unsupported_dicom_types,
    )
    document = load_document(document_path) if document_path is not None else None
    target = output_path or document_path
    try:
        outcome = run_highres_conversion(
            source=DocumentStructureSource(document),
            converter=DocumentStructureConverter(),
            gate=gate or FixedAnswerGate(answer=False),
            sink=sink or CollectingReportSink(),
            policy=policy,
            progress=progress,
        )
    except WorkflowAbortedError:
        if document is not None and target is not None:
            save_document(document, target)
        raise

    if (
        outcome.status is WorkflowStatus.COMPLETED
        and document is not None
        and target is not None
    ):
        save_document(document, target)
    return outcome
