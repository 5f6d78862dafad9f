"""Application use-cases orchestrating the conversion workflow."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import ValidationError

from highres_converter.application.batch import convert_all
from highres_converter.application.classifier import classify
from highres_converter.application.options import (
    DEFAULT_ID_MARKERS,
    DEFAULT_UNSUPPORTED_DICOM_TYPES,
    ClassificationPolicy,
)
from highres_converter.application.ports import (
    ConfirmationGate,
    ConfirmationRequest,
    ProgressObserver,
    ReportSink,
    StructureConverter,
    StructureSource,
)
from highres_converter.application.results import (
    ClassificationResult,
    WorkflowOutcome,
    WorkflowStatus,
)
from highres_converter.errors import (
    HighResError,
    StructureSetUnavailableError,
    WorkflowAbortedError,
)
from highres_converter.schemas import ClassificationPolicyConfig

logger = logging.getLogger(__name__)

NOTHING_TO_CONVERT_TITLE = "No structures need conversion:"
COMPLETED_TITLE = "Conversion complete:"


def build_classification_policy(
    *,
    exclude_id_markers: bool = False,
    id_markers: Iterable[str] | None = None,
    unsupported_dicom_types: Iterable[str] | None = None,
) -> ClassificationPolicy:
    """Build a typed policy object from command/API params."""
    try:
        config = ClassificationPolicyConfig(
            exclude_id_markers=exclude_id_markers,
            id_markers=(
                list(DEFAULT_ID_MARKERS) if id_markers is None else list(id_markers)
            ),
            unsupported_dicom_types=(
                sorted(DEFAULT_UNSUPPORTED_DICOM_TYPES)
                if unsupported_dicom_types is None
                else list(unsupported_dicom_types)
            ),
        )
    except ValidationError as exc:
        raise HighResError(f"Invalid classification policy: {exc}") from exc
    return config.to_policy()


def classify_structure_set(
    source: StructureSource,
    policy: ClassificationPolicy | None = None,
) -> ClassificationResult:
    """Use-case: load the structure set and classify it without modifying it."""
    structure_set = source.load()
    if structure_set is None:
        raise StructureSetUnavailableError()
    return classify(structure_set.structures, policy)


def run_highres_conversion(
    *,
    source: StructureSource,
    converter: StructureConverter,
    gate: ConfirmationGate,
    sink: ReportSink,
    policy: ClassificationPolicy | None = None,
    progress: ProgressObserver | None = None,
) -> WorkflowOutcome:
    """Use-case: classify, confirm, convert and report.

    Nothing is modified unless ``gate`` answers yes. When no structure is
    eligible the skip reasons are published and no confirmation is asked.
    """
    structure_set = source.load()
    if structure_set is None:
        raise StructureSetUnavailableError()

    classification = classify(structure_set.structures, policy)
    eligible = classification.eligible
    skip_reasons = classification.skip_reasons

    if not eligible:
        logger.info("No structures need conversion")
        sink.publish(NOTHING_TO_CONVERT_TITLE, skip_reasons)
        return WorkflowOutcome(
            status=WorkflowStatus.NOTHING_TO_CONVERT,
            classification=classification,
            lines=list(skip_reasons),
        )

    request = ConfirmationRequest(structure_ids=tuple(classification.eligible_ids))
    if gate.confirm(request) is not True:
        logger.info("Conversion of %d structures cancelled", request.count)
        return WorkflowOutcome(
            status=WorkflowStatus.CANCELLED,
            classification=classification,
        )

    structure_set.begin_modifications()
    report = convert_all(eligible, converter, skip_reasons, progress=progress)
    lines: list[str] = []
    try:
        lines = report.lines
        sink.publish(COMPLETED_TITLE, lines)
    except Exception as exc:
        # The conversions already happened; the caller still gets their fate.
        logger.error("Publishing the conversion report failed: %s", exc)
        raise WorkflowAbortedError(
            f"Publishing the conversion report failed: {exc}",
            lines or [*skip_reasons, *(record.line for record in report.records)],
        ) from exc
    return WorkflowOutcome(
        status=WorkflowStatus.COMPLETED,
        classification=classification,
        report=report,
        lines=lines,
    )
