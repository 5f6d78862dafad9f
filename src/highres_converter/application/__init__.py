"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Iterable

from highres_converter.application.options import ClassificationPolicy
from highres_converter.application.ports import (
    ConfirmationGate,
    ConfirmationRequest,
    ProgressObserver,
    ReportSink,
    StructureConverter,
    StructureSource,
)
from highres_converter.application.results import (
    BatchReport,
    ClassificationResult,
    ConversionRecord,
    ConversionStatus,
    WorkflowOutcome,
    WorkflowStatus,
)


def build_classification_policy(
    *,
    exclude_id_markers: bool = False,
    id_markers: Iterable[str] | None = None,
    unsupported_dicom_types: Iterable[str] | None = None,
) -> ClassificationPolicy:
    """Build typed classification policy via lazy use-case import."""
    from highres_converter.application.use_cases import (
        build_classification_policy as _impl,
    )

    return _impl(
        exclude_id_markers=exclude_id_markers,
        id_markers=id_markers,
        unsupported_dicom_types=unsupported_dicom_types,
    )


def classify_structure_set(
    source: StructureSource,
    policy: ClassificationPolicy | None = None,
) -> ClassificationResult:
    """Classify a structure set via lazy use-case import."""
    from highres_converter.application.use_cases import classify_structure_set as _impl

    return _impl(source, policy)


def run_highres_conversion(
    *,
    source: StructureSource,
    converter: StructureConverter,
    gate: ConfirmationGate,
    sink: ReportSink,
    policy: ClassificationPolicy | None = None,
    progress: ProgressObserver | None = None,
) -> WorkflowOutcome:
    """Run the conversion workflow via lazy use-case import."""
    from highres_converter.application.use_cases import run_highres_conversion as _impl

    return _impl(
        source=source,
        converter=converter,
        gate=gate,
        sink=sink,
        policy=policy,
        progress=progress,
    )


__all__ = [
    "BatchReport",
    "ClassificationPolicy",
    "ClassificationResult",
    "ConfirmationRequest",
    "ConversionRecord",
    "ConversionStatus",
    "WorkflowOutcome",
    "WorkflowStatus",
    "build_classification_policy",
    "classify_structure_set",
    "run_highres_conversion",
]
