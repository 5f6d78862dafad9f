"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeAlias

from highres_converter.types import Structure


class SkipReason(StrEnum):
    """Closed set of reasons a structure is left unconverted."""

    ALREADY_HIGH_RESOLUTION = "already_high_resolution"
    APPROVED = "approved"
    CANNOT_CONVERT = "cannot_convert"
    ID_MARKER = "id_marker"
    UNSUPPORTED_DICOM_TYPE = "unsupported_dicom_type"


@dataclass(frozen=True)
class Eligible:
    """Structure that passed every eligibility rule."""

    structure: Structure
    structure_id: str


@dataclass(frozen=True)
class Skipped:
    """Structure rejected by the first matching rule."""

    structure_id: str
    reason: SkipReason
    message: str

    @property
    def line(self) -> str:
        return f"{self.structure_id}: {self.message}"


ClassificationOutcome: TypeAlias = Eligible | Skipped


@dataclass(frozen=True)
class ClassificationResult:
    """Partition of the input into eligible structures and skip outcomes."""

    outcomes: tuple[ClassificationOutcome, ...]

    @property
    def eligible(self) -> list[Structure]:
        return [item.structure for item in self.outcomes if isinstance(item, Eligible)]

    @property
    def eligible_ids(self) -> list[str]:
        return [item.structure_id for item in self.outcomes if isinstance(item, Eligible)]

    @property
    def skipped(self) -> list[Skipped]:
        return [item for item in self.outcomes if isinstance(item, Skipped)]

    @property
    def skip_reasons(self) -> list[str]:
        return [item.line for item in self.skipped]


class ConversionStatus(StrEnum):
    """Terminal state of one attempted structure."""

    CONVERTED = "converted"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionRecord:
    """Outcome of a single conversion attempt."""

    structure_id: str
    status: ConversionStatus
    error_message: str | None = None

    @property
    def line(self) -> str:
        if self.status is ConversionStatus.CONVERTED:
            return f"{self.structure_id}: Successfully converted"
        return f"{self.structure_id}: FAILED - {self.error_message}"


@dataclass(frozen=True)
class BatchReport:
    """Ordered outcome report for one batch invocation."""

    skip_reasons: tuple[str, ...] = ()
    records: tuple[ConversionRecord, ...] = ()

    @property
    def attempted(self) -> int:
        return len(self.records)

    @property
    def converted(self) -> int:
        return sum(
            1 for record in self.records if record.status is ConversionStatus.CONVERTED
        )

    @property
    def failed(self) -> int:
        return self.attempted - self.converted

    @property
    def summary_line(self) -> str:
        return f"Successfully converted {self.converted}/{self.attempted} structures"

    @property
    def lines(self) -> list[str]:
        """Summary first, then skip reasons, then results in attempted order."""
        return [
            self.summary_line,
            *self.skip_reasons,
            *(record.line for record in self.records),
        ]


class WorkflowStatus(StrEnum):
    """How a workflow invocation ended."""

    NOTHING_TO_CONVERT = "nothing_to_convert"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass(frozen=True)
class WorkflowOutcome:
    """Structured result of ``run_highres_conversion``."""

    status: WorkflowStatus
    classification: ClassificationResult
    report: BatchReport | None = None
    lines: list[str] = field(default_factory=list)
