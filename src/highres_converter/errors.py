"""Exception hierarchy for the high-resolution conversion workflow."""

from __future__ import annotations

from collections.abc import Sequence


class HighResError(Exception):
    """Base class for workflow errors surfaced to callers."""

    exit_code: int = 1


class StructureSetUnavailableError(HighResError):
    """Raised when there is no structure set to operate on."""

    exit_code = 2

    def __init__(
        self, message: str = "No structure set loaded. Please open a structure set."
    ) -> None:
        super().__init__(message)


class DocumentError(HighResError):
    """Raised when a structure-set document cannot be read or written."""

    exit_code = 3


class ConversionError(HighResError):
    """Raised by a converter adapter when one structure cannot be converted."""

    def __init__(self, structure_id: str, message: str) -> None:
        super().__init__(message)
        self.structure_id = structure_id
        self.message = message


class WorkflowAbortedError(HighResError):
    """Raised when a failure outside the per-structure boundary stops a batch.

    ``partial_report`` holds every report line produced before the abort, so
    callers can still show the fate of each structure that was attempted.
    """

    exit_code = 4

    def __init__(self, message: str, partial_report: Sequence[str]) -> None:
        super().__init__(message)
        self.partial_report = list(partial_report)
