"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from highres_converter.application.results import BatchReport, ConversionRecord
from highres_converter.types import Structure, StructureSet

IRREVERSIBLE_WARNING = "This operation cannot be undone. Proceed?"


@dataclass(frozen=True)
class ConfirmationRequest:
    """Details shown to the user before any structure is modified."""

    structure_ids: tuple[str, ...]
    warning: str = IRREVERSIBLE_WARNING

    @property
    def count(self) -> int:
        return len(self.structure_ids)

    @property
    def message(self) -> str:
        listing = "\n".join(self.structure_ids)
        return (
            f"{self.count} structures will be converted to high resolution:\n\n"
            f"{listing}\n\n{self.warning}"
        )


class StructureSource(Protocol):
    """Provide the structure set to operate on."""

    def load(self) -> StructureSet | None:
        """Return the current structure set, or ``None`` when none is open."""


class StructureConverter(Protocol):
    """Irreversibly convert one structure to high resolution."""

    def convert_to_high_resolution(self, structure: Structure) -> None:
        """Convert in place; raise on failure."""


class ConfirmationGate(Protocol):
    """Ask for a yes/no decision before mutating anything."""

    def confirm(self, request: ConfirmationRequest) -> bool:
        """Return ``True`` only for an explicit yes."""


class ReportSink(Protocol):
    """Present the ordered report lines."""

    def publish(self, title: str, lines: Sequence[str]) -> None:
        """Hand the finished report to presentation."""


class ProgressObserver(Protocol):
    """Follow batch progress, one notification per attempted structure."""

    def started(self, total: int) -> None:
        """Batch is about to attempt ``total`` structures."""

    def advanced(self, record: ConversionRecord, completed: int, total: int) -> None:
        """One structure reached a terminal state.

        ``completed`` counts attempts so far, failed ones included.
        """

    def finished(self, report: BatchReport) -> None:
        """Every structure was attempted."""
