"""Shared protocols describing host-side structure objects."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeAlias

DicomType: TypeAlias = str


class Structure(Protocol):
    """Read-only view of a structure as exposed by the host.

    Hosts may omit attributes or report ``None``; the classifier treats such
    values as ineligible rather than failing.
    """

    id: str
    is_high_resolution: bool
    is_approved: bool
    can_convert: bool
    dicom_type: DicomType


class StructureSet(Protocol):
    """Handle to the document whose structures are converted in place."""

    @property
    def structures(self) -> Iterable[Structure]:
        """Structures in document order."""

    def begin_modifications(self) -> None:
        """Acquire write access before the first mutation."""
