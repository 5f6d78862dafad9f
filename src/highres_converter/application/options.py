"""Typed option objects shared across the conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_UNSUPPORTED_DICOM_TYPES: frozenset[str] = frozenset({"SUPPORT", "MARKER"})
DEFAULT_ID_MARKERS: tuple[str, ...] = ("ETD", "zOrig")


@dataclass(frozen=True)
class ClassificationPolicy:
    """Eligibility rule configuration.

    ``exclude_id_markers`` enables the stricter rule set that skips
    structures whose id contains one of ``id_markers``. It is off by default
    because deployed rule sets disagree on it.
    """

    exclude_id_markers: bool = False
    id_markers: tuple[str, ...] = DEFAULT_ID_MARKERS
    unsupported_dicom_types: frozenset[str] = DEFAULT_UNSUPPORTED_DICOM_TYPES
