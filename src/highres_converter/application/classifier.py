"""Eligibility rule table and structure classification."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from highres_converter.application.options import ClassificationPolicy
from highres_converter.application.results import (
    ClassificationOutcome,
    ClassificationResult,
    Eligible,
    SkipReason,
    Skipped,
)
from highres_converter.types import Structure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructureView:
    """Normalized snapshot of the attributes the rules look at.

    Flags are ``None`` when the host did not report a usable boolean.
    """

    id: str
    is_high_resolution: bool | None
    is_approved: bool | None
    can_convert: bool | None
    dicom_type: str | None


@dataclass(frozen=True)
class EligibilityRule:
    """One entry of the ordered rule table."""

    reason: SkipReason
    matches: Callable[[StructureView], bool]
    describe: Callable[[StructureView], str]

    def evaluate(self, view: StructureView) -> Skipped | None:
        """Return the skip outcome if this rule rejects ``view``."""
        if not self.matches(view):
            return None
        return Skipped(
            structure_id=view.id, reason=self.reason, message=self.describe(view)
        )


def _read_attribute(structure: Structure, name: str) -> object:
    try:
        value = getattr(structure, name)
        # Hosts may expose capability checks as methods.
        if callable(value):
            value = value()
    except Exception as exc:
        logger.debug("Reading %s from structure failed: %s", name, exc)
        return None
    return value


def _as_flag(value: object) -> bool | None:
    return value if isinstance(value, bool) else None


def read_structure(structure: Structure) -> StructureView:
    """Snapshot a host structure without ever raising."""
    raw_id = _read_attribute(structure, "id")
    raw_type = _read_attribute(structure, "dicom_type")
    return StructureView(
        id="" if raw_id is None else str(raw_id),
        is_high_resolution=_as_flag(_read_attribute(structure, "is_high_resolution")),
        is_approved=_as_flag(_read_attribute(structure, "is_approved")),
        can_convert=_as_flag(_read_attribute(structure, "can_convert")),
        dicom_type=None if raw_type is None else str(raw_type),
    )


def _id_marker_rule(marker: str) -> EligibilityRule:
    return EligibilityRule(
        reason=SkipReason.ID_MARKER,
        matches=lambda view: marker in view.id,
        describe=lambda _view: f"{marker} structures do not require conversion",
    )


def build_rules(policy: ClassificationPolicy | None = None) -> tuple[EligibilityRule, ...]:
    """Build the ordered rule table for ``policy``; first match wins."""
    policy = policy or ClassificationPolicy()
    unsupported = policy.unsupported_dicom_types

    rules = [
        EligibilityRule(
            reason=SkipReason.ALREADY_HIGH_RESOLUTION,
            matches=lambda view: view.is_high_resolution is not False,
            describe=lambda _view: "Already high resolution",
        ),
        EligibilityRule(
            reason=SkipReason.APPROVED,
            matches=lambda view: view.is_approved is not False,
            describe=lambda _view: "Unable to convert approved structures",
        ),
        EligibilityRule(
            reason=SkipReason.CANNOT_CONVERT,
            matches=lambda view: view.can_convert is not True,
            describe=lambda _view: "Unable to convert to high resolution",
        ),
    ]
    if policy.exclude_id_markers:
        rules.extend(_id_marker_rule(marker) for marker in policy.id_markers)
    rules.append(
        EligibilityRule(
            reason=SkipReason.UNSUPPORTED_DICOM_TYPE,
            matches=lambda view: (
                view.dicom_type is None or view.dicom_type in unsupported
            ),
            describe=lambda view: f"Unsupported DICOM type ({view.dicom_type or ''})",
        )
    )
    return tuple(rules)


def classify_structure(
    structure: Structure, rules: Iterable[EligibilityRule]
) -> ClassificationOutcome:
    """Classify one structure against ``rules``."""
    view = read_structure(structure)
    for rule in rules:
        skipped = rule.evaluate(view)
        if skipped is not None:
            logger.debug("Skipping %s: %s", view.id, skipped.message)
            return skipped
    logger.debug("Structure %s is eligible", view.id)
    return Eligible(structure=structure, structure_id=view.id)


def classify(
    structures: Iterable[Structure],
    policy: ClassificationPolicy | None = None,
) -> ClassificationResult:
    """Partition ``structures`` into eligible ones and skip outcomes.

    Parameters
    ----------
    structures : Iterable[Structure]
        Structures in input order.
    policy : ClassificationPolicy | None, default=None
        Rule configuration; the default rule set when omitted.

    Returns
    -------
    ClassificationResult
        One outcome per input structure, in input order.
    """
    rules = build_rules(policy)
    outcomes = tuple(classify_structure(structure, rules) for structure in structures)
    return ClassificationResult(outcomes=outcomes)
