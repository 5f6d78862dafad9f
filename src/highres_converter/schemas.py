"""Pydantic schemas for runtime validation of workflow inputs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from highres_converter.application.options import ClassificationPolicy


def _strip_entries(value: list[str], label: str) -> list[str]:
    cleaned = [item.strip() for item in value]
    if any(not item for item in cleaned):
        raise ValueError(f"{label} cannot contain empty entries.")
    return cleaned


class ClassificationPolicyConfig(BaseModel):
    """Validated eligibility policy parameters."""

    model_config = ConfigDict(extra="forbid")

    exclude_id_markers: bool = False
    id_markers: list[str] = Field(default_factory=lambda: ["ETD", "zOrig"])
    unsupported_dicom_types: list[str] = Field(
        default_factory=lambda: ["MARKER", "SUPPORT"]
    )

    @field_validator("id_markers")
    @classmethod
    def _validate_markers(cls, value: list[str]) -> list[str]:
        return _strip_entries(value, "id_markers")

    @field_validator("unsupported_dicom_types")
    @classmethod
    def _validate_types(cls, value: list[str]) -> list[str]:
        return [item.upper() for item in _strip_entries(value, "unsupported_dicom_types")]

    def to_policy(self) -> ClassificationPolicy:
        return ClassificationPolicy(
            exclude_id_markers=self.exclude_id_markers,
            id_markers=tuple(self.id_markers),
            unsupported_dicom_types=frozenset(self.unsupported_dicom_types),
        )


class StructureRecord(BaseModel):
    """One structure as stored in a structure-set document."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    id: str = Field(min_length=1)
    is_high_resolution: bool | None = False
    is_approved: bool | None = False
    can_convert: bool | None = True
    dicom_type: str | None = "ORGAN"
    is_empty: bool = False


class StructureSetDocument(BaseModel):
    """Structure-set document: the mutation target of a batch."""

    model_config = ConfigDict(extra="forbid")

    id: str = "StructureSet"
    structures: list[StructureRecord] = Field(default_factory=list)

    @field_validator("structures")
    @classmethod
    def _validate_unique_ids(cls, value: list[StructureRecord]) -> list[StructureRecord]:
        seen: set[str] = set()
        for record in value:
            if record.id in seen:
                raise ValueError(f"duplicate structure id '{record.id}'")
            seen.add(record.id)
        return value
