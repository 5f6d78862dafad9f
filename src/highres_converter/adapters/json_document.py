"""Structure-set documents stored as JSON files."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from highres_converter.errors import ConversionError, DocumentError
from highres_converter.schemas import StructureRecord, StructureSetDocument

logger = logging.getLogger(__name__)


def load_document(path: Path) -> StructureSetDocument:
    """Read and validate a structure-set document.

    Raises
    ------
    DocumentError
        If the file cannot be read or does not match the schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Cannot read structure set '{path}': {exc}") from exc
    try:
        return StructureSetDocument.model_validate_json(raw)
    except ValidationError as exc:
        raise DocumentError(f"Invalid structure set '{path}': {exc}") from exc


def save_document(document: StructureSetDocument, path: Path) -> Path:
    """Write ``document`` to ``path`` and return the path."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document.model_dump_json(indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Cannot write structure set '{path}': {exc}") from exc
    logger.info("Saved structure set %s to %s", document.id, path)
    return path


class DocumentStructureSet:
    """Structure-set handle backed by an in-memory document."""

    def __init__(self, document: StructureSetDocument) -> None:
        self.document = document
        self.modifications_started = False

    @property
    def structures(self) -> list[StructureRecord]:
        return self.document.structures

    def begin_modifications(self) -> None:
        logger.debug("Begin modifications on structure set %s", self.document.id)
        self.modifications_started = True


class DocumentStructureSource:
    """Serve a loaded document; ``None`` means no structure set is open."""

    def __init__(self, document: StructureSetDocument | None) -> None:
        self.document = document
        self._structure_set: DocumentStructureSet | None = None

    def load(self) -> DocumentStructureSet | None:
        if self.document is None:
            return None
        if self._structure_set is None:
            self._structure_set = DocumentStructureSet(self.document)
        return self._structure_set


class DocumentStructureConverter:
    """Convert document records in place, refusing what a host would refuse."""

    def convert_to_high_resolution(self, structure: StructureRecord) -> None:
        if structure.is_approved:
            raise ConversionError(
                structure.id, "Structure is approved and cannot be modified"
            )
        if structure.is_high_resolution:
            raise ConversionError(structure.id, "Structure is already high resolution")
        if not structure.can_convert:
            raise ConversionError(
                structure.id, "Structure cannot be converted to high resolution"
            )
        if structure.is_empty:
            raise ConversionError(structure.id, "Structure has no contours to convert")
        structure.is_high_resolution = True
