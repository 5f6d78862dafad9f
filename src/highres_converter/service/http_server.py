"""HTTP server exposing classification and conversion of structure sets."""

from __future__ import annotations

import argparse
import logging
import os

import uvicorn
from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, ConfigDict

from highres_converter import __version__
from highres_converter.adapters.json_document import (
    DocumentStructureConverter,
    DocumentStructureSource,
)
from highres_converter.adapters.presentation import (
    CollectingReportSink,
    FixedAnswerGate,
)
from highres_converter.application.results import WorkflowStatus
from highres_converter.application.use_cases import (
    build_classification_policy,
    classify_structure_set,
    run_highres_conversion,
)
from highres_converter.errors import (
    HighResError,
    StructureSetUnavailableError,
    WorkflowAbortedError,
)
from highres_converter.schemas import StructureSetDocument

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class ReadyResponse(BaseModel):
    """Readiness response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class ClassifyRequest(BaseModel):
    """Structure set plus eligibility policy parameters."""

    model_config = ConfigDict(extra="forbid")

    structure_set: StructureSetDocument | None = None
    exclude_id_markers: bool = False
    unsupported_dicom_types: list[str] | None = None


class ClassifyResponse(BaseModel):
    """Dry-run classification result."""

    model_config = ConfigDict(extra="forbid")

    eligible: list[str]
    skip_reasons: list[str]


class ConvertRequest(ClassifyRequest):
    """Conversion request; nothing is modified unless ``confirm`` is true."""

    confirm: bool = False


class ConvertResponse(BaseModel):
    """Conversion outcome with the modified structure set."""

    model_config = ConfigDict(extra="forbid")

    status: WorkflowStatus
    lines: list[str]
    attempted: int
    converted: int
    structure_set: StructureSetDocument | None


def _to_http_error(exc: HighResError) -> HTTPException:
    if isinstance(exc, StructureSetUnavailableError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, WorkflowAbortedError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": str(exc), "partial_report": exc.partial_report},
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def create_app() -> FastAPI:
    """Create the conversion HTTP application."""
    app = FastAPI(
        title="High-Resolution Structure Converter",
        version=__version__,
        description=(
            "Classify structures of a structure set and convert the eligible ones "
            "to high resolution."
        ),
    )

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/readyz", response_model=ReadyResponse)
    async def readyz() -> ReadyResponse:
        return ReadyResponse(status="ready")

    @app.post("/v1/structures/classify", response_model=ClassifyResponse)
    def classify_structures(payload: ClassifyRequest) -> ClassifyResponse:
        """Report which structures would be converted."""
        try:
            policy = build_classification_policy(
                exclude_id_markers=payload.exclude_id_markers,
                unsupported_dicom_types=payload.unsupported_dicom_types,
            )
            result = classify_structure_set(
                DocumentStructureSource(payload.structure_set), policy
            )
        except HighResError as exc:
            raise _to_http_error(exc) from exc
        except Exception as exc:  # pragma: no cover
            logger.exception("unexpected error during HTTP classification")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="internal server error",
            ) from exc
        return ClassifyResponse(
            eligible=result.eligible_ids,
            skip_reasons=result.skip_reasons,
        )

    @app.post("/v1/structures/convert", response_model=ConvertResponse)
    def convert_structures(payload: ConvertRequest) -> ConvertResponse:
        """Convert eligible structures and return the modified structure set."""
        sink = CollectingReportSink()
        try:
            policy = build_classification_policy(
                exclude_id_markers=payload.exclude_id_markers,
                unsupported_dicom_types=payload.unsupported_dicom_types,
            )
            outcome = run_highres_conversion(
                source=DocumentStructureSource(payload.structure_set),
                converter=DocumentStructureConverter(),
                gate=FixedAnswerGate(answer=payload.confirm),
                sink=sink,
                policy=policy,
            )
        except HighResError as exc:
            if isinstance(exc, WorkflowAbortedError):
                logger.exception("batch conversion aborted")
            raise _to_http_error(exc) from exc
        except Exception as exc:  # pragma: no cover
            logger.exception("unexpected error during HTTP conversion")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="internal server error",
            ) from exc

        report = outcome.report
        return ConvertResponse(
            status=outcome.status,
            lines=outcome.lines,
            attempted=report.attempted if report is not None else 0,
            converted=report.converted if report is not None else 0,
            structure_set=payload.structure_set,
        )

    return app


app = create_app()


def main() -> None:
    """Run the conversion HTTP entrypoint."""
    parser = argparse.ArgumentParser(description="High-resolution conversion server.")
    parser.add_argument(
        "--host",
        default=os.getenv("HIGHRES_HTTP_HOST", "127.0.0.1"),
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("HIGHRES_HTTP_PORT", "8090")),
    )
    args = parser.parse_args()
    uvicorn.run(
        "highres_converter.service.http_server:app",
        host=args.host,
        port=args.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
