"""Unit tests for the conversion HTTP transport."""

from __future__ import annotations

import sys
import types
from typing import TYPE_CHECKING, Protocol, cast

import pytest

from highres_converter.errors import WorkflowAbortedError

if TYPE_CHECKING:
    from fastapi.testclient import TestClient


class _UvicornLike(Protocol):
    def run(self, app_ref: str, *, host: str, port: int, reload: bool) -> None: ...


def _client() -> TestClient:
    pytest.importorskip("fastapi")
    pytest.importorskip("httpx")

    from fastapi.testclient import TestClient

    from highres_converter.service.http_server import create_app

    return TestClient(create_app())


def _structure_set() -> dict[str, object]:
    return {
        "id": "CT_1",
        "structures": [
            {"id": "A", "is_high_resolution": True},
            {"id": "B", "is_approved": True},
            {"id": "C", "can_convert": False},
            {"id": "D", "dicom_type": "MARKER"},
            {"id": "E"},
            {"id": "F", "is_empty": True},
        ],
    }


def test_health_and_ready() -> None:
    """Liveness and readiness probes respond."""
    client = _client()
    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get("/readyz").json() == {"status": "ready"}


def test_classify_reports_eligible_and_skipped() -> None:
    """Dry-run classification lists eligible ids and skip reasons."""
    response = _client().post(
        "/v1/structures/classify", json={"structure_set": _structure_set()}
    )

    assert response.status_code == 200
    assert response.json() == {
        "eligible": ["E", "F"],
        "skip_reasons": [
            "A: Already high resolution",
            "B: Unable to convert approved structures",
            "C: Unable to convert to high resolution",
            "D: Unsupported DICOM type (MARKER)",
        ],
    }


def test_classify_without_structure_set_is_conflict() -> None:
    """Missing structure set maps to 409."""
    response = _client().post("/v1/structures/classify", json={})
    assert response.status_code == 409
    assert "No structure set loaded" in response.json()["detail"]


def test_convert_without_confirm_is_cancelled() -> None:
    """Nothing is converted unless the request confirms."""
    response = _client().post(
        "/v1/structures/convert", json={"structure_set": _structure_set()}
    )

    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "cancelled"
    assert body["attempted"] == 0
    assert all(
        not record["is_high_resolution"] or record["id"] == "A"
        for record in body["structure_set"]["structures"]
    )


def test_convert_with_confirm_returns_report() -> None:
    """Confirmed conversion returns the ordered report and modified records."""
    response = _client().post(
        "/v1/structures/convert",
        json={"structure_set": _structure_set(), "confirm": True},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "completed"
    assert body["attempted"] == 2
    assert body["converted"] == 1
    assert body["lines"] == [
        "Successfully converted 1/2 structures",
        "A: Already high resolution",
        "B: Unable to convert approved structures",
        "C: Unable to convert to high resolution",
        "D: Unsupported DICOM type (MARKER)",
        "E: Successfully converted",
        "F: FAILED - Structure has no contours to convert",
    ]
    records = {r["id"]: r for r in body["structure_set"]["structures"]}
    assert records["E"]["is_high_resolution"] is True
    assert records["F"]["is_high_resolution"] is False


def test_convert_rejects_invalid_policy() -> None:
    """Blank unsupported types are a client error."""
    response = _client().post(
        "/v1/structures/convert",
        json={"structure_set": _structure_set(), "unsupported_dicom_types": [" "]},
    )
    assert response.status_code == 400


def test_convert_aborted_batch_returns_partial_report(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Aborted batches return 500 with the partial report."""
    client = _client()
    import highres_converter.service.http_server as module

    def fake_run(**_: object) -> object:
        raise WorkflowAbortedError("aborted", ["Successfully converted 0/0 structures"])

    monkeypatch.setattr(module, "run_highres_conversion", fake_run)
    response = client.post(
        "/v1/structures/convert",
        json={"structure_set": _structure_set(), "confirm": True},
    )

    assert response.status_code == 500
    assert response.json()["detail"] == {
        "message": "aborted",
        "partial_report": ["Successfully converted 0/0 structures"],
    }


def test_main_runs_uvicorn_with_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Entrypoint reads host/port from the environment."""
    pytest.importorskip("fastapi")
    import highres_converter.service.http_server as module

    seen: dict[str, object] = {}

    def fake_run(app_ref: str, *, host: str, port: int, reload: bool) -> None:
        seen.update(app_ref=app_ref, host=host, port=port, reload=reload)

    monkeypatch.setattr(
        module,
        "uvicorn",
        cast(_UvicornLike, types.SimpleNamespace(run=fake_run)),
    )
    monkeypatch.setenv("HIGHRES_HTTP_HOST", "0.0.0.0")
    monkeypatch.setenv("HIGHRES_HTTP_PORT", "9001")
    monkeypatch.setattr(sys, "argv", ["highres-http"])

    module.main()

    assert seen == {
        "app_ref": "highres_converter.service.http_server:app",
        "host": "0.0.0.0",
        "port": 9001,
        "reload": False,
    }
