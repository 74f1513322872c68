# ============================================================================
# INTAKE ROUTES TESTS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Tests - HTTP contract of the intake endpoints
# PURPOSE: Verify api/intake_routes.py status codes and response bodies
# CREATED: 18 OCT 2026
# ============================================================================
"""
Intake Routes Tests

Tests the multipart endpoints (api/intake_routes.py) through FastAPI
TestClient. The IntakeService is real; storage and database behind it are
mocks, so each test also checks which side effects happened.

Run with:
    pytest tests/test_intake_routes.py -v
"""

import itertools
from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.core.exceptions import AzureError
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.intake_routes import router, set_intake_services
from core.config import IntakeDefaults
from core.errors import PersistenceError
from core.models import RESEARCH_SCHEMA, INTERNSHIP_SCHEMA
from services import FileUploader, IntakeService

BASE_URL = "https://govacct.blob.core.windows.net/govservice-2024"
ONE_MB = 1024 * 1024


# ============================================================================
# FIXTURES
# ============================================================================

def _make_test_app(intake_service):
    """Create a test FastAPI app with intake routes and the given service."""
    app = FastAPI()
    app.include_router(router)
    set_intake_services(intake_service=intake_service)
    return app


def _make_stack(put_side_effect=None, append_side_effect=None):
    """Real IntakeService over mocked blob and submission repositories."""
    counter = itertools.count(1)
    blob_repo = MagicMock()
    blob_repo.put = MagicMock(
        side_effect=put_side_effect or (lambda name, data, content_type: f"{BASE_URL}/{name}")
    )
    submission_repo = MagicMock()
    submission_repo.append = AsyncMock(side_effect=append_side_effect or (lambda record: record))

    svc = IntakeService(
        submission_repo=submission_repo,
        uploader=FileUploader(blob_repo, id_factory=lambda: f"id{next(counter)}"),
        defaults=IntakeDefaults(max_file_size_bytes=ONE_MB),
    )
    return svc, blob_repo, submission_repo


def _form(schema=RESEARCH_SCHEMA, **overrides):
    fields = {name: f"value-{name}" for name in schema.required_fields}
    fields.update(overrides)
    return {k: v for k, v in fields.items() if v is not None}


def _files(names=("suratPengantarFile", "proposalFile", "ktpFile"), **overrides):
    defaults = {
        names[0]: ("letter.pdf", b"%PDF-a", "application/pdf"),
        names[1]: ("proposal.pdf", b"%PDF-b", "application/pdf"),
        names[2]: ("ktp.png", b"\x89PNG", "image/png"),
    }
    defaults.update(overrides)
    return [(name, part) for name, part in defaults.items() if part is not None]


@pytest.fixture(autouse=True)
def _reset_service():
    yield
    set_intake_services(intake_service=None)


# ============================================================================
# SUCCESS
# ============================================================================

class TestSuccess:

    def test_research_submission(self):
        svc, blob_repo, submission_repo = _make_stack()
        client = TestClient(_make_test_app(svc))

        resp = client.post("/api/penelitian", data=_form(), files=_files())

        assert resp.status_code == 200
        assert resp.json() == {"message": "Data berhasil disimpan"}
        assert blob_repo.put.call_count == 3
        record = submission_repo.append.call_args.args[0]
        assert record.collection_path == "pelayanan/penelitian/data"
        assert record.file_urls["fotocopyKTPUrl"] == f"{BASE_URL}/id3_ktp.png"

    def test_internship_submission(self):
        svc, _, submission_repo = _make_stack()
        client = TestClient(_make_test_app(svc))

        resp = client.post("/api/magang", data=_form(INTERNSHIP_SCHEMA), files=_files())

        assert resp.status_code == 200
        record = submission_repo.append.call_args.args[0]
        assert record.collection_path == "pelayanan/magang/data"
        assert record.fields["letterNumber"] == "value-letterNumber"

    def test_internship_applicants_name_alias(self):
        svc, _, submission_repo = _make_stack()
        client = TestClient(_make_test_app(svc))

        resp = client.post(
            "/api/magang",
            data=_form(INTERNSHIP_SCHEMA, name=None, applicantsName="Siti Aminah"),
            files=_files(),
        )

        assert resp.status_code == 200
        assert submission_repo.append.call_args.args[0].fields["name"] == "Siti Aminah"

    def test_legacy_route_accepts_legacy_part_names(self):
        svc, blob_repo, _ = _make_stack()
        client = TestClient(_make_test_app(svc))

        resp = client.post(
            "/api/submit-form",
            data=_form(),
            files=_files(names=("suratPermohonan", "proposal", "fotocopy")),
        )

        assert resp.status_code == 200
        assert blob_repo.put.call_count == 3

    def test_legacy_route_keeps_original_cover_letter_key(self):
        svc, _, submission_repo = _make_stack()
        client = TestClient(_make_test_app(svc))

        resp = client.post(
            "/api/submit-form",
            data=_form(),
            files=_files(names=("suratPermohonan", "proposal", "fotocopy")),
        )

        assert resp.status_code == 200
        document = submission_repo.append.call_args.args[0].to_document()
        assert document["suratPermohonanUrl"] == f"{BASE_URL}/id1_letter.pdf"
        assert "suratPengantarUrl" not in document
        assert document["fotocopyKTPUrl"] == f"{BASE_URL}/id3_ktp.png"

    def test_unknown_file_parts_ignored(self):
        svc, blob_repo, _ = _make_stack()
        client = TestClient(_make_test_app(svc))
        files = _files() + [("avatar", ("me.png", b"\x89PNG", "image/png"))]

        resp = client.post("/api/penelitian", data=_form(), files=files)

        assert resp.status_code == 200
        assert blob_repo.put.call_count == 3


# ============================================================================
# CLIENT ERRORS
# ============================================================================

class TestClientErrors:

    def test_missing_field(self):
        svc, blob_repo, submission_repo = _make_stack()
        client = TestClient(_make_test_app(svc))

        resp = client.post("/api/penelitian", data=_form(supervisorName=None), files=_files())

        assert resp.status_code == 400
        assert resp.json() == {"message": "supervisorName is required"}
        blob_repo.put.assert_not_called()
        submission_repo.append.assert_not_awaited()

    def test_missing_file(self):
        svc, blob_repo, _ = _make_stack()
        client = TestClient(_make_test_app(svc))

        resp = client.post("/api/magang", data=_form(INTERNSHIP_SCHEMA), files=_files(ktpFile=None))

        assert resp.status_code == 400
        assert resp.json() == {"message": "File ktpFile is required"}
        blob_repo.put.assert_not_called()

    def test_invalid_mime_type(self):
        svc, blob_repo, submission_repo = _make_stack()
        client = TestClient(_make_test_app(svc))

        resp = client.post(
            "/api/penelitian",
            data=_form(),
            files=_files(proposalFile=("setup.exe", b"MZ", "application/x-msdownload")),
        )

        assert resp.status_code == 400
        assert resp.json() == {"message": "File proposalFile must be a PDF, JPEG, or PNG"}
        blob_repo.put.assert_not_called()
        submission_repo.append.assert_not_awaited()

    def test_oversize_file(self):
        svc, blob_repo, _ = _make_stack()
        client = TestClient(_make_test_app(svc))

        resp = client.post(
            "/api/penelitian",
            data=_form(),
            files=_files(proposalFile=("big.pdf", b"x" * (ONE_MB + 1), "application/pdf")),
        )

        assert resp.status_code == 413
        assert resp.json() == {"message": "File proposalFile exceeds the maximum size of 1 MB"}
        blob_repo.put.assert_not_called()

    def test_malformed_multipart_is_400(self):
        svc, blob_repo, submission_repo = _make_stack()
        client = TestClient(_make_test_app(svc))
        body = (
            b"--xyz\r\n"
            b"Content-Disposition: form-data\r\n"
            b"\r\n"
            b"value\r\n"
            b"--xyz--\r\n"
        )

        resp = client.post(
            "/api/penelitian",
            content=body,
            headers={"Content-Type": "multipart/form-data; boundary=xyz"},
        )

        assert resp.status_code == 400
        assert resp.json()["message"] != "Terjadi kesalahan saat menyimpan data"
        blob_repo.put.assert_not_called()
        submission_repo.append.assert_not_awaited()


# ============================================================================
# SERVER ERRORS
# ============================================================================

class TestServerErrors:

    def test_upload_failure_is_generic_500(self):
        def put(name, data, content_type):
            if name.startswith("id2_"):
                raise AzureError("connection reset")
            return f"{BASE_URL}/{name}"

        svc, blob_repo, submission_repo = _make_stack(put_side_effect=put)
        client = TestClient(_make_test_app(svc))

        resp = client.post("/api/penelitian", data=_form(), files=_files())

        assert resp.status_code == 500
        assert resp.json() == {"message": "Terjadi kesalahan saat menyimpan data"}
        assert blob_repo.put.call_count == 2
        submission_repo.append.assert_not_awaited()

    def test_persistence_failure_is_generic_500(self):
        svc, _, _ = _make_stack(append_side_effect=PersistenceError("insert failed"))
        client = TestClient(_make_test_app(svc))

        resp = client.post("/api/magang", data=_form(INTERNSHIP_SCHEMA), files=_files())

        assert resp.status_code == 500
        assert resp.json() == {"message": "Terjadi kesalahan saat menyimpan data"}

    def test_unexpected_exception_is_generic_500(self):
        svc = MagicMock()
        svc.submit = AsyncMock(side_effect=RuntimeError("boom"))
        client = TestClient(_make_test_app(svc))

        resp = client.post("/api/penelitian", data=_form(), files=_files())

        assert resp.status_code == 500
        assert resp.json() == {"message": "Terjadi kesalahan saat menyimpan data"}
        assert "boom" not in resp.text

    def test_uninitialized_service_returns_503(self):
        client = TestClient(_make_test_app(None))

        resp = client.post("/api/penelitian", data=_form(), files=_files())

        assert resp.status_code == 503


# ============================================================================
# APPLICATION
# ============================================================================

class TestApplication:

    def test_root_banner(self):
        from main import app

        resp = TestClient(app).get("/")

        assert resp.status_code == 200
        assert resp.text == "Hey this is my API running"
        assert resp.headers["content-type"].startswith("text/plain")

    def test_livez(self):
        from main import app

        resp = TestClient(app).get("/livez")

        assert resp.status_code == 200
        assert resp.json()["status"] == "alive"
