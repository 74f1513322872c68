# ============================================================================
# INTAKE SERVICE TESTS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Tests - Validate, upload and persist pipeline
# PURPOSE: Verify IntakeService ordering, side effects and failure handling
# CREATED: 18 OCT 2026
# ============================================================================
"""
IntakeService Tests

Uses a real FileUploader over a MagicMock BlobRepository so the executor
path runs, and an AsyncMock SubmissionRepository. Async methods are
driven with asyncio.run.

Run with:
    pytest tests/test_intake_service.py -v
"""

import asyncio
import itertools
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.core.exceptions import AzureError

from core.config import IntakeDefaults
from core.contracts import ServiceType
from core.errors import (
    InvalidMimeTypeError,
    MissingFileError,
    PersistenceError,
    UploadError,
    ValidationError,
)
from core.models import RESEARCH_SCHEMA, INTERNSHIP_SCHEMA, UploadedFile
from services.intake_service import IntakeService, normalize_fields
from services.uploader import FileUploader, unique_blob_name

BASE_URL = "https://govacct.blob.core.windows.net/govservice-2024"
STORED_AT = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


# ============================================================================
# HELPERS
# ============================================================================

def _make_blob_repo(put_side_effect=None):
    """MagicMock BlobRepository whose put returns a deterministic URL."""
    repo = MagicMock()
    repo.put = MagicMock(
        side_effect=put_side_effect or (lambda name, data, content_type: f"{BASE_URL}/{name}")
    )
    repo.delete_blob = MagicMock(return_value=True)
    return repo


def _make_submission_repo(side_effect=None):
    repo = MagicMock()
    repo.append = AsyncMock(
        side_effect=side_effect or (lambda record: record.model_copy(update={"created_at": STORED_AT}))
    )
    return repo


def _make_service(blob_repo=None, submission_repo=None, cleanup=False):
    counter = itertools.count(1)
    blob_repo = blob_repo or _make_blob_repo()
    submission_repo = submission_repo or _make_submission_repo()
    uploader = FileUploader(blob_repo, id_factory=lambda: f"id{next(counter)}")
    svc = IntakeService(
        submission_repo=submission_repo,
        uploader=uploader,
        defaults=IntakeDefaults(max_file_size_bytes=1024, cleanup_orphaned_blobs=cleanup),
    )
    return svc, blob_repo, submission_repo


def _make_fields(schema=RESEARCH_SCHEMA, **overrides):
    fields = {name: f"value-{name}" for name in schema.required_fields}
    fields.update(overrides)
    return fields


def _make_files(**overrides):
    files = {
        "suratPengantarFile": UploadedFile(filename="letter.pdf", content_type="application/pdf", data=b"%PDF-a"),
        "proposalFile": UploadedFile(filename="proposal.pdf", content_type="application/pdf", data=b"%PDF-b"),
        "ktpFile": UploadedFile(filename="ktp.jpg", content_type="image/jpeg", data=b"\xff\xd8\xff"),
    }
    files.update(overrides)
    return files


# ============================================================================
# HAPPY PATH
# ============================================================================

class TestSuccessfulSubmission:

    def test_research_submission_stores_three_urls(self):
        svc, blob_repo, submission_repo = _make_service()

        stored = asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files()))

        assert blob_repo.put.call_count == 3
        submission_repo.append.assert_awaited_once()
        assert stored.created_at == STORED_AT
        assert stored.collection_path == "pelayanan/penelitian/data"
        assert stored.file_urls == {
            "suratPengantarUrl": f"{BASE_URL}/id1_letter.pdf",
            "proposalUrl": f"{BASE_URL}/id2_proposal.pdf",
            "fotocopyKTPUrl": f"{BASE_URL}/id3_ktp.jpg",
        }

    def test_uploads_in_slot_order_with_content_type(self):
        svc, blob_repo, _ = _make_service()

        asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files()))

        calls = [c.args for c in blob_repo.put.call_args_list]
        assert [c[0] for c in calls] == ["id1_letter.pdf", "id2_proposal.pdf", "id3_ktp.jpg"]
        assert calls[0][1] == b"%PDF-a"
        assert calls[2][2] == "image/jpeg"

    def test_document_contains_fields_and_urls(self):
        svc, _, submission_repo = _make_service()

        asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files()))

        record = submission_repo.append.call_args.args[0]
        document = record.to_document()
        assert document["supervisorName"] == "value-supervisorName"
        assert document["letterNumber"] is None
        assert document["fotocopyKTPUrl"].endswith("id3_ktp.jpg")
        assert record.submission_id

    def test_client_timestamp_dropped(self):
        svc, _, submission_repo = _make_service()
        fields = _make_fields(timestamp="1999-01-01T00:00:00Z", createdAt="yesterday")

        asyncio.run(svc.submit(ServiceType.RESEARCH, fields, _make_files()))

        document = submission_repo.append.call_args.args[0].to_document()
        assert "timestamp" not in document
        assert "createdAt" not in document

    def test_identical_submissions_append_twice(self):
        svc, _, submission_repo = _make_service()

        first = asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files()))
        second = asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files()))

        assert submission_repo.append.await_count == 2
        assert first.submission_id != second.submission_id
        assert first.file_urls["proposalUrl"] != second.file_urls["proposalUrl"]

    def test_internship_uses_magang_collection(self):
        svc, _, submission_repo = _make_service()

        stored = asyncio.run(svc.submit(
            ServiceType.INTERNSHIP, _make_fields(INTERNSHIP_SCHEMA), _make_files(),
        ))

        assert stored.collection_path == "pelayanan/magang/data"
        assert stored.service_type is ServiceType.INTERNSHIP


# ============================================================================
# VALIDATION FAILURES (no side effects)
# ============================================================================

class TestRejectedSubmission:

    def test_missing_field_uploads_nothing(self):
        svc, blob_repo, submission_repo = _make_service()
        fields = _make_fields()
        del fields["supervisorName"]

        with pytest.raises(ValidationError, match="supervisorName is required"):
            asyncio.run(svc.submit(ServiceType.RESEARCH, fields, _make_files()))

        blob_repo.put.assert_not_called()
        submission_repo.append.assert_not_awaited()

    def test_invalid_mime_uploads_nothing(self):
        svc, blob_repo, submission_repo = _make_service()
        files = _make_files(
            proposalFile=UploadedFile(filename="setup.exe", content_type="application/x-msdownload", data=b"MZ"),
        )

        with pytest.raises(InvalidMimeTypeError, match="File proposalFile must be a PDF, JPEG, or PNG"):
            asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), files))

        blob_repo.put.assert_not_called()
        submission_repo.append.assert_not_awaited()

    def test_missing_file_uploads_nothing(self):
        svc, blob_repo, _ = _make_service()

        with pytest.raises(MissingFileError, match="File ktpFile is required"):
            asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files(ktpFile=None)))

        blob_repo.put.assert_not_called()

    def test_fields_checked_before_files(self):
        svc, _, _ = _make_service()
        fields = _make_fields(name="")

        with pytest.raises(ValidationError):
            asyncio.run(svc.submit(ServiceType.RESEARCH, fields, {}))


# ============================================================================
# MID-PIPELINE FAILURES
# ============================================================================

class TestPartialFailure:

    def test_second_upload_failure_keeps_first_blob(self):
        urls = iter([f"{BASE_URL}/id1_letter.pdf"])

        def put(name, data, content_type):
            if name.startswith("id2_"):
                raise AzureError("storage unavailable")
            return next(urls)

        svc, blob_repo, submission_repo = _make_service(blob_repo=_make_blob_repo(put))

        with pytest.raises(UploadError) as exc_info:
            asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files()))

        assert exc_info.value.public_message == "Terjadi kesalahan saat menyimpan data"
        assert exc_info.value.blob_name == "id2_proposal.pdf"
        assert blob_repo.put.call_count == 2
        blob_repo.delete_blob.assert_not_called()
        submission_repo.append.assert_not_awaited()

    def test_persistence_failure_leaves_blobs_by_default(self):
        submission_repo = _make_submission_repo(
            side_effect=PersistenceError("insert failed", "pelayanan/penelitian/data")
        )
        svc, blob_repo, _ = _make_service(submission_repo=submission_repo)

        with pytest.raises(PersistenceError):
            asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files()))

        assert blob_repo.put.call_count == 3
        blob_repo.delete_blob.assert_not_called()

    def test_cleanup_deletes_orphans_when_enabled(self):
        submission_repo = _make_submission_repo(
            side_effect=PersistenceError("insert failed", "pelayanan/penelitian/data")
        )
        svc, blob_repo, _ = _make_service(submission_repo=submission_repo, cleanup=True)

        with pytest.raises(PersistenceError):
            asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files()))

        deleted = [c.args[0] for c in blob_repo.delete_blob.call_args_list]
        assert deleted == ["id1_letter.pdf", "id2_proposal.pdf", "id3_ktp.jpg"]

    def test_cleanup_failure_does_not_mask_original_error(self):
        submission_repo = _make_submission_repo(side_effect=PersistenceError("insert failed"))
        blob_repo = _make_blob_repo()
        blob_repo.delete_blob = MagicMock(side_effect=RuntimeError("delete failed"))
        svc, _, _ = _make_service(blob_repo=blob_repo, submission_repo=submission_repo, cleanup=True)

        with pytest.raises(PersistenceError):
            asyncio.run(svc.submit(ServiceType.RESEARCH, _make_fields(), _make_files()))

        assert blob_repo.delete_blob.call_count == 3


# ============================================================================
# FIELD NORMALIZATION
# ============================================================================

class TestNormalizeFields:

    def test_applicants_name_fills_name(self):
        fields = _make_fields(INTERNSHIP_SCHEMA)
        del fields["name"]
        fields["applicantsName"] = "Siti"

        normalized = normalize_fields(fields, INTERNSHIP_SCHEMA)

        assert normalized["name"] == "Siti"
        assert "applicantsName" not in normalized

    def test_canonical_name_wins_over_alias(self):
        fields = _make_fields(INTERNSHIP_SCHEMA, name="Budi", applicantsName="Siti")
        assert normalize_fields(fields, INTERNSHIP_SCHEMA)["name"] == "Budi"

    def test_unknown_fields_dropped(self):
        normalized = normalize_fields(_make_fields(extra="x"), RESEARCH_SCHEMA)
        assert set(normalized) == set(RESEARCH_SCHEMA.record_fields)


class TestUniqueBlobName:

    def test_prefixes_identifier(self):
        assert unique_blob_name("ktp.jpg", lambda: "abc") == "abc_ktp.jpg"

    def test_default_identifiers_differ(self):
        assert unique_blob_name("a.pdf") != unique_blob_name("a.pdf")
