# ============================================================================
# SERVICE SCHEMA TESTS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Tests - Per-service field lists, file slots and collections
# PURPOSE: Verify core/models/service_schema.py and core/models/submission.py
# CREATED: 18 OCT 2026
# ============================================================================
"""
Service Schema Tests

Run with:
    pytest tests/test_service_schema.py -v
"""

import pytest

from core.contracts import IntakeStage, ServiceType
from core.models import (
    RESEARCH_SCHEMA,
    INTERNSHIP_SCHEMA,
    LEGACY_RESEARCH_SCHEMA,
    SubmissionRecord,
    UploadedFile,
    get_service_schema,
)


# ============================================================================
# SCHEMA LOOKUP
# ============================================================================

class TestSchemaLookup:

    def test_lookup_by_enum(self):
        assert get_service_schema(ServiceType.RESEARCH) is RESEARCH_SCHEMA
        assert get_service_schema(ServiceType.INTERNSHIP) is INTERNSHIP_SCHEMA

    def test_lookup_by_value(self):
        assert get_service_schema("magang") is INTERNSHIP_SCHEMA

    def test_unknown_service_type(self):
        with pytest.raises(KeyError):
            get_service_schema("kerja-praktik")

    def test_collection_paths(self):
        assert RESEARCH_SCHEMA.collection_path == "pelayanan/penelitian/data"
        assert INTERNSHIP_SCHEMA.collection_path == "pelayanan/magang/data"

    def test_required_field_counts(self):
        assert len(RESEARCH_SCHEMA.required_fields) == 14
        assert len(INTERNSHIP_SCHEMA.required_fields) == 13

    def test_record_fields_include_optional(self):
        assert RESEARCH_SCHEMA.record_fields[-1] == "letterNumber"
        assert INTERNSHIP_SCHEMA.record_fields == INTERNSHIP_SCHEMA.required_fields


# ============================================================================
# FILE SLOTS
# ============================================================================

class TestFileSlots:

    def test_slot_order(self):
        names = [slot.name for slot in RESEARCH_SCHEMA.file_slots]
        assert names == ["suratPengantarFile", "proposalFile", "ktpFile"]

    def test_url_fields(self):
        assert RESEARCH_SCHEMA.slot("ktpFile").url_field == "fotocopyKTPUrl"
        assert RESEARCH_SCHEMA.slot("proposalFile").url_field == "proposalUrl"
        assert RESEARCH_SCHEMA.slot("suratPengantarFile").url_field == "suratPengantarUrl"

    def test_unknown_slot(self):
        with pytest.raises(KeyError):
            RESEARCH_SCHEMA.slot("cvFile")

    @pytest.mark.parametrize("part_name,expected", [
        ("suratPengantarFile", "suratPengantarFile"),
        ("suratPermohonanFile", "suratPengantarFile"),
        ("suratPermohonan", "suratPengantarFile"),
        ("proposal", "proposalFile"),
        ("fotocopy", "ktpFile"),
    ])
    def test_resolve_slot_aliases(self, part_name, expected):
        assert RESEARCH_SCHEMA.resolve_slot(part_name).name == expected

    def test_resolve_unknown_part(self):
        assert RESEARCH_SCHEMA.resolve_slot("avatar") is None

    def test_legacy_schema_keeps_original_cover_letter_key(self):
        assert LEGACY_RESEARCH_SCHEMA.slot("suratPengantarFile").url_field == "suratPermohonanUrl"
        assert LEGACY_RESEARCH_SCHEMA.required_fields == RESEARCH_SCHEMA.required_fields
        assert LEGACY_RESEARCH_SCHEMA.collection_path == RESEARCH_SCHEMA.collection_path
        assert RESEARCH_SCHEMA.slot("suratPengantarFile").url_field == "suratPengantarUrl"


# ============================================================================
# MODELS
# ============================================================================

class TestModels:

    def test_uploaded_file_basename_strips_directories(self):
        upload = UploadedFile(filename="C:\\Users\\me\\ktp.jpg", content_type="image/jpeg", data=b"x")
        assert upload.basename == "ktp.jpg"

    def test_uploaded_file_describe_omits_bytes(self):
        upload = UploadedFile(filename="a.pdf", content_type="application/pdf", data=b"abc")
        assert upload.describe() == {"filename": "a.pdf", "content_type": "application/pdf", "size": 3}

    def test_record_document_is_flat(self):
        record = SubmissionRecord(
            submission_id="abc",
            service_type=ServiceType.RESEARCH,
            collection_path=RESEARCH_SCHEMA.collection_path,
            fields={"name": "Budi"},
            file_urls={"proposalUrl": "https://x/proposal.pdf"},
        )
        assert record.to_document() == {
            "name": "Budi",
            "proposalUrl": "https://x/proposal.pdf",
        }

    def test_stage_progression(self):
        assert IntakeStage.VALIDATING.next() is IntakeStage.UPLOADING
        assert IntakeStage.UPLOADING.next() is IntakeStage.PERSISTING
        assert IntakeStage.PERSISTING.next() is IntakeStage.RESPONDING
        with pytest.raises(ValueError):
            IntakeStage.RESPONDING.next()
