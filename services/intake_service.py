# ============================================================================
# INTAKE SERVICE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Domain service - Validated multi-file intake and persist pipeline
# PURPOSE: Turn one form submission into uploaded blobs plus one stored record
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
IntakeService

One generic pipeline for every service type. The ServiceSchema looked up
from the service type supplies everything that differs between forms.

    VALIDATING  fields, then files (nothing uploaded yet)
    UPLOADING   each slot in schema order, awaited one at a time
    PERSISTING  one append to the schema's collection
    RESPONDING  caller builds the HTTP response

The first failure ends the request. Blobs uploaded before a later failure
stay in storage unless cleanup_orphaned_blobs is enabled, in which case
they are deleted best-effort.

Pattern: Constructor injection of repository and uploader, async methods.
"""

import uuid
from typing import Any, Dict, List, Mapping, Optional

from core.config import IntakeDefaults, get_defaults
from core.contracts import IntakeStage, ServiceType
from core.errors import IntakeError
from core.logging import get_logger, log_context, log_checkpoint, ComponentType
from core.models import ServiceSchema, SubmissionRecord, UploadedFile, get_service_schema
from repositories import SubmissionRepository
from services.uploader import FileUploader, UploadedBlob
from services.validation import coerce_field, is_missing, validate_fields, validate_files

logger = get_logger(__name__, ComponentType.SERVICE)


def normalize_fields(fields: Mapping[str, Any], schema: ServiceSchema) -> Dict[str, Optional[str]]:
    """
    Reduce submitted form values to the schema's record fields.

    Aliased fields (e.g. applicantsName for name) fill the canonical field
    only when the canonical one is missing. Values outside the schema are
    dropped, so a client can never supply the record timestamp.
    """
    merged: Dict[str, Any] = dict(fields)
    for alias, canonical in schema.field_aliases.items():
        if is_missing(merged.get(canonical)) and not is_missing(merged.get(alias)):
            merged[canonical] = merged[alias]

    return {name: coerce_field(merged.get(name)) for name in schema.record_fields}


class IntakeService:
    """Validates, uploads and persists form submissions."""

    def __init__(
        self,
        submission_repo: SubmissionRepository,
        uploader: FileUploader,
        defaults: Optional[IntakeDefaults] = None,
    ):
        self.submission_repo = submission_repo
        self.uploader = uploader
        self.defaults = defaults or get_defaults().intake

    async def submit(
        self,
        service_type: ServiceType,
        fields: Mapping[str, Any],
        files: Mapping[str, Optional[UploadedFile]],
        schema: Optional[ServiceSchema] = None,
    ) -> SubmissionRecord:
        """
        Run the full pipeline for one submission.

        Args:
            service_type: Which form this is
            fields: Submitted text fields
            files: Canonical slot name -> uploaded file (None when absent)
            schema: Override for the service type's schema (legacy routes)

        Returns:
            The stored SubmissionRecord (created_at set by the database)

        Raises:
            ValidationError, MissingFileError, InvalidMimeTypeError,
            FileTooLargeError: before any side effect
            UploadError: a blob write failed (no record written)
            PersistenceError: the append failed (no record written)
        """
        schema = schema or get_service_schema(service_type)
        submission_id = uuid.uuid4().hex
        stage = IntakeStage.VALIDATING
        uploaded: List[UploadedBlob] = []

        with log_context(submission_id=submission_id, service_type=schema.service_type.value):
            log_checkpoint("intake_received", {
                "fields": sorted(k for k in fields if not is_missing(fields.get(k))),
                "files": {
                    name: upload.describe()
                    for name, upload in files.items()
                    if upload is not None
                },
            })

            try:
                record_fields = normalize_fields(fields, schema)
                validate_fields(record_fields, schema)
                validate_files(files, schema, self.defaults)
                log_checkpoint("intake_validated")

                stage = stage.next()
                file_urls = await self._upload_all(schema, files, uploaded)

                stage = stage.next()
                record = SubmissionRecord(
                    submission_id=submission_id,
                    service_type=schema.service_type,
                    collection_path=schema.collection_path,
                    fields=record_fields,
                    file_urls=file_urls,
                )
                stored = await self.submission_repo.append(record)

            except IntakeError as e:
                log_checkpoint("intake_failed", {
                    "stage": stage.value,
                    "error_type": type(e).__name__,
                    "error": str(e),
                })
                if stage is IntakeStage.VALIDATING:
                    logger.info(f"Submission rejected: {e}")
                else:
                    logger.error(f"Submission failed during {stage.value}: {e}")
                    await self._cleanup(uploaded)
                raise

            log_checkpoint("submission_persisted", {
                "collection_path": stored.collection_path,
                "file_count": len(uploaded),
            })
            return stored

    async def _upload_all(
        self,
        schema: ServiceSchema,
        files: Mapping[str, Optional[UploadedFile]],
        uploaded: List[UploadedBlob],
    ) -> Dict[str, Optional[str]]:
        """Upload every present slot in order; absent optional slots map to None."""
        file_urls: Dict[str, Optional[str]] = {}

        for slot in schema.file_slots:
            upload = files.get(slot.name)
            if upload is None or upload.is_empty:
                file_urls[slot.url_field] = None
                continue

            with log_context(slot=slot.name):
                blob = await self.uploader.upload(upload)
                uploaded.append(blob)
                file_urls[slot.url_field] = blob.url
                log_checkpoint("blob_uploaded", {"blob_name": blob.blob_name})

        return file_urls

    async def _cleanup(self, uploaded: List[UploadedBlob]) -> None:
        """Delete blobs left behind by a failed submission, if enabled."""
        if not uploaded:
            return

        if not self.defaults.cleanup_orphaned_blobs:
            logger.warning(
                f"Leaving {len(uploaded)} orphaned blob(s): "
                f"{', '.join(b.blob_name for b in uploaded)}"
            )
            return

        for blob in uploaded:
            try:
                deleted = await self.uploader.delete(blob.blob_name)
            except Exception as e:
                logger.warning(f"Cleanup of {blob.blob_name} failed: {e}")
                continue
            if not deleted:
                logger.warning(f"Cleanup could not delete {blob.blob_name}")


__all__ = [
    "normalize_fields",
    "IntakeService",
]
