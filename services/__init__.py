# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core - Business logic layer
# PURPOSE: Validation, upload and intake pipeline services
# CREATED: 18 OCT 2026
# ============================================================================
"""
Services Module

Business logic for form intake.
Services coordinate between blob storage and the submission repository.

Usage:
    from services import IntakeService, FileUploader

    service = IntakeService(SubmissionRepository(pool), FileUploader(blob_repo))
    record = await service.submit(ServiceType.RESEARCH, fields, files)
"""

from .validation import validate_fields, validate_files
from .uploader import FileUploader, UploadedBlob
from .intake_service import IntakeService

__all__ = [
    "validate_fields",
    "validate_files",
    "FileUploader",
    "UploadedBlob",
    "IntakeService",
]
