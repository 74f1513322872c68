# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors, and models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

from core.contracts import ServiceType, IntakeStage, ALLOWED_CONTENT_TYPES
from core.errors import (
    IntakeError,
    ValidationError,
    MissingFileError,
    InvalidMimeTypeError,
    FileTooLargeError,
    UploadError,
    PersistenceError,
)
from core.models import (
    FileSlot,
    ServiceSchema,
    UploadedFile,
    SubmissionRecord,
    get_service_schema,
)

__all__ = [
    # Enums
    "ServiceType",
    "IntakeStage",
    "ALLOWED_CONTENT_TYPES",
    # Errors
    "IntakeError",
    "ValidationError",
    "MissingFileError",
    "InvalidMimeTypeError",
    "FileTooLargeError",
    "UploadError",
    "PersistenceError",
    # Models
    "FileSlot",
    "ServiceSchema",
    "UploadedFile",
    "SubmissionRecord",
    "get_service_schema",
]
