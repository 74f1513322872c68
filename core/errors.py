# ============================================================================
# INTAKE ERRORS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Foundation - Error taxonomy for the intake pipeline
# PURPOSE: Typed failures that routes map onto HTTP responses
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Intake Errors

Every failure the pipeline can report to a caller is an IntakeError.
Each subclass carries the HTTP status it maps to and the message the
caller sees. Storage and database failures share one generic message so
callers cannot tell them apart.

    IntakeError
    ├── ValidationError        400  "<field> is required"
    ├── MissingFileError       400  "File <slot> is required"
    ├── InvalidMimeTypeError   400  "File <slot> must be a PDF, JPEG, or PNG"
    ├── FileTooLargeError      413  "File <slot> exceeds the maximum size of <size>"
    ├── UploadError            500  generic
    └── PersistenceError       500  generic
"""

from typing import Optional

GENERIC_FAILURE_MESSAGE = "Terjadi kesalahan saat menyimpan data"


def format_size(num_bytes: int) -> str:
    """Human-readable size: "10 MB", "1.5 MB", "512 KB", "100 bytes"."""
    if num_bytes >= 1024 * 1024:
        return f"{round(num_bytes / (1024 * 1024), 1):g} MB"
    if num_bytes >= 1024:
        return f"{round(num_bytes / 1024, 1):g} KB"
    return f"{num_bytes} bytes"


class IntakeError(Exception):
    """Base exception for intake pipeline failures."""

    status_code: int = 500

    def __init__(self, message: str, public_message: Optional[str] = None):
        self.public_message = public_message or message
        super().__init__(message)


class ValidationError(IntakeError):
    """A required form field is absent or empty."""

    status_code = 400

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required")


class MissingFileError(IntakeError):
    """A required file slot has no file (or an empty one)."""

    status_code = 400

    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(f"File {slot} is required")


class InvalidMimeTypeError(IntakeError):
    """A file slot holds a content type outside the allowed set."""

    status_code = 400

    def __init__(self, slot: str, actual: Optional[str]):
        self.slot = slot
        self.actual = actual
        super().__init__(f"File {slot} must be a PDF, JPEG, or PNG")


class FileTooLargeError(IntakeError):
    """A file slot exceeds the per-file size ceiling."""

    status_code = 413

    def __init__(self, slot: str, size: int, limit: int):
        self.slot = slot
        self.size = size
        self.limit = limit
        super().__init__(f"File {slot} exceeds the maximum size of {format_size(limit)}")


class UploadError(IntakeError):
    """Blob storage write failed."""

    def __init__(self, message: str, blob_name: Optional[str] = None):
        self.blob_name = blob_name
        super().__init__(message, public_message=GENERIC_FAILURE_MESSAGE)


class PersistenceError(IntakeError):
    """Submission record append failed."""

    def __init__(self, message: str, collection_path: Optional[str] = None):
        self.collection_path = collection_path
        super().__init__(message, public_message=GENERIC_FAILURE_MESSAGE)


__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "format_size",
    "IntakeError",
    "ValidationError",
    "MissingFileError",
    "InvalidMimeTypeError",
    "FileTooLargeError",
    "UploadError",
    "PersistenceError",
]
