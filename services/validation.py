# ============================================================================
# SUBMISSION VALIDATION
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Service - Field and file checks run before any side effect
# PURPOSE: Report the first missing field or invalid file of a submission
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Submission Validation

Two pure checks, run in this order before anything is uploaded:

    validate_fields  -> ValidationError on the first missing required field
    validate_files   -> MissingFileError / InvalidMimeTypeError /
                        FileTooLargeError on the first bad slot

Only the first violation is reported. Both raise; neither returns a
result object.
"""

from typing import Any, Mapping, Optional

from core.config import IntakeDefaults, get_defaults
from core.errors import (
    ValidationError,
    MissingFileError,
    InvalidMimeTypeError,
    FileTooLargeError,
)
from core.models import ServiceSchema, UploadedFile


def coerce_field(value: Any) -> Optional[str]:
    """String coercion applied to form values (None stays None)."""
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def is_missing(value: Any) -> bool:
    """Absent or empty string after coercion. Whitespace counts as present."""
    coerced = coerce_field(value)
    return coerced is None or coerced == ""


def validate_fields(fields: Mapping[str, Any], schema: ServiceSchema) -> None:
    """
    Check required fields in schema order.

    Raises:
        ValidationError: for the first absent or empty field
    """
    for field_name in schema.required_fields:
        if is_missing(fields.get(field_name)):
            raise ValidationError(field_name)


def validate_files(
    files: Mapping[str, Optional[UploadedFile]],
    schema: ServiceSchema,
    defaults: Optional[IntakeDefaults] = None,
) -> None:
    """
    Check every file slot in schema order.

    Args:
        files: Canonical slot name -> uploaded file (or None)
        schema: Service schema whose slots are checked
        defaults: Size ceiling and allowed types (environment by default)

    Raises:
        MissingFileError: required slot absent or zero bytes
        InvalidMimeTypeError: content type outside the allowed set
        FileTooLargeError: file above the per-file ceiling
    """
    defaults = defaults or get_defaults().intake

    for slot in schema.file_slots:
        upload = files.get(slot.name)

        if upload is None or upload.is_empty:
            if slot.required:
                raise MissingFileError(slot.name)
            continue

        if not defaults.is_allowed_type(upload.content_type):
            raise InvalidMimeTypeError(slot.name, upload.content_type)

        if upload.size > defaults.max_file_size_bytes:
            raise FileTooLargeError(slot.name, upload.size, defaults.max_file_size_bytes)


__all__ = [
    "coerce_field",
    "is_missing",
    "validate_fields",
    "validate_files",
]
