# ============================================================================
# SUBMISSION MODELS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Domain model - Uploaded files and persisted submission records
# PURPOSE: Data carried through the intake pipeline
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Submission Models

UploadedFile is transient: it lives for one request and only its public
URL outlives the upload. SubmissionRecord is what lands in the document
store, one row per accepted submission.

Maps to: intake.submissions
"""

import os
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from core.contracts import ServiceType


class UploadedFile(BaseModel):
    """A file part received with a submission."""

    filename: str = Field(..., description="Original client-side filename")
    content_type: Optional[str] = Field(default=None, description="MIME type reported by the client")
    data: bytes = Field(default=b"", repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_empty(self) -> bool:
        return not self.data

    @property
    def basename(self) -> str:
        """Filename without any client-side directory components."""
        name = os.path.basename(self.filename.replace("\\", "/"))
        return name or "upload"

    def describe(self) -> Dict[str, Any]:
        """Loggable summary (never the bytes)."""
        return {
            "filename": self.filename,
            "content_type": self.content_type,
            "size": self.size,
        }


class SubmissionRecord(BaseModel):
    """
    One accepted form submission.

    Field values and file URLs are stored flat in a single JSONB document.
    created_at is assigned by the database at insert time and is only
    populated on records read back from storage.
    """

    submission_id: Optional[str] = Field(default=None, max_length=64)
    service_type: ServiceType
    collection_path: str = Field(..., max_length=200)
    fields: Dict[str, Optional[str]] = Field(default_factory=dict)
    file_urls: Dict[str, Optional[str]] = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}

    def to_document(self) -> Dict[str, Optional[str]]:
        """Flatten to the stored document: field values then file URLs."""
        document: Dict[str, Optional[str]] = dict(self.fields)
        document.update(self.file_urls)
        return document


__all__ = [
    "UploadedFile",
    "SubmissionRecord",
]
