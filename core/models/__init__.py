# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Model exports
# PURPOSE: Central export point for intake models and schemas
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models for data moving through the pipeline and frozen
dataclasses for per-service configuration.
"""

from core.models.service_schema import (
    FileSlot,
    ServiceSchema,
    RESEARCH_SCHEMA,
    INTERNSHIP_SCHEMA,
    LEGACY_RESEARCH_SCHEMA,
    SERVICE_SCHEMAS,
    get_service_schema,
)
from core.models.submission import UploadedFile, SubmissionRecord

__all__ = [
    # Schema
    "FileSlot",
    "ServiceSchema",
    "RESEARCH_SCHEMA",
    "INTERNSHIP_SCHEMA",
    "LEGACY_RESEARCH_SCHEMA",
    "SERVICE_SCHEMAS",
    "get_service_schema",
    # Submission
    "UploadedFile",
    "SubmissionRecord",
]
