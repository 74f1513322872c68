# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Foundation - Core enums shared across the intake pipeline
# PURPOSE: Define service types, pipeline stages, and accepted file types
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ServiceType, IntakeStage, ALLOWED_CONTENT_TYPES
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the form intake system.

These values cross every boundary of the pipeline:
- HTTP (route selection)
- Blob storage (content type tagging)
- PostgreSQL (service_type column)
"""

from enum import Enum


# ============================================================================
# SERVICE TYPES
# ============================================================================

class ServiceType(str, Enum):
    """
    Government service form categories.

    The value is the Indonesian service name used in routes and
    collection paths.
    """
    RESEARCH = "penelitian"      # Research permit
    INTERNSHIP = "magang"        # Internship permit


# ============================================================================
# PIPELINE STAGES
# ============================================================================

class IntakeStage(str, Enum):
    """
    Per-request intake stages.

    State transitions:
        VALIDATING -> UPLOADING -> PERSISTING -> RESPONDING

    Any failure is terminal for the request. Earlier side effects
    (uploaded blobs) are not rolled back unless cleanup is enabled.
    """
    VALIDATING = "validating"
    UPLOADING = "uploading"
    PERSISTING = "persisting"
    RESPONDING = "responding"

    def next(self) -> "IntakeStage":
        """Return the stage that follows this one."""
        order = list(IntakeStage)
        index = order.index(self)
        if index == len(order) - 1:
            raise ValueError(f"{self.value} is the final stage")
        return order[index + 1]


# ============================================================================
# FILE TYPES
# ============================================================================

ALLOWED_CONTENT_TYPES = frozenset({
    "application/pdf",
    "image/jpeg",
    "image/png",
})
