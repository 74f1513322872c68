# ============================================================================
# API SCHEMAS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core - Response schemas
# PURPOSE: Pydantic models for API responses
# CREATED: 18 OCT 2026
# ============================================================================
"""
API Schemas

Every intake endpoint answers with a single message body, on success and
on failure alike.
"""

from pydantic import BaseModel, Field

SUCCESS_MESSAGE = "Data berhasil disimpan"


class MessageResponse(BaseModel):
    """Body returned by intake endpoints."""
    message: str = Field(..., description="Human-readable outcome")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": SUCCESS_MESSAGE},
                {"message": "supervisorName is required"},
                {"message": "File proposalFile must be a PDF, JPEG, or PNG"},
            ]
        }
    }


INTAKE_ERROR_RESPONSES = {
    400: {"model": MessageResponse, "description": "Missing field or invalid file"},
    413: {"model": MessageResponse, "description": "File exceeds the size ceiling"},
    500: {"model": MessageResponse, "description": "Upload or persistence failure"},
    503: {"description": "Intake service not initialized"},
}


__all__ = [
    "SUCCESS_MESSAGE",
    "MessageResponse",
    "INTAKE_ERROR_RESPONSES",
]
