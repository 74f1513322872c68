# ============================================================================
# INTAKE ROUTES
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core - Form submission HTTP endpoints
# PURPOSE: Parse multipart submissions and map pipeline errors to responses
# CREATED: 18 OCT 2026
# ============================================================================
"""
Intake Routes

HTTP endpoints for government-service form submissions. Every endpoint
parses the multipart body, resolves file parts to their canonical slot
and hands off to IntakeService. The service type is the only thing that
differs between endpoints.

Endpoints:
- POST /api/penelitian   - Research permit submission
- POST /api/magang       - Internship permit submission
- POST /api/submit-form  - Legacy research endpoint (old slot names)

Responses:
- 200 {"message": "Data berhasil disimpan"}
- 400 {"message": "<field> is required" | "File <slot> is required" | ...}
- 413 {"message": "File <slot> exceeds the maximum size of N MB"}
- 500 {"message": "Terjadi kesalahan saat menyimpan data"}
"""

from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.schemas import SUCCESS_MESSAGE, MessageResponse, INTAKE_ERROR_RESPONSES
from core.config import get_defaults
from core.contracts import ServiceType
from core.errors import GENERIC_FAILURE_MESSAGE, IntakeError
from core.logging import get_logger, ComponentType
from core.models import LEGACY_RESEARCH_SCHEMA, ServiceSchema, UploadedFile, get_service_schema

logger = get_logger(__name__, ComponentType.API)

router = APIRouter(prefix="/api", tags=["Intake"])


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

_intake_service = None


def set_intake_services(intake_service):
    """Called by main.py at startup to inject the intake service."""
    global _intake_service
    _intake_service = intake_service


def _get_intake_service():
    """Get the intake service, raising 503 if not initialized."""
    if _intake_service is None:
        raise HTTPException(503, "Intake service not initialized")
    return _intake_service


# ============================================================================
# MULTIPART PARSING
# ============================================================================

async def parse_submission(
    request: Request,
    schema: ServiceSchema,
) -> Tuple[Dict[str, Any], Dict[str, Optional[UploadedFile]]]:
    """
    Split a form body into text fields and slot files.

    File parts are matched to slots by canonical name or legacy alias; the
    first file per slot wins and unknown file parts are ignored. Each file
    is read up to one byte past the size ceiling, enough for the validator
    to reject it without buffering the whole body.
    """
    read_limit = get_defaults().intake.max_file_size_bytes + 1
    form = await request.form()

    fields: Dict[str, Any] = {}
    files: Dict[str, Optional[UploadedFile]] = {slot.name: None for slot in schema.file_slots}

    try:
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                slot = schema.resolve_slot(key)
                if slot is None:
                    logger.debug(f"Ignoring unexpected file part '{key}'")
                    continue
                if files[slot.name] is not None:
                    continue
                files[slot.name] = UploadedFile(
                    filename=value.filename or slot.name,
                    content_type=value.content_type,
                    data=await value.read(read_limit),
                )
            else:
                fields.setdefault(key, value)
    finally:
        await form.close()

    return fields, files


# ============================================================================
# SHARED HANDLER
# ============================================================================

async def handle_submission(
    service_type: ServiceType,
    request: Request,
    schema: Optional[ServiceSchema] = None,
) -> JSONResponse:
    """Run one submission through the pipeline and build the response."""
    svc = _get_intake_service()
    schema = schema or get_service_schema(service_type)

    try:
        fields, files = await parse_submission(request, schema)
        logger.debug(
            "Submission received",
            extra={
                "fields": fields,
                "files": {k: v.describe() for k, v in files.items() if v is not None},
            },
        )
        await svc.submit(service_type, fields, files, schema=schema)
    except IntakeError as e:
        return JSONResponse(status_code=e.status_code, content={"message": e.public_message})
    except StarletteHTTPException as e:
        # Unparseable multipart body
        logger.info(f"Rejected {service_type.value} submission: {e.detail}")
        return JSONResponse(status_code=e.status_code, content={"message": e.detail})
    except Exception as e:
        logger.exception(f"Unexpected error handling {service_type.value} submission: {e}")
        return JSONResponse(status_code=500, content={"message": GENERIC_FAILURE_MESSAGE})

    return JSONResponse(status_code=200, content={"message": SUCCESS_MESSAGE})


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "/penelitian",
    response_model=MessageResponse,
    responses=INTAKE_ERROR_RESPONSES,
    summary="Submit a research permit application",
)
async def submit_research(request: Request):
    """
    Research permit (penelitian) submission.

    Multipart fields: name, researcherName, address, inputValue, institution,
    occupation, judulPenelitian, researchField, tujuanPenelitian,
    supervisorName, teamMembers, statusPenelitian, researchPeriod,
    researchLocation, optional letterNumber.

    File parts: suratPengantarFile, proposalFile, ktpFile.
    """
    return await handle_submission(ServiceType.RESEARCH, request)


@router.post(
    "/magang",
    response_model=MessageResponse,
    responses=INTAKE_ERROR_RESPONSES,
    summary="Submit an internship permit application",
)
async def submit_internship(request: Request):
    """
    Internship permit (magang) submission.

    Multipart fields: letterNumber, name (or applicantsName), address,
    inputValue, institution, occupation, judul, supervisorName,
    tujuanPermohonan, teamMembers, statusPermohonan, period, location.

    File parts: suratPengantarFile, proposalFile, ktpFile.
    """
    return await handle_submission(ServiceType.INTERNSHIP, request)


@router.post(
    "/submit-form",
    response_model=MessageResponse,
    responses=INTAKE_ERROR_RESPONSES,
    summary="Submit a research permit application (legacy path)",
    deprecated=True,
)
async def submit_form_legacy(request: Request):
    """
    Legacy research endpoint.

    Accepts the original part names (suratPermohonan, proposal, fotocopy).
    Records keep the original suratPermohonanUrl key.
    Use POST /api/penelitian instead.
    """
    return await handle_submission(ServiceType.RESEARCH, request, LEGACY_RESEARCH_SCHEMA)


__all__ = [
    "router",
    "set_intake_services",
    "parse_submission",
    "handle_submission",
]
