# ============================================================================
# GOVSERVICE INTAKE - MAIN APPLICATION
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core - FastAPI application entry point
# PURPOSE: Wire storage, database and routes into the intake API
# CREATED: 18 OCT 2026
# ============================================================================
"""
GovService Intake Main Application

FastAPI application that:
1. Accepts research and internship permit submissions
2. Uploads attachments to Azure Blob Storage
3. Appends one submission record per form to PostgreSQL

Usage:
    uvicorn main:app --host 0.0.0.0 --port 3000
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from __version__ import __version__, BUILD_DATE
from api import router as intake_router, set_intake_services
from core.config import get_defaults
from core.logging import configure_logging, get_logger
from infrastructure import BlobRepository, DatabaseInitializer, set_blob_repository
from repositories import SubmissionRepository, init_pool, close_pool
from services import FileUploader, IntakeService

# Health check system
from health import health_router, get_registry

configure_logging(
    level=get_defaults().server.log_level,
    json_output=get_defaults().server.json_logs,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Creates the process-wide blob repository and database pool on startup,
    injects them into the intake service, and closes the pool on shutdown.
    """
    defaults = get_defaults()
    logger.info(f"Starting GovService Intake v{__version__} (Build {BUILD_DATE})")

    # Blob storage
    blob_repo = BlobRepository.from_defaults(defaults.storage)
    set_blob_repository(blob_repo)

    # Database pool
    pool = await init_pool()
    logger.info("Database pool initialized")

    if defaults.database.auto_bootstrap_schema:
        logger.info("Auto-bootstrap enabled, deploying schema...")
        result = await DatabaseInitializer(pool, defaults.database).initialize_all()
        if result.success:
            logger.info("Schema bootstrap completed successfully")
        else:
            logger.warning(f"Schema bootstrap had issues: {result.errors}")

    # Intake pipeline
    intake_service = IntakeService(
        submission_repo=SubmissionRepository(pool),
        uploader=FileUploader(blob_repo),
        defaults=defaults.intake,
    )
    set_intake_services(intake_service=intake_service)
    logger.info(
        f"Intake service ready (max file size {defaults.intake.max_file_size_mb:.0f}MB, "
        f"cleanup_orphaned_blobs={defaults.intake.cleanup_orphaned_blobs})"
    )

    # Health checks
    import health.checks  # Register all health check plugins
    logger.info(f"Health checks initialized ({len(get_registry())} checks registered)")

    yield

    logger.info("Shutting down GovService Intake...")
    set_intake_services(intake_service=None)
    await close_pool()
    logger.info("GovService Intake stopped")


# Create FastAPI app
app = FastAPI(
    title="GovService Intake",
    description="Research and internship permit application intake",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Health check routes (no prefix - /livez, /readyz, /health)
app.include_router(health_router)

# Intake routes (/api/penelitian, /api/magang, /api/submit-form)
app.include_router(intake_router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness text kept for existing monitors."""
    return "Hey this is my API running"


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    server = get_defaults().server

    uvicorn.run(
        "main:app",
        host=server.host,
        port=server.port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
