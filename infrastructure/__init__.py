# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Infrastructure - Database and storage operations
# PURPOSE: Schema deployment and Azure Blob Storage operations
# CREATED: 18 OCT 2026
# ============================================================================
"""
Infrastructure module for the intake service.

Provides:
- DatabaseInitializer: Bootstrap the intake schema
- BlobRepository: Azure Blob Storage writes and public URLs

Usage:
    from infrastructure import BlobRepository, DatabaseInitializer

    repo = BlobRepository.from_defaults()
    url = repo.put("uuid_file.pdf", data, "application/pdf")
"""

from infrastructure.database_initializer import (
    DatabaseInitializer,
    InitializationResult,
    StepResult,
)
from infrastructure.storage import (
    BlobRepository,
    get_blob_repository,
    set_blob_repository,
)

__all__ = [
    "DatabaseInitializer",
    "InitializationResult",
    "StepResult",
    "BlobRepository",
    "get_blob_repository",
    "set_blob_repository",
]
