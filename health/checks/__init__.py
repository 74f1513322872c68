# ============================================================================
# HEALTH CHECK PLUGINS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Infrastructure - Health check plugin registration
# PURPOSE: Importing this package registers every check
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Plugins

Registered on import:
- blob_storage (infrastructure, 20)
- postgres (database, 30)
- submissions_table (database, 30)
"""

from health.checks.storage import BlobStorageCheck
from health.checks.database import PostgresCheck, SubmissionsTableCheck

__all__ = [
    "BlobStorageCheck",
    "PostgresCheck",
    "SubmissionsTableCheck",
]
