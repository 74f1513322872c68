# ============================================================================
# STORAGE HEALTH CHECKS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Infrastructure - Blob storage connectivity
# PURPOSE: Verify the attachment container is reachable
# CREATED: 18 OCT 2026
# ============================================================================
"""
Storage Health Checks

BlobStorageCheck: the configured container exists and is reachable.
"""

import asyncio
import logging

from health.core import HealthCheckPlugin, HealthCheckResult
from health.registry import register_check

logger = logging.getLogger(__name__)


@register_check(category="infrastructure")
class BlobStorageCheck(HealthCheckPlugin):
    """Azure Blob Storage container reachability."""

    name = "blob_storage"
    timeout_seconds = 10.0

    async def check(self) -> HealthCheckResult:
        from infrastructure.storage import get_blob_repository

        try:
            repo = get_blob_repository()
        except ValueError as e:
            return HealthCheckResult.degraded(
                message="Blob storage not configured",
                hint=str(e),
            )

        try:
            loop = asyncio.get_running_loop()
            exists = await loop.run_in_executor(None, repo.container_exists)
        except Exception as e:
            return HealthCheckResult.unhealthy(
                message=f"Blob storage connection failed: {e}",
                **repo.describe(),
            )

        if not exists:
            return HealthCheckResult.unhealthy(
                message=f"Container '{repo.container}' does not exist",
                **repo.describe(),
            )

        return HealthCheckResult.healthy(message="Blob storage connected", **repo.describe())
