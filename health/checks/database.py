# ============================================================================
# DATABASE HEALTH CHECKS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Infrastructure - PostgreSQL and schema checks
# PURPOSE: Database connectivity and submissions table availability
# CREATED: 18 OCT 2026
# ============================================================================
"""
Database Health Checks

PostgreSQL checks (priority 30):
- PostgresCheck: SELECT 1 through the application pool
- SubmissionsTableCheck: intake.submissions has been deployed
"""

import logging

from health.core import HealthCheckPlugin, HealthCheckResult
from health.registry import register_check

logger = logging.getLogger(__name__)


@register_check(category="database")
class PostgresCheck(HealthCheckPlugin):
    """PostgreSQL connectivity health check."""

    name = "postgres"
    timeout_seconds = 5.0

    async def check(self) -> HealthCheckResult:
        from repositories.database import get_pool

        try:
            pool = await get_pool()
            async with pool.connection() as conn:
                result = await conn.execute("SELECT 1")
                row = await result.fetchone()
        except Exception as e:
            return HealthCheckResult.unhealthy(message=f"PostgreSQL connection failed: {e}")

        if not row or row[0] != 1:
            return HealthCheckResult.unhealthy(message="PostgreSQL query returned unexpected result")

        return HealthCheckResult.healthy(message="PostgreSQL connected")


@register_check(category="database")
class SubmissionsTableCheck(HealthCheckPlugin):
    """Submissions table deployed (run scripts/deploy_schema.py if not)."""

    name = "submissions_table"
    timeout_seconds = 5.0

    async def check(self) -> HealthCheckResult:
        from repositories import SubmissionRepository
        from repositories.database import get_pool, schema_name, table_name

        qualified = f"{schema_name()}.{table_name()}"
        try:
            exists = await SubmissionRepository(await get_pool()).table_exists()
        except Exception as e:
            return HealthCheckResult.unhealthy(message=f"Table lookup failed: {e}")

        if not exists:
            return HealthCheckResult.unhealthy(
                message=f"Table {qualified} not found",
                hint="Run scripts/deploy_schema.py or set AUTO_BOOTSTRAP_SCHEMA=true",
            )

        return HealthCheckResult.healthy(message=f"Table {qualified} present")
