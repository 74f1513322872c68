# ============================================================================
# HEALTH CHECK EXECUTOR
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Infrastructure - Concurrent health check execution
# PURPOSE: Execute health checks with timeouts and aggregation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Executor

Runs checks concurrently, each bounded by its own timeout_seconds and
by the executor's overall timeout. A check that raises or times out is
reported unhealthy; the executor itself never raises.
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional

from health.core import (
    HealthStatus,
    HealthCheckResult,
    HealthCheckPlugin,
    AggregatedHealthResult,
)
from health.registry import HealthCheckRegistry, get_registry

logger = logging.getLogger(__name__)


class HealthCheckExecutor:
    """Executes registered health checks."""

    def __init__(
        self,
        registry: Optional[HealthCheckRegistry] = None,
        overall_timeout: float = 30.0,
    ):
        self.registry = registry or get_registry()
        self.overall_timeout = overall_timeout

    async def execute_all(self) -> AggregatedHealthResult:
        """Execute every registered check."""
        return await self._execute(self.registry.get_checks_by_priority())

    async def execute_required(self) -> AggregatedHealthResult:
        """Execute only checks required for /readyz."""
        return await self._execute(self.registry.get_required_checks())

    async def execute_single(self, name: str) -> Optional[HealthCheckResult]:
        """Execute one check by name (None if not registered)."""
        check = self.registry.get(name)
        if check is None:
            return None
        return await self._run_check(check, self.overall_timeout)

    async def _execute(self, checks: List[HealthCheckPlugin]) -> AggregatedHealthResult:
        start_time = time.monotonic()

        outcomes = await asyncio.gather(
            *(self._run_check(check, self.overall_timeout) for check in checks)
        )
        results: Dict[str, HealthCheckResult] = {
            check.name: outcome for check, outcome in zip(checks, outcomes)
        }

        return AggregatedHealthResult(
            status=HealthStatus.aggregate([r.status for r in results.values()]),
            checks=results,
            total_duration_ms=(time.monotonic() - start_time) * 1000,
        )

    async def _run_check(
        self,
        check: HealthCheckPlugin,
        remaining_timeout: float,
    ) -> HealthCheckResult:
        timeout = min(check.timeout_seconds, remaining_timeout)
        start_time = time.monotonic()

        try:
            result = await asyncio.wait_for(check.check(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Health check {check.name} timed out after {timeout}s")
            result = HealthCheckResult.unhealthy(f"Timed out after {timeout}s")
        except Exception as e:
            logger.warning(f"Health check {check.name} raised: {e}")
            result = HealthCheckResult.from_exception(e)

        result.duration_ms = (time.monotonic() - start_time) * 1000
        return result


__all__ = ["HealthCheckExecutor"]
