# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Infrastructure - FastAPI health check endpoints
# PURPOSE: Container probes and health monitoring endpoints
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Router

Endpoints:
    GET /livez   - Liveness probe. Always 200 while the process responds.
    GET /readyz  - Readiness probe. 503 if any required check is unhealthy.
    GET /health  - All checks. 200 healthy, 206 degraded, 503 unhealthy.
    GET /health/{check_name} - Single check status
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from health.core import HealthStatus
from health.registry import get_registry
from health.executor import HealthCheckExecutor
from __version__ import __version__, BUILD_DATE

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["Health"])


@health_router.get("/livez")
async def liveness_probe():
    """Liveness probe. No external dependencies."""
    return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}


@health_router.get("/readyz")
async def readiness_probe():
    """
    Readiness probe.

    Runs the checks marked required_for_ready with a short timeout.
    """
    registry = get_registry()

    if len(registry) == 0:
        return {"status": "ready", "message": "No checks registered"}

    executor = HealthCheckExecutor(registry=registry, overall_timeout=10.0)
    result = await executor.execute_required()

    if result.status == HealthStatus.UNHEALTHY:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "checks": {
                    name: check.to_dict()
                    for name, check in result.checks.items()
                    if check.status == HealthStatus.UNHEALTHY
                },
                "total_duration_ms": round(result.total_duration_ms, 2),
            },
        )

    return {
        "status": "ready",
        "checks_passed": len(result.checks),
        "total_duration_ms": round(result.total_duration_ms, 2),
    }


@health_router.get("/health")
async def full_health_check():
    """Run every registered check and report detailed status."""
    registry = get_registry()

    if len(registry) == 0:
        return {"status": "healthy", "message": "No checks registered", "checks": {}}

    executor = HealthCheckExecutor(registry=registry, overall_timeout=30.0)
    result = await executor.execute_all()

    body = result.to_dict()
    body["version"] = __version__
    body["build_date"] = BUILD_DATE

    return JSONResponse(status_code=result.status.http_code, content=body)


@health_router.get("/health/{check_name}")
async def single_health_check(check_name: str):
    """Run a single health check by name."""
    result = await HealthCheckExecutor(registry=get_registry()).execute_single(check_name)

    if result is None:
        return JSONResponse(
            status_code=404,
            content={"error": f"Health check not found: {check_name}"},
        )

    return JSONResponse(status_code=result.status.http_code, content=result.to_dict())


__all__ = ["health_router"]
