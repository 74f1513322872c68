# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Infrastructure - Health check plugin system
# PURPOSE: Container probes and dependency health monitoring
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Module

Plugin-based health checks for the intake service:
- /livez: Process alive
- /readyz: Required checks pass (storage, database)
- /health: Every check with details

Checks register themselves when health.checks is imported (main.py does
this during startup).
"""

from health.core import (
    HealthStatus,
    HealthCheckResult,
    HealthCheckPlugin,
    HealthCheckCategory,
)
from health.registry import (
    HealthCheckRegistry,
    register_check,
    get_registry,
)
from health.executor import HealthCheckExecutor
from health.router import health_router

__all__ = [
    # Core types
    "HealthStatus",
    "HealthCheckResult",
    "HealthCheckPlugin",
    "HealthCheckCategory",
    # Registry
    "HealthCheckRegistry",
    "register_check",
    "get_registry",
    # Executor
    "HealthCheckExecutor",
    # Router
    "health_router",
]
