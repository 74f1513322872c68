# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the intake service.
"""

from core.config.defaults import (
    IntakeDefaults,
    StorageDefaults,
    DatabaseDefaults,
    ServerDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "IntakeDefaults",
    "StorageDefaults",
    "DatabaseDefaults",
    "ServerDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
