# ============================================================================
# API MODULE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API for form submissions
# CREATED: 18 OCT 2026
# ============================================================================
"""
API Module

FastAPI routes for the intake service.
"""

from .intake_routes import router, set_intake_services
from .schemas import MessageResponse, SUCCESS_MESSAGE

__all__ = [
    "router",
    "set_intake_services",
    "MessageResponse",
    "SUCCESS_MESSAGE",
]
