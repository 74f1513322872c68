# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core - Database access layer
# PURPOSE: Append-only persistence for form submissions
# CREATED: 18 OCT 2026
# ============================================================================
"""
Repositories Module

Provides database access for stored submissions.
Uses psycopg3 async with connection pooling.

Usage:
    from repositories import SubmissionRepository, get_pool

    pool = await get_pool()
    repo = SubmissionRepository(pool)
    stored = await repo.append(record)
"""

from .database import get_pool, init_pool, close_pool
from .submission_repo import SubmissionRepository

__all__ = [
    "get_pool",
    "init_pool",
    "close_pool",
    "SubmissionRepository",
]
