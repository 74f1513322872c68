# ============================================================================
# DATABASE INITIALIZER - INFRASTRUCTURE AS CODE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Infrastructure - Database initialization
# PURPOSE: Bootstrap the intake schema and submissions table
# CREATED: 18 OCT 2026
# ============================================================================
"""
DatabaseInitializer - Infrastructure as Code for the intake service.

Initialization steps (all idempotent):
1. Schema creation (intake)
2. Submissions table (JSONB document per submission)
3. Collection index (collection_path, created_at)

Usage:
    initializer = DatabaseInitializer(pool)
    result = await initializer.initialize_all()

    # Dry run (show SQL without executing)
    result = await initializer.initialize_all(dry_run=True)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from psycopg import sql
from psycopg_pool import AsyncConnectionPool

from core.config import DatabaseDefaults, get_defaults

logger = logging.getLogger(__name__)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class StepResult:
    """Result of a single initialization step."""
    name: str
    status: str  # 'success', 'failed', 'skipped'
    sql: str = ""
    error: Optional[str] = None


@dataclass
class InitializationResult:
    """Complete result of database initialization."""
    schema: str
    timestamp: str
    success: bool
    dry_run: bool = False
    steps: List[StepResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "schema": self.schema,
            "timestamp": self.timestamp,
            "success": self.success,
            "dry_run": self.dry_run,
            "steps": [
                {"name": s.name, "status": s.status, "error": s.error}
                for s in self.steps
            ],
            "errors": self.errors,
        }


# ============================================================================
# INITIALIZER
# ============================================================================

class DatabaseInitializer:
    """Creates the intake schema objects from DatabaseDefaults."""

    def __init__(
        self,
        pool: Optional[AsyncConnectionPool] = None,
        defaults: Optional[DatabaseDefaults] = None,
    ):
        self.pool = pool
        self.defaults = defaults or get_defaults().database

    def generate_ddl(self) -> List[Tuple[str, sql.Composed]]:
        """Return (step_name, statement) pairs in execution order."""
        schema = sql.Identifier(self.defaults.schema)
        table = sql.Identifier(self.defaults.schema, self.defaults.table)
        index = sql.Identifier(f"idx_{self.defaults.table}_collection_created")

        return [
            (
                "create_schema",
                sql.SQL("CREATE SCHEMA IF NOT EXISTS {schema}").format(schema=schema),
            ),
            (
                "create_submissions_table",
                sql.SQL(
                    """
                    CREATE TABLE IF NOT EXISTS {table} (
                        submission_id VARCHAR(64) PRIMARY KEY,
                        collection_path VARCHAR(200) NOT NULL,
                        service_type VARCHAR(32) NOT NULL,
                        record JSONB NOT NULL,
                        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
                    )
                    """
                ).format(table=table),
            ),
            (
                "create_collection_index",
                sql.SQL(
                    "CREATE INDEX IF NOT EXISTS {index} "
                    "ON {table} (collection_path, created_at DESC)"
                ).format(index=index, table=table),
            ),
        ]

    async def initialize_all(self, dry_run: bool = False) -> InitializationResult:
        """
        Run every DDL step.

        Stops at the first failing step; later steps are reported as skipped.
        """
        result = InitializationResult(
            schema=self.defaults.schema,
            timestamp=datetime.now(timezone.utc).isoformat(),
            success=True,
            dry_run=dry_run,
        )

        if not dry_run and self.pool is None:
            raise ValueError("DatabaseInitializer needs a pool unless dry_run=True")

        failed = False
        for name, statement in self.generate_ddl():
            statement_text = statement.as_string(None)

            if dry_run or failed:
                result.steps.append(StepResult(
                    name=name,
                    status="skipped",
                    sql=statement_text,
                ))
                continue

            try:
                async with self.pool.connection() as conn:
                    await conn.execute(statement)
                result.steps.append(StepResult(name=name, status="success", sql=statement_text))
                logger.info(f"Schema step {name} complete")
            except Exception as e:
                logger.error(f"Schema step {name} failed: {e}")
                result.steps.append(StepResult(
                    name=name,
                    status="failed",
                    sql=statement_text,
                    error=str(e),
                ))
                result.errors.append(f"{name}: {e}")
                result.success = False
                failed = True

        return result


__all__ = [
    "StepResult",
    "InitializationResult",
    "DatabaseInitializer",
]
