# ============================================================================
# SUBMISSION REPOSITORY
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core - Append-only submission document store
# PURPOSE: Database access for the intake.submissions table
# CREATED: 18 OCT 2026
# ============================================================================
"""
Submission Repository

Append-only access to stored form submissions. Each submission is one
row holding the flat record as JSONB, keyed by its collection path
(e.g. pelayanan/penelitian/data). Rows are never updated or deleted.

created_at is filled by the database (DEFAULT now()), never by the
caller or the submitted form.
"""

import logging

from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from core.errors import PersistenceError
from core.models import SubmissionRecord
from .database import schema_name, submissions_table, table_name

logger = logging.getLogger(__name__)


class SubmissionRepository:
    """Repository for SubmissionRecord documents."""

    def __init__(self, pool: AsyncConnectionPool):
        self.pool = pool

    async def append(self, record: SubmissionRecord) -> SubmissionRecord:
        """
        Append one submission to its collection.

        Args:
            record: Record with submission_id, collection_path and document
                fields set; created_at is ignored

        Returns:
            The stored record with the server-assigned created_at

        Raises:
            PersistenceError: The insert failed (nothing was written)
        """
        query = sql.SQL(
            """
            INSERT INTO {table} (
                submission_id, collection_path, service_type, record
            ) VALUES (
                %(submission_id)s, %(collection_path)s, %(service_type)s, %(record)s
            )
            RETURNING submission_id, created_at
            """
        ).format(table=submissions_table())

        try:
            # Row factory is per cursor; pooled connections keep tuple rows
            async with self.pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(
                        query,
                        {
                            "submission_id": record.submission_id,
                            "collection_path": record.collection_path,
                            "service_type": record.service_type.value,
                            "record": Jsonb(record.to_document()),
                        },
                    )
                    row = await cur.fetchone()
        except Exception as e:
            logger.error(
                f"Append to {record.collection_path} failed "
                f"for {record.submission_id}: {e}"
            )
            raise PersistenceError(
                f"Failed to append submission to {record.collection_path}: {e}",
                collection_path=record.collection_path,
            ) from e

        logger.debug(f"Appended submission {row['submission_id']} to {record.collection_path}")
        return record.model_copy(update={"created_at": row["created_at"]})

    async def table_exists(self) -> bool:
        """Check that the submissions table has been deployed."""
        async with self.pool.connection() as conn:
            result = await conn.execute(
                """
                SELECT EXISTS (
                    SELECT 1 FROM information_schema.tables
                    WHERE table_schema = %s AND table_name = %s
                )
                """,
                (schema_name(), table_name()),
            )
            row = await result.fetchone()
            return bool(row[0])


__all__ = ["SubmissionRepository"]
