from typing import Any

import psycopg
from psycopg.rows import dict_row

from prospect_intel.database.connection import get_connection
from prospect_intel.database.models import ScanJobRecord


class ScanJobRepository:
    """Database operations for the scan_jobs queue table."""

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> ScanJobRecord | None:
        """Claim the oldest pending job using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, scan_id
                FROM scan_jobs
                WHERE status = 'pending'
                ORDER BY created_at, id
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """
            )
            row = cur.fetchone()

        if row is None:
            conn.commit()
            return None

        conn.execute(
            """
            UPDATE scan_jobs
            SET status = 'processing', locked_at = NOW(), updated_at = NOW()
            WHERE id = %s
            """,
            (row["id"],),
        )
        conn.commit()

        return ScanJobRecord(id=row["id"], scan_id=row["scan_id"], status="processing")

    def enqueue(self, scan_id: str) -> ScanJobRecord:
        """Insert a pending job for ``scan_id``."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO scan_jobs (scan_id, status)
                    VALUES (%s, 'pending')
                    RETURNING id, scan_id, status, created_at, updated_at
                    """,
                    (scan_id,),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError(f"Failed to enqueue scan {scan_id}")
        return ScanJobRecord(
            id=row["id"],
            scan_id=row["scan_id"],
            status=row["status"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def mark_done(self, job_id: int) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE scan_jobs
                SET status = 'done', updated_at = NOW()
                WHERE id = %s
                """,
                (job_id,),
            )
            conn.commit()

    def mark_failed(self, job_id: int, error: str) -> None:
        """Mark a job as failed. Failed scans are not retried."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE scan_jobs
                SET status = 'failed', error_message = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (error, job_id),
            )
            conn.commit()

    def find_by_id(self, job_id: int) -> ScanJobRecord | None:
        """Find a job by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, scan_id, status, error_message,
                           locked_at, created_at, updated_at
                    FROM scan_jobs
                    WHERE id = %s
                    """,
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return ScanJobRecord(
            id=row["id"],
            scan_id=row["scan_id"],
            status=row["status"],
            error_message=row["error_message"],
            locked_at=row["locked_at"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
