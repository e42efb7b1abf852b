from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from prospect_intel.database.connection import get_connection
from prospect_intel.pipeline.exceptions import ScanNotFoundError
from prospect_intel.pipeline.states import PipelineState, ScanStage
from prospect_intel.storage.base import BaseStatusStore


class ScanStatusRepository(BaseStatusStore):
    """Status store backed by the scan_status table, one row per scan."""

    def put_status(self, scan_id: str, state: PipelineState) -> None:
        """Upsert the full state for ``scan_id``."""
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO scan_status (
                    scan_id, stage, progress, message, started_at, completed_at,
                    error_message, metadata, estimated_completion_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, NOW())
                ON CONFLICT (scan_id) DO UPDATE SET
                    stage = EXCLUDED.stage,
                    progress = EXCLUDED.progress,
                    message = EXCLUDED.message,
                    started_at = EXCLUDED.started_at,
                    completed_at = EXCLUDED.completed_at,
                    error_message = EXCLUDED.error_message,
                    metadata = EXCLUDED.metadata,
                    estimated_completion_at = EXCLUDED.estimated_completion_at,
                    updated_at = NOW()
                """,
                (
                    scan_id,
                    state.stage.value,
                    state.progress,
                    state.message,
                    state.started_at,
                    state.completed_at,
                    state.error_message,
                    Jsonb(state.metadata),
                    state.estimated_completion_at,
                ),
            )
            conn.commit()

    def get_status(self, scan_id: str) -> PipelineState:
        """Load the last written state.

        Raises:
            ScanNotFoundError: if no row exists for ``scan_id``.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT stage, progress, message, started_at, completed_at,
                           error_message, metadata, estimated_completion_at
                    FROM scan_status
                    WHERE scan_id = %s
                    """,
                    (scan_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise ScanNotFoundError(f"No status recorded for scan {scan_id}")
        return _state_from_row(row)

    def delete(self, scan_id: str) -> None:
        with get_connection() as conn:
            conn.execute("DELETE FROM scan_status WHERE scan_id = %s", (scan_id,))
            conn.commit()


def _state_from_row(row: dict[str, Any]) -> PipelineState:
    return PipelineState(
        stage=ScanStage(row["stage"]),
        progress=row["progress"],
        message=row["message"],
        started_at=row["started_at"],
        completed_at=row["completed_at"],
        error_message=row["error_message"],
        metadata=row["metadata"] or {},
        estimated_completion_at=row["estimated_completion_at"],
    )
