from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from prospect_intel.database.models import ScanJobRecord
from prospect_intel.database.repositories.scan_job_repository import ScanJobRepository

_GET_CONNECTION = "prospect_intel.database.repositories.scan_job_repository.get_connection"


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


def _mock_claim_connection(row: dict | None) -> MagicMock:
    mock_cursor = MagicMock()
    mock_cursor.fetchone.return_value = row
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn


class TestClaimNextJob:
    def test_claims_pending_job(self) -> None:
        mock_conn = _mock_claim_connection({"id": 7, "scan_id": "scan-7"})

        job = ScanJobRepository().claim_next_job(mock_conn)

        assert job == ScanJobRecord(id=7, scan_id="scan-7", status="processing")
        update_sql, params = mock_conn.execute.call_args.args
        assert "SET status = 'processing'" in update_sql
        assert params == (7,)
        mock_conn.commit.assert_called_once()

    def test_returns_none_when_queue_empty(self) -> None:
        mock_conn = _mock_claim_connection(None)

        assert ScanJobRepository().claim_next_job(mock_conn) is None
        mock_conn.execute.assert_not_called()
        mock_conn.commit.assert_called_once()


class TestEnqueue:
    @patch(_GET_CONNECTION)
    def test_inserts_pending_job(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        now = datetime(2024, 5, 1, tzinfo=timezone.utc)
        mock_cursor.fetchone.return_value = {
            "id": 3,
            "scan_id": "scan-3",
            "status": "pending",
            "created_at": now,
            "updated_at": now,
        }

        job = ScanJobRepository().enqueue("scan-3")

        assert job.id == 3
        assert job.status == "pending"
        assert mock_cursor.execute.call_args.args[1] == ("scan-3",)
        mock_conn.commit.assert_called_once()

    @patch(_GET_CONNECTION)
    def test_raises_when_nothing_returned(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(RuntimeError, match="Failed to enqueue scan scan-3"):
            ScanJobRepository().enqueue("scan-3")


class TestMarkDoneAndFailed:
    @patch(_GET_CONNECTION)
    def test_mark_done(self, mock_get_conn: MagicMock) -> None:
        mock_conn, _cursor = _mock_connection(mock_get_conn)

        ScanJobRepository().mark_done(5)

        sql, params = mock_conn.execute.call_args.args
        assert "status = 'done'" in sql
        assert params == (5,)
        mock_conn.commit.assert_called_once()

    @patch(_GET_CONNECTION)
    def test_mark_failed_stores_error(self, mock_get_conn: MagicMock) -> None:
        mock_conn, _cursor = _mock_connection(mock_get_conn)

        ScanJobRepository().mark_failed(5, "No screenshots found")

        sql, params = mock_conn.execute.call_args.args
        assert "status = 'failed'" in sql
        assert params == ("No screenshots found", 5)


class TestFindById:
    @patch(_GET_CONNECTION)
    def test_returns_record(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = {
            "id": 9,
            "scan_id": "scan-9",
            "status": "failed",
            "error_message": "boom",
            "locked_at": None,
            "created_at": None,
            "updated_at": None,
        }

        job = ScanJobRepository().find_by_id(9)

        assert job is not None
        assert job.error_message == "boom"

    @patch(_GET_CONNECTION)
    def test_returns_none_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        assert ScanJobRepository().find_by_id(404) is None
