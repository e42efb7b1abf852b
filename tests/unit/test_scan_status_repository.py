from unittest.mock import MagicMock, patch

import pytest
from psycopg.types.json import Jsonb

from prospect_intel.database.repositories.scan_status_repository import ScanStatusRepository
from prospect_intel.pipeline.exceptions import ScanNotFoundError
from prospect_intel.pipeline.states import ScanStage, ScanStateMachine
from tests.helpers import FakeClock

_GET_CONNECTION = "prospect_intel.database.repositories.scan_status_repository.get_connection"


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestPutStatus:
    @patch(_GET_CONNECTION)
    def test_upserts_full_state(self, mock_get_conn: MagicMock) -> None:
        mock_conn, _cursor = _mock_connection(mock_get_conn)
        machine = ScanStateMachine(FakeClock())
        state = machine.transition(machine.initial(), ScanStage.INITIALIZING, {"image_count": 3})

        ScanStatusRepository().put_status("scan-1", state)

        sql, params = mock_conn.execute.call_args.args
        assert "ON CONFLICT (scan_id) DO UPDATE" in sql
        assert params[:3] == ("scan-1", "initializing", 5)
        assert isinstance(params[7], Jsonb)
        assert params[7].obj == {"image_count": 3}
        mock_conn.commit.assert_called_once()


class TestGetStatus:
    @patch(_GET_CONNECTION)
    def test_builds_state_from_row(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        clock = FakeClock()
        mock_cursor.fetchone.return_value = {
            "stage": "failed",
            "progress": 35,
            "message": "Scan failed",
            "started_at": clock.now,
            "completed_at": clock.now,
            "error_message": "parser exploded",
            "metadata": None,
            "estimated_completion_at": None,
        }

        state = ScanStatusRepository().get_status("scan-1")

        assert state.stage is ScanStage.FAILED
        assert state.progress == 35
        assert state.error_message == "parser exploded"
        assert state.metadata == {}

    @patch(_GET_CONNECTION)
    def test_missing_scan_raises(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(ScanNotFoundError, match="scan-404"):
            ScanStatusRepository().get_status("scan-404")
