from unittest.mock import MagicMock, patch

import pytest

from prospect_intel.database.repositories.scan_results_repository import ScanResultsRepository
from prospect_intel.parsing.models import FriendRow, Post, Provenance
from prospect_intel.recognition.models import LanguageMix, RecognitionResult
from prospect_intel.scoring.models import LeadBucket, ScoredProspect

_GET_CONNECTION = "prospect_intel.database.repositories.scan_results_repository.get_connection"


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestSaveRecognitionResults:
    @patch(_GET_CONNECTION)
    def test_inserts_one_row_per_result(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        result = RecognitionResult(
            source_image_id="img-1",
            text="Maria Santos",
            lines=["Maria Santos"],
            blocks=[(0, 1)],
            confidence=0.9,
            language=LanguageMix.ENGLISH,
            slice_count=1,
        )

        ScanResultsRepository().save_recognition_results("scan-1", [result])

        _sql, rows = mock_cursor.executemany.call_args.args
        [row] = rows
        assert row[0:3] == ("scan-1", "img-1", "Maria Santos")
        assert row[4].obj == [[0, 1]]
        assert row[6] == "en"
        mock_conn.commit.assert_called_once()

    @patch(_GET_CONNECTION)
    def test_empty_batch_skips_database(self, mock_get_conn: MagicMock) -> None:
        ScanResultsRepository().save_recognition_results("scan-1", [])
        mock_get_conn.assert_not_called()


def _maria() -> tuple[FriendRow, ScoredProspect]:
    row = FriendRow(name="Maria Santos", provenance=Provenance("img-1", 2), mutual_count=23)
    prospect = ScoredProspect(
        name="Maria Santos",
        normalized_name="maria santos",
        score=70,
        bucket=LeadBucket.WARM,
        source_entity=row,
        metadata={"reasons": ["More than 20 mutual friends"]},
    )
    return row, prospect


class TestSaveScanResults:
    @patch(_GET_CONNECTION)
    def test_writes_entities_and_prospects_in_one_commit(
        self, mock_get_conn: MagicMock
    ) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        row, prospect = _maria()
        post = Post(text="Looking for a CRM", provenance=Provenance("img-3", 0))

        ScanResultsRepository().save_scan_results("scan-1", [row, post], [prospect])

        mock_get_conn.assert_called_once()
        entity_call, prospect_call = mock_cursor.executemany.call_args_list
        entity_sql, entity_rows = entity_call.args
        assert "INSERT INTO scan_entities" in entity_sql
        assert [r[1:5] for r in entity_rows] == [
            ("friend_row", "Maria Santos", "img-1", 2),
            ("post", None, "img-3", 0),
        ]
        assert entity_rows[0][5].obj["mutual_count"] == 23

        prospect_sql, prospect_rows = prospect_call.args
        assert "INSERT INTO scan_prospects" in prospect_sql
        [stored] = prospect_rows
        assert stored[:8] == (
            "scan-1",
            "Maria Santos",
            "maria santos",
            70,
            "warm",
            "friend_row",
            "img-1",
            2,
        )
        assert stored[8].obj == {"reasons": ["More than 20 mutual friends"]}
        mock_conn.commit.assert_called_once()

    @patch(_GET_CONNECTION)
    def test_failed_prospect_insert_is_not_committed(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.executemany.side_effect = [None, RuntimeError("disk full")]
        row, prospect = _maria()

        with pytest.raises(RuntimeError, match="disk full"):
            ScanResultsRepository().save_scan_results("scan-1", [row], [prospect])

        mock_conn.commit.assert_not_called()

    @patch(_GET_CONNECTION)
    def test_nothing_to_save_skips_database(self, mock_get_conn: MagicMock) -> None:
        ScanResultsRepository().save_scan_results("scan-1", [], [])
        mock_get_conn.assert_not_called()


class TestDiscardScanResults:
    @patch(_GET_CONNECTION)
    def test_deletes_entities_and_prospects_only(self, mock_get_conn: MagicMock) -> None:
        mock_conn, _cursor = _mock_connection(mock_get_conn)

        ScanResultsRepository().discard_scan_results("scan-1")

        statements = [c.args[0] for c in mock_conn.execute.call_args_list]
        assert statements == [
            "DELETE FROM scan_entities WHERE scan_id = %s",
            "DELETE FROM scan_prospects WHERE scan_id = %s",
        ]
        mock_conn.commit.assert_called_once()


class TestCountEntities:
    @patch(_GET_CONNECTION)
    def test_returns_count(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (4,)

        assert ScanResultsRepository().count_entities("scan-1") == 4
