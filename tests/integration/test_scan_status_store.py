import pytest

from prospect_intel.database.repositories.scan_status_repository import ScanStatusRepository
from prospect_intel.pipeline.exceptions import ScanNotFoundError
from prospect_intel.pipeline.states import ScanStage, ScanStateMachine
from tests.helpers import FakeClock


@pytest.mark.integration
class TestScanStatusStore:
    def test_put_then_get_round_trip(self, scan_id: str) -> None:
        clock = FakeClock()
        machine = ScanStateMachine(clock)
        repo = ScanStatusRepository()
        state = machine.initial({"image_count": 2})
        clock.advance(3)
        state = machine.transition(state, ScanStage.INITIALIZING)

        repo.put_status(scan_id, state)
        loaded = repo.get_status(scan_id)

        assert loaded.stage is ScanStage.INITIALIZING
        assert loaded.progress == 5
        assert loaded.metadata == {"image_count": 2}
        assert loaded.started_at == state.started_at
        assert loaded.estimated_completion_at == state.estimated_completion_at

    def test_later_write_replaces_earlier(self, scan_id: str) -> None:
        machine = ScanStateMachine(FakeClock())
        repo = ScanStatusRepository()
        state = machine.transition(machine.initial(), ScanStage.INITIALIZING)
        repo.put_status(scan_id, state)

        repo.put_status(scan_id, machine.fail(state, "decoder crashed"))

        loaded = repo.get_status(scan_id)
        assert loaded.stage is ScanStage.FAILED
        assert loaded.progress == 5
        assert loaded.error_message == "decoder crashed"
        assert loaded.completed_at is not None

    def test_unknown_scan_raises(self, scan_id: str) -> None:
        with pytest.raises(ScanNotFoundError):
            ScanStatusRepository().get_status(scan_id)

    def test_delete(self, scan_id: str) -> None:
        machine = ScanStateMachine(FakeClock())
        repo = ScanStatusRepository()
        repo.put_status(scan_id, machine.initial())

        repo.delete(scan_id)

        with pytest.raises(ScanNotFoundError):
            repo.get_status(scan_id)
