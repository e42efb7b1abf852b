from collections.abc import Iterator

import pytest

from prospect_intel.parsing.models import FriendRow, Provenance
from prospect_intel.pipeline.exceptions import ScanNotFoundError
from prospect_intel.pipeline.states import ScanStage, ScanStateMachine
from prospect_intel.recognition.models import RecognitionResult
from prospect_intel.scoring.models import LeadBucket, ScoredProspect
from prospect_intel.storage.memory import InMemoryResultStore, InMemoryStatusStore
from tests.helpers import FakeClock


def _row(name: str = "Maria Santos") -> FriendRow:
    return FriendRow(name=name, provenance=Provenance("img-1", 0), mutual_count=23)


def _prospect(row: FriendRow) -> ScoredProspect:
    return ScoredProspect(row.name, row.name.lower(), 60, LeadBucket.WARM, row)


class TestInMemoryStatusStore:
    def test_put_replaces_state(self) -> None:
        machine = ScanStateMachine(FakeClock())
        store = InMemoryStatusStore()
        first = machine.initial()
        second = machine.transition(first, ScanStage.INITIALIZING)

        store.put_status("scan-1", first)
        store.put_status("scan-1", second)

        assert store.get_status("scan-1") == second
        assert store.history("scan-1") == [first, second]

    def test_missing_scan_raises(self) -> None:
        with pytest.raises(ScanNotFoundError):
            InMemoryStatusStore().get_status("nope")

    def test_history_of_unknown_scan_is_empty(self) -> None:
        assert InMemoryStatusStore().history("nope") == []

    def test_evicts_oldest_finished_scan(self) -> None:
        machine = ScanStateMachine(FakeClock())
        store = InMemoryStatusStore(max_scans=2)
        running = machine.transition(machine.initial(), ScanStage.INITIALIZING)
        finished = machine.fail(running, "boom")

        store.put_status("running", running)
        store.put_status("done-1", finished)
        store.put_status("done-2", finished)

        with pytest.raises(ScanNotFoundError):
            store.get_status("done-1")
        assert store.history("done-1") == []
        assert store.get_status("running") == running
        assert store.get_status("done-2") == finished

    def test_running_scans_are_never_evicted(self) -> None:
        machine = ScanStateMachine(FakeClock())
        store = InMemoryStatusStore(max_scans=1)
        state = machine.initial()

        store.put_status("scan-a", state)
        store.put_status("scan-b", state)

        assert store.get_status("scan-a") == state
        assert store.get_status("scan-b") == state

    def test_rejects_non_positive_cap(self) -> None:
        with pytest.raises(ValueError, match="max_scans"):
            InMemoryStatusStore(max_scans=0)


class TestInMemoryResultStore:
    def test_results_are_kept_per_scan(self) -> None:
        store = InMemoryResultStore()
        row = _row()

        store.save_recognition_results("scan-1", [RecognitionResult.failed("img-1", "boom")])
        store.save_scan_results("scan-1", [row], [_prospect(row)])

        assert len(store.recognition_results("scan-1")) == 1
        assert store.entities("scan-1") == [row]
        assert [p.name for p in store.prospects("scan-1")] == ["Maria Santos"]
        assert store.entities("scan-2") == []

    def test_failed_write_stores_nothing(self) -> None:
        def broken_prospects() -> Iterator[ScoredProspect]:
            raise RuntimeError("disk full")
            yield  # pragma: no cover

        store = InMemoryResultStore()

        with pytest.raises(RuntimeError, match="disk full"):
            store.save_scan_results("scan-1", [_row()], broken_prospects())  # type: ignore[arg-type]

        assert store.entities("scan-1") == []
        assert store.prospects("scan-1") == []

    def test_discard_keeps_recognition_audit(self) -> None:
        store = InMemoryResultStore()
        row = _row()
        store.save_recognition_results("scan-1", [RecognitionResult.failed("img-1", "boom")])
        store.save_scan_results("scan-1", [row], [_prospect(row)])

        store.discard_scan_results("scan-1")

        assert store.entities("scan-1") == []
        assert store.prospects("scan-1") == []
        assert len(store.recognition_results("scan-1")) == 1

    def test_evicts_least_recently_written_scan(self) -> None:
        store = InMemoryResultStore(max_scans=2)
        for scan_id in ("scan-1", "scan-2", "scan-3"):
            store.save_scan_results(scan_id, [_row()], [])

        assert store.entities("scan-1") == []
        assert len(store.entities("scan-2")) == 1
        assert len(store.entities("scan-3")) == 1
