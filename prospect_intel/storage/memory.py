"""Process-local stores, used by tests and the ``memory`` storage backend.

Both stores keep at most ``max_scans`` scans. The status store evicts the
oldest finished scan first and never drops a scan that is still running;
the result store evicts the scan written to least recently.
"""

import threading
from collections import OrderedDict
from collections.abc import Sequence

from prospect_intel.parsing.models import ParsedEntity
from prospect_intel.pipeline.exceptions import ScanNotFoundError
from prospect_intel.pipeline.states import PipelineState
from prospect_intel.recognition.models import RecognitionResult
from prospect_intel.scoring.models import ScoredProspect
from prospect_intel.storage.base import BaseResultStore, BaseStatusStore

DEFAULT_MAX_SCANS = 1000


class InMemoryStatusStore(BaseStatusStore):
    def __init__(self, max_scans: int = DEFAULT_MAX_SCANS) -> None:
        if max_scans < 1:
            raise ValueError("max_scans must be at least 1")
        self._max_scans = max_scans
        self._lock = threading.Lock()
        self._states: dict[str, PipelineState] = {}
        self._history: dict[str, list[PipelineState]] = {}
        self._finished: OrderedDict[str, None] = OrderedDict()

    def put_status(self, scan_id: str, state: PipelineState) -> None:
        with self._lock:
            self._states[scan_id] = state
            self._history.setdefault(scan_id, []).append(state)
            if state.is_terminal:
                self._finished[scan_id] = None
                self._finished.move_to_end(scan_id)
            else:
                self._finished.pop(scan_id, None)
            self._evict()

    def get_status(self, scan_id: str) -> PipelineState:
        with self._lock:
            state = self._states.get(scan_id)
        if state is None:
            raise ScanNotFoundError(f"No status recorded for scan {scan_id}")
        return state

    def history(self, scan_id: str) -> list[PipelineState]:
        """Every state written for ``scan_id``, oldest first."""
        with self._lock:
            return list(self._history.get(scan_id, []))

    def _evict(self) -> None:
        while len(self._states) > self._max_scans and self._finished:
            scan_id, _ = self._finished.popitem(last=False)
            del self._states[scan_id]
            del self._history[scan_id]


class InMemoryResultStore(BaseResultStore):
    def __init__(self, max_scans: int = DEFAULT_MAX_SCANS) -> None:
        if max_scans < 1:
            raise ValueError("max_scans must be at least 1")
        self._max_scans = max_scans
        self._lock = threading.Lock()
        self._scans: OrderedDict[str, None] = OrderedDict()
        self._recognition: dict[str, list[RecognitionResult]] = {}
        self._entities: dict[str, list[ParsedEntity]] = {}
        self._prospects: dict[str, list[ScoredProspect]] = {}

    def save_recognition_results(
        self, scan_id: str, results: Sequence[RecognitionResult]
    ) -> None:
        batch = list(results)
        with self._lock:
            self._recognition.setdefault(scan_id, []).extend(batch)
            self._touch(scan_id)

    def save_scan_results(
        self,
        scan_id: str,
        entities: Sequence[ParsedEntity],
        prospects: Sequence[ScoredProspect],
    ) -> None:
        entity_batch = list(entities)
        prospect_batch = list(prospects)
        with self._lock:
            self._entities.setdefault(scan_id, []).extend(entity_batch)
            self._prospects.setdefault(scan_id, []).extend(prospect_batch)
            self._touch(scan_id)

    def discard_scan_results(self, scan_id: str) -> None:
        with self._lock:
            self._entities.pop(scan_id, None)
            self._prospects.pop(scan_id, None)

    def recognition_results(self, scan_id: str) -> list[RecognitionResult]:
        with self._lock:
            return list(self._recognition.get(scan_id, []))

    def entities(self, scan_id: str) -> list[ParsedEntity]:
        with self._lock:
            return list(self._entities.get(scan_id, []))

    def prospects(self, scan_id: str) -> list[ScoredProspect]:
        with self._lock:
            return list(self._prospects.get(scan_id, []))

    def _touch(self, scan_id: str) -> None:
        self._scans[scan_id] = None
        self._scans.move_to_end(scan_id)
        while len(self._scans) > self._max_scans:
            oldest, _ = self._scans.popitem(last=False)
            self._recognition.pop(oldest, None)
            self._entities.pop(oldest, None)
            self._prospects.pop(oldest, None)
