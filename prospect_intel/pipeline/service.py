"""Caller-facing scan API: submit a scan, poll its status."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from prospect_intel.imaging.models import RawImage
from prospect_intel.pipeline.processor import ScanOutcome, ScanProcessor
from prospect_intel.pipeline.states import PipelineState, ScanStage, utcnow
from prospect_intel.storage.base import BaseStatusStore


@dataclass(frozen=True)
class ScanStatusView:
    """Status of a scan as shown to a polling caller.

    ``status`` is the coarse lifecycle (queued, processing, completed,
    failed); ``stage`` is the exact pipeline stage.
    """

    status: str
    stage: str
    message: str
    progress_percent: int
    eta_seconds: int
    error_message: str | None = None


class ScanService:
    def __init__(
        self,
        processor: ScanProcessor,
        status_store: BaseStatusStore,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._processor = processor
        self._status_store = status_store
        self._clock = clock

    def submit_scan(self, scan_id: str, images: Sequence[RawImage]) -> ScanOutcome:
        """Run a scan to completion or failure and return its outcome."""
        return self._processor.process(scan_id, images)

    def poll_status(self, scan_id: str) -> ScanStatusView:
        """Current status of a scan.

        Raises:
            ScanNotFoundError: if the scan was never submitted.
        """
        state = self._status_store.get_status(scan_id)
        return ScanStatusView(
            status=_lifecycle(state.stage),
            stage=state.stage.value,
            message=state.error_message if state.error_message else state.message,
            progress_percent=state.progress,
            eta_seconds=self._eta_seconds(state),
            error_message=state.error_message,
        )

    def _eta_seconds(self, state: PipelineState) -> int:
        if state.is_terminal or state.estimated_completion_at is None:
            return 0
        remaining = (state.estimated_completion_at - self._clock()).total_seconds()
        return max(0, round(remaining))


def _lifecycle(stage: ScanStage) -> str:
    if stage in (ScanStage.QUEUED, ScanStage.COMPLETED, ScanStage.FAILED):
        return stage.value
    return "processing"
