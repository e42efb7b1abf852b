from abc import ABC, abstractmethod
from collections.abc import Sequence

from prospect_intel.parsing.models import ParsedEntity
from prospect_intel.pipeline.states import PipelineState
from prospect_intel.recognition.models import RecognitionResult
from prospect_intel.scoring.models import ScoredProspect


class BaseStatusStore(ABC):
    """Contract for the per-scan status store.

    Every write replaces the whole state for a scan id.
    """

    @abstractmethod
    def put_status(self, scan_id: str, state: PipelineState) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_status(self, scan_id: str) -> PipelineState:
        """Return the last written state.

        Raises:
            ScanNotFoundError: if nothing was written for ``scan_id``.
        """


class BaseResultStore(ABC):
    """Contract for bulk storage of scan results."""

    @abstractmethod
    def save_recognition_results(
        self, scan_id: str, results: Sequence[RecognitionResult]
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def save_scan_results(
        self,
        scan_id: str,
        entities: Sequence[ParsedEntity],
        prospects: Sequence[ScoredProspect],
    ) -> None:
        """Store a scan's entities and prospects together or not at all."""

    @abstractmethod
    def discard_scan_results(self, scan_id: str) -> None:
        """Remove entities and prospects of ``scan_id``. Recognition results stay."""
