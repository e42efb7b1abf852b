from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from prospect_intel.enrichment.models import (
    EnrichmentBundle,
    GeneralSignals,
    LanguageMixAnalysis,
    PainPointAnalysis,
    PersonalityProfile,
)
from prospect_intel.imaging.models import RawImage
from prospect_intel.parsing.models import ParsedEntity, Post
from prospect_intel.pipeline.states import ScanStage
from prospect_intel.recognition.models import CombinedRecognition, RecognitionResult
from prospect_intel.scoring.models import ScoredProspect


@dataclass(slots=True)
class ScanContext:
    """Accumulates stage outputs as a scan moves through the pipeline."""

    scan_id: str
    images: list[RawImage] = field(default_factory=list)
    recognition_results: list[RecognitionResult] = field(default_factory=list)
    combined: CombinedRecognition | None = None
    entities: list[ParsedEntity] = field(default_factory=list)
    general: GeneralSignals | None = None
    language_mix: LanguageMixAnalysis | None = None
    personality: PersonalityProfile | None = None
    pain: PainPointAnalysis | None = None
    prospects: list[ScoredProspect] = field(default_factory=list)
    results_persisted: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.combined.text if self.combined is not None else ""

    @property
    def post_count(self) -> int:
        return sum(1 for e in self.entities if isinstance(e, Post))

    def bundle(self) -> EnrichmentBundle:
        """Assemble the enrichment bundle once all four analyzers have run."""
        if (
            self.general is None
            or self.language_mix is None
            or self.personality is None
            or self.pain is None
        ):
            raise ValueError("ScanContext enrichment must be complete before bundling")
        return EnrichmentBundle(
            general=self.general,
            language_mix=self.language_mix,
            personality=self.personality,
            pain=self.pain,
        )


class PipelineStep(ABC):
    """One stage of a scan. ``stage`` is entered right before ``run``."""

    stage: ClassVar[ScanStage]

    @abstractmethod
    def run(self, context: ScanContext) -> ScanContext:
        raise NotImplementedError
