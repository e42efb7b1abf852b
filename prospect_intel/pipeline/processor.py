import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from prospect_intel.config.settings import Settings
from prospect_intel.enrichment.general import GeneralEnricher
from prospect_intel.enrichment.language_mix import LanguageMixAnalyzer
from prospect_intel.enrichment.matching import KeywordMatcher
from prospect_intel.enrichment.pain_points import PainPointDetector
from prospect_intel.enrichment.personality import PersonalityProfiler
from prospect_intel.imaging.models import RawImage
from prospect_intel.imaging.preprocessor import ImagePreprocessor
from prospect_intel.logging.logger import Log
from prospect_intel.parsing.names import NameNormalizer
from prospect_intel.parsing.parser import StructuredTextParser
from prospect_intel.pipeline.exceptions import InvalidTransitionError
from prospect_intel.pipeline.pipeline import PipelineStep, ScanContext
from prospect_intel.pipeline.states import PipelineState, ScanStage, ScanStateMachine
from prospect_intel.pipeline.steps import (
    AnalyzeLanguageMixStep,
    DetectPainPointsStep,
    EnrichGeneralStep,
    InitializeStep,
    ParseStructureStep,
    PersistResultsStep,
    ProfilePersonalityStep,
    RecognizeTextStep,
    ScoreProspectsStep,
)
from prospect_intel.recognition.coordinator import BatchRecognitionCoordinator
from prospect_intel.recognition.factory import RecognizerFactory
from prospect_intel.scoring.models import ScoredProspect
from prospect_intel.scoring.scorer import ProspectScorer
from prospect_intel.storage.base import BaseResultStore, BaseStatusStore
from prospect_intel.storage.factory import StoreFactory


@dataclass(frozen=True)
class ScanOutcome:
    """What a caller gets back from one scan run."""

    scan_id: str
    status: ScanStage
    prospects_found: int
    processing_time_ms: int
    error_message: str | None = None
    prospects: list[ScoredProspect] = field(default_factory=list)
    recognition_confidence: float = 0.0
    taglish_score: int = 0
    filipino_percentage: int = 0
    english_percentage: int = 0


class ScanProcessor:
    """Runs a scan through its steps, one stage at a time.

    Before each step the state machine enters that step's stage and the new
    state is written to the status store. Any exception raised by a step or
    by a status write moves the scan to ``failed`` with the exception
    message; nothing is retried. If the ``completed`` write fails after
    results were persisted, those results are discarded. An illegal
    transition is recorded the same way and then re-raised.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        status_store: BaseStatusStore,
        state_machine: ScanStateMachine | None = None,
        result_store: BaseResultStore | None = None,
    ) -> None:
        self._steps = steps
        self._status_store = status_store
        self._machine = state_machine if state_machine is not None else ScanStateMachine()
        self._result_store = result_store

    @property
    def state_machine(self) -> ScanStateMachine:
        return self._machine

    def process(self, scan_id: str, images: Sequence[RawImage]) -> ScanOutcome:
        Log.info(f"Processing scan {scan_id} with {len(images)} screenshot(s)")
        started = time.monotonic()
        context = ScanContext(scan_id=scan_id, images=list(images))

        state = self._machine.initial()
        try:
            self._status_store.put_status(scan_id, state)
            for step in self._steps:
                state = self._machine.transition(state, step.stage, dict(context.metadata))
                self._status_store.put_status(scan_id, state)
                context = step.run(context)
            completed = self._machine.transition(
                state, ScanStage.COMPLETED, dict(context.metadata)
            )
            self._status_store.put_status(scan_id, completed)
        except InvalidTransitionError as exc:
            self._record_failure(scan_id, state, exc, context)
            raise
        except Exception as exc:
            state = self._record_failure(scan_id, state, exc, context)
            return self._outcome(context, state, started)

        outcome = self._outcome(context, completed, started)
        Log.info(
            f"Scan {scan_id} completed: {outcome.prospects_found} prospect(s) "
            f"in {outcome.processing_time_ms} ms"
        )
        return outcome

    def reject(self, scan_id: str, message: str) -> PipelineState:
        """Record a scan that could not be started as failed."""
        state = self._machine.fail(self._machine.initial(), message)
        self._status_store.put_status(scan_id, state)
        Log.error(f"Scan {scan_id} rejected: {message}")
        return state

    def _record_failure(
        self,
        scan_id: str,
        state: PipelineState,
        exc: Exception,
        context: ScanContext,
    ) -> PipelineState:
        """Move to ``failed`` and try to store it.

        A status store that cannot take the failed state is logged, not
        raised, so the caller still gets the failed outcome.
        """
        message = str(exc) or type(exc).__name__
        Log.exception(f"Scan {scan_id} failed during {state.stage.value}: {message}")
        if context.results_persisted and self._result_store is not None:
            try:
                self._result_store.discard_scan_results(scan_id)
            except Exception as store_exc:
                Log.error(f"Could not discard results of failed scan {scan_id}: {store_exc}")
        if state.is_terminal:
            return state
        failed = self._machine.fail(
            state,
            message,
            {**context.metadata, "failed_stage": state.stage.value},
        )
        try:
            self._status_store.put_status(scan_id, failed)
        except Exception as store_exc:
            Log.error(f"Could not record failure of scan {scan_id}: {store_exc}")
        return failed

    @staticmethod
    def _outcome(context: ScanContext, state: PipelineState, started: float) -> ScanOutcome:
        language_mix = context.language_mix
        return ScanOutcome(
            scan_id=context.scan_id,
            status=state.stage,
            prospects_found=len(context.prospects) if state.stage is ScanStage.COMPLETED else 0,
            processing_time_ms=int((time.monotonic() - started) * 1000),
            error_message=state.error_message,
            prospects=list(context.prospects) if state.stage is ScanStage.COMPLETED else [],
            recognition_confidence=context.combined.confidence if context.combined else 0.0,
            taglish_score=language_mix.taglish_score if language_mix else 0,
            filipino_percentage=language_mix.filipino_percentage if language_mix else 0,
            english_percentage=language_mix.english_percentage if language_mix else 0,
        )


def build_steps(
    settings: Settings,
    result_store: BaseResultStore,
) -> list[PipelineStep]:
    """Build the ordered scan steps with all required adapters."""
    names = NameNormalizer()
    matcher = KeywordMatcher(names)
    coordinator = BatchRecognitionCoordinator(
        preprocessor=ImagePreprocessor(
            max_slice_height=settings.image_max_slice_height,
            slice_overlap=settings.image_slice_overlap,
            contrast_factor=settings.image_contrast_factor,
        ),
        recognizer=RecognizerFactory.create(settings),
        max_concurrency=settings.recognition_max_concurrency,
        min_confidence=settings.recognition_min_confidence,
    )
    return [
        InitializeStep(),
        RecognizeTextStep(coordinator, result_store),
        ParseStructureStep(StructuredTextParser(names)),
        EnrichGeneralStep(GeneralEnricher(matcher)),
        AnalyzeLanguageMixStep(LanguageMixAnalyzer(matcher)),
        ProfilePersonalityStep(PersonalityProfiler(matcher)),
        DetectPainPointsStep(PainPointDetector(matcher)),
        ScoreProspectsStep(ProspectScorer(names)),
        PersistResultsStep(result_store),
    ]


def build_processor(
    settings: Settings,
    status_store: BaseStatusStore | None = None,
    result_store: BaseResultStore | None = None,
) -> ScanProcessor:
    """Build a ScanProcessor, creating stores from settings when not given."""
    if status_store is None or result_store is None:
        default_status, default_results = StoreFactory.create(settings)
        status_store = status_store if status_store is not None else default_status
        result_store = result_store if result_store is not None else default_results
    return ScanProcessor(
        steps=build_steps(settings, result_store),
        status_store=status_store,
        result_store=result_store,
    )
