from prospect_intel.enrichment.general import GeneralEnricher
from prospect_intel.enrichment.language_mix import LanguageMixAnalyzer
from prospect_intel.enrichment.pain_points import PainPointDetector
from prospect_intel.enrichment.personality import PersonalityProfiler
from prospect_intel.logging.logger import Log
from prospect_intel.parsing.parser import StructuredTextParser
from prospect_intel.pipeline.exceptions import ScanInputError
from prospect_intel.pipeline.pipeline import PipelineStep, ScanContext
from prospect_intel.pipeline.states import ScanStage
from prospect_intel.recognition.coordinator import BatchRecognitionCoordinator
from prospect_intel.scoring.scorer import ProspectScorer
from prospect_intel.storage.base import BaseResultStore


class InitializeStep(PipelineStep):
    stage = ScanStage.INITIALIZING

    def run(self, context: ScanContext) -> ScanContext:
        if not context.images:
            raise ScanInputError(f"Scan {context.scan_id} has no screenshots")
        ids = [image.id for image in context.images]
        if len(set(ids)) != len(ids):
            raise ScanInputError(f"Scan {context.scan_id} has duplicate screenshot ids")
        context.metadata["image_count"] = len(context.images)
        Log.info(f"Scan {context.scan_id}: {len(context.images)} screenshot(s) queued")
        return context


class RecognizeTextStep(PipelineStep):
    stage = ScanStage.RECOGNIZING_TEXT

    def __init__(
        self,
        coordinator: BatchRecognitionCoordinator,
        result_store: BaseResultStore,
    ) -> None:
        self._coordinator = coordinator
        self._result_store = result_store

    def run(self, context: ScanContext) -> ScanContext:
        context.recognition_results = self._coordinator.run_batch(context.images)
        self._result_store.save_recognition_results(
            context.scan_id, context.recognition_results
        )
        context.combined = self._coordinator.combine(context.recognition_results)
        context.metadata.update(
            {
                "recognition_confidence": round(context.combined.confidence, 3),
                "images_used": context.combined.used_images,
                "images_failed": sum(1 for r in context.recognition_results if r.is_failed),
            }
        )
        Log.info(
            f"Scan {context.scan_id}: recognized {len(context.combined.lines)} line(s) "
            f"from {context.combined.used_images} usable screenshot(s)"
        )
        return context


class ParseStructureStep(PipelineStep):
    stage = ScanStage.PARSING_STRUCTURE

    def __init__(self, parser: StructuredTextParser) -> None:
        self._parser = parser

    def run(self, context: ScanContext) -> ScanContext:
        if context.combined is None:
            raise ValueError("ScanContext.combined must be set before parsing")
        context.entities = self._parser.parse(
            context.combined.text, context.combined.lines, context.combined.blocks
        )
        context.metadata["entities_found"] = len(context.entities)
        return context


class EnrichGeneralStep(PipelineStep):
    stage = ScanStage.ENRICHING_GENERAL

    def __init__(self, enricher: GeneralEnricher) -> None:
        self._enricher = enricher

    def run(self, context: ScanContext) -> ScanContext:
        context.general = self._enricher.analyze(context.text)
        Log.info(
            f"Scan {context.scan_id}: {len(context.general.topics)} topic(s), "
            f"sentiment {context.general.sentiment.value}"
        )
        return context


class AnalyzeLanguageMixStep(PipelineStep):
    stage = ScanStage.ANALYZING_LANGUAGE_MIX

    def __init__(self, analyzer: LanguageMixAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: ScanContext) -> ScanContext:
        analysis = self._analyzer.analyze(context.text)
        context.language_mix = analysis
        context.metadata.update(
            {
                "filipino_percentage": analysis.filipino_percentage,
                "english_percentage": analysis.english_percentage,
                "taglish_score": analysis.taglish_score,
                "communication_style": analysis.communication_style,
            }
        )
        Log.info(
            f"Scan {context.scan_id}: {analysis.filipino_percentage}% Filipino, "
            f"style {analysis.communication_style}"
        )
        return context


class ProfilePersonalityStep(PipelineStep):
    stage = ScanStage.PROFILING_PERSONALITY

    def __init__(self, profiler: PersonalityProfiler) -> None:
        self._profiler = profiler

    def run(self, context: ScanContext) -> ScanContext:
        context.personality = self._profiler.analyze(context.text, context.post_count)
        Log.info(
            f"Scan {context.scan_id}: personality {context.personality.personality_type}, "
            f"{len(context.personality.traits)} trait(s)"
        )
        return context


class DetectPainPointsStep(PipelineStep):
    stage = ScanStage.DETECTING_PAIN_POINTS

    def __init__(self, detector: PainPointDetector) -> None:
        self._detector = detector

    def run(self, context: ScanContext) -> ScanContext:
        pain = self._detector.analyze(context.text)
        context.pain = pain
        context.metadata.update(
            {
                "opportunity_score": pain.opportunity_score,
                "urgency_score": pain.urgency_score,
                "buying_readiness": pain.buying_readiness.level.value,
            }
        )
        Log.info(
            f"Scan {context.scan_id}: {len(pain.pain_points)} pain point(s), "
            f"opportunity {pain.opportunity_score}"
        )
        return context


class ScoreProspectsStep(PipelineStep):
    stage = ScanStage.SCORING

    def __init__(self, scorer: ProspectScorer) -> None:
        self._scorer = scorer

    def run(self, context: ScanContext) -> ScanContext:
        context.prospects = self._scorer.score(context.entities, context.bundle())
        context.metadata["prospects_found"] = len(context.prospects)
        return context


class PersistResultsStep(PipelineStep):
    stage = ScanStage.PERSISTING_RESULTS

    def __init__(self, result_store: BaseResultStore) -> None:
        self._result_store = result_store

    def run(self, context: ScanContext) -> ScanContext:
        self._result_store.save_scan_results(context.scan_id, context.entities, context.prospects)
        context.results_persisted = True
        Log.info(
            f"Scan {context.scan_id}: saved {len(context.entities)} entities "
            f"and {len(context.prospects)} prospect(s)"
        )
        return context
