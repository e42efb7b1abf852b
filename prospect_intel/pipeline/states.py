"""Closed state machine that sequences a scan.

queued -> initializing -> recognizing_text -> parsing_structure ->
enriching_general -> analyzing_language_mix -> profiling_personality ->
detecting_pain_points -> scoring -> persisting_results -> completed

``failed`` is reachable from every non-terminal stage. ``completed`` and
``failed`` have no outgoing transitions.
"""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from prospect_intel.pipeline.exceptions import InvalidTransitionError


class ScanStage(str, Enum):
    QUEUED = "queued"
    INITIALIZING = "initializing"
    RECOGNIZING_TEXT = "recognizing_text"
    PARSING_STRUCTURE = "parsing_structure"
    ENRICHING_GENERAL = "enriching_general"
    ANALYZING_LANGUAGE_MIX = "analyzing_language_mix"
    PROFILING_PERSONALITY = "profiling_personality"
    DETECTING_PAIN_POINTS = "detecting_pain_points"
    SCORING = "scoring"
    PERSISTING_RESULTS = "persisting_results"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ScanStage.COMPLETED, ScanStage.FAILED)


STAGE_PROGRESS: dict[ScanStage, int] = {
    ScanStage.QUEUED: 0,
    ScanStage.INITIALIZING: 5,
    ScanStage.RECOGNIZING_TEXT: 15,
    ScanStage.PARSING_STRUCTURE: 35,
    ScanStage.ENRICHING_GENERAL: 45,
    ScanStage.ANALYZING_LANGUAGE_MIX: 55,
    ScanStage.PROFILING_PERSONALITY: 65,
    ScanStage.DETECTING_PAIN_POINTS: 75,
    ScanStage.SCORING: 85,
    ScanStage.PERSISTING_RESULTS: 95,
    ScanStage.COMPLETED: 100,
}

STAGE_MESSAGES: dict[ScanStage, str] = {
    ScanStage.QUEUED: "Scan queued",
    ScanStage.INITIALIZING: "Preparing screenshots",
    ScanStage.RECOGNIZING_TEXT: "Reading text from screenshots",
    ScanStage.PARSING_STRUCTURE: "Identifying friends, posts and comments",
    ScanStage.ENRICHING_GENERAL: "Extracting topics and interests",
    ScanStage.ANALYZING_LANGUAGE_MIX: "Analyzing Taglish language mix",
    ScanStage.PROFILING_PERSONALITY: "Profiling communication style",
    ScanStage.DETECTING_PAIN_POINTS: "Detecting pain points",
    ScanStage.SCORING: "Scoring prospects",
    ScanStage.PERSISTING_RESULTS: "Saving results",
    ScanStage.COMPLETED: "Scan completed",
    ScanStage.FAILED: "Scan failed",
}

_ORDER: list[ScanStage] = list(STAGE_PROGRESS)

TRANSITIONS: dict[ScanStage, frozenset[ScanStage]] = {
    **{
        stage: frozenset({_ORDER[i + 1], ScanStage.FAILED})
        for i, stage in enumerate(_ORDER[:-1])
    },
    ScanStage.COMPLETED: frozenset(),
    ScanStage.FAILED: frozenset(),
}

# Stages a processor runs through after queued, in order.
PROCESSING_STAGES: tuple[ScanStage, ...] = tuple(_ORDER[1:-1])


@dataclass(frozen=True)
class PipelineState:
    """Snapshot of a scan's progress. Each transition replaces it entirely."""

    stage: ScanStage
    progress: int
    message: str
    started_at: datetime
    completed_at: datetime | None = None
    error_message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    estimated_completion_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.stage.is_terminal


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScanStateMachine:
    """Validates transitions and derives progress, messages and ETA."""

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock

    def initial(self, metadata: dict[str, Any] | None = None) -> PipelineState:
        return PipelineState(
            stage=ScanStage.QUEUED,
            progress=STAGE_PROGRESS[ScanStage.QUEUED],
            message=STAGE_MESSAGES[ScanStage.QUEUED],
            started_at=self._clock(),
            metadata=dict(metadata or {}),
        )

    def can_transition(self, current: ScanStage, target: ScanStage) -> bool:
        return target in TRANSITIONS[current]

    def transition(
        self,
        state: PipelineState,
        target: ScanStage,
        metadata: dict[str, Any] | None = None,
    ) -> PipelineState:
        """Return the state after moving to ``target``.

        Raises:
            InvalidTransitionError: ``target`` is not a legal next stage.
                ``state`` is left untouched.
        """
        if target is ScanStage.FAILED:
            return self.fail(state, STAGE_MESSAGES[ScanStage.FAILED], metadata)
        self._check(state.stage, target)

        now = self._clock()
        merged = {**state.metadata, **(metadata or {})}
        progress = STAGE_PROGRESS[target]
        if target.is_terminal:
            return replace(
                state,
                stage=target,
                progress=progress,
                message=STAGE_MESSAGES[target],
                completed_at=now,
                metadata=merged,
                estimated_completion_at=None,
            )

        remaining = self.estimate_remaining_seconds(state.started_at, progress, now)
        return replace(
            state,
            stage=target,
            progress=progress,
            message=STAGE_MESSAGES[target],
            metadata=merged,
            estimated_completion_at=(
                None if remaining is None else now + timedelta(seconds=remaining)
            ),
        )

    def fail(
        self,
        state: PipelineState,
        error_message: str,
        metadata: dict[str, Any] | None = None,
    ) -> PipelineState:
        """Move to ``failed``, keeping the progress reached so far."""
        self._check(state.stage, ScanStage.FAILED)
        return replace(
            state,
            stage=ScanStage.FAILED,
            message=STAGE_MESSAGES[ScanStage.FAILED],
            completed_at=self._clock(),
            error_message=error_message,
            metadata={**state.metadata, **(metadata or {})},
            estimated_completion_at=None,
        )

    @staticmethod
    def estimate_remaining_seconds(
        started_at: datetime, progress: int, now: datetime
    ) -> float | None:
        """Linear extrapolation: elapsed / (progress / 100) - elapsed."""
        if progress <= 0 or progress >= 100:
            return None
        elapsed = max(0.0, (now - started_at).total_seconds())
        return elapsed / (progress / 100) - elapsed

    @staticmethod
    def _check(current: ScanStage, target: ScanStage) -> None:
        if target not in TRANSITIONS[current]:
            raise InvalidTransitionError(
                f"Illegal transition {current.value} -> {target.value}"
            )
