"""Builders shared by unit and integration tests."""

import io
import threading
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import patch

import numpy as np
from PIL import Image

from prospect_intel.config.settings import Settings
from prospect_intel.imaging.models import NormalizedImage
from prospect_intel.pipeline.processor import ScanProcessor, build_steps
from prospect_intel.pipeline.states import ScanStateMachine
from prospect_intel.recognition.base import BaseRecognizer
from prospect_intel.recognition.exceptions import RecognitionError
from prospect_intel.recognition.models import RecognitionOutput
from prospect_intel.storage.base import BaseResultStore, BaseStatusStore


def encode_png(pixels: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(pixels).save(buf, format="PNG")
    return buf.getvalue()


def solid_pixels(height: int, width: int, value: int) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.uint8)


def output_for(lines: list[str], confidence: float = 0.9) -> RecognitionOutput:
    return RecognitionOutput(
        text="\n".join(lines),
        lines=lines,
        blocks=[[line for line in lines if line]],
        confidence=confidence,
    )


class ScriptedRecognizer(BaseRecognizer):
    """Returns a fixed transcript per source image id and tracks concurrency."""

    def __init__(
        self,
        outputs: dict[str, RecognitionOutput],
        *,
        delay_seconds: float = 0.0,
        failing_ids: frozenset[str] = frozenset(),
    ) -> None:
        self._outputs = outputs
        self._delay_seconds = delay_seconds
        self._failing_ids = failing_ids
        self._lock = threading.Lock()
        self._active = 0
        self.peak_concurrency = 0
        self.calls: list[str] = []

    def recognize(self, image: NormalizedImage) -> RecognitionOutput:
        with self._lock:
            self._active += 1
            self.peak_concurrency = max(self.peak_concurrency, self._active)
            self.calls.append(image.source_image_id)
        try:
            if self._delay_seconds:
                time.sleep(self._delay_seconds)
            if image.source_image_id in self._failing_ids:
                raise RecognitionError(f"provider rejected {image.source_image_id}")
            return self._outputs.get(
                image.source_image_id, RecognitionOutput(text="", confidence=0.0)
            )
        finally:
            with self._lock:
                self._active -= 1


class FakeClock:
    """Deterministic clock for the state machine and the scan service."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


# Three screenshots: two friend-list cards and one feed post.
SCAN_TRANSCRIPTS: dict[str, list[str]] = {
    "img-1": ["Maria Santos", "23 mutual friends", "Marketing Manager at Tech Corp"],
    "img-2": ["Pedro Reyes", "8 mutual friends", "Lives in Makati City"],
    "img-3": [
        "Ana Cruz · 2 hrs ago",
        "Looking for a better CRM for our team, any recommendations?",
        "42 reactions  5 comments",
    ],
}


def scan_recognizer(**kwargs: Any) -> ScriptedRecognizer:
    return ScriptedRecognizer(
        {image_id: output_for(lines) for image_id, lines in SCAN_TRANSCRIPTS.items()},
        **kwargs,
    )


def build_scripted_processor(
    recognizer: BaseRecognizer,
    status_store: BaseStatusStore,
    result_store: BaseResultStore,
    *,
    clock: Callable[[], datetime] | None = None,
) -> ScanProcessor:
    """Production step wiring with the recognizer swapped for ``recognizer``."""
    settings = Settings(storage_backend="memory")
    with patch(
        "prospect_intel.pipeline.processor.RecognizerFactory.create",
        return_value=recognizer,
    ):
        steps = build_steps(settings, result_store)
    machine = ScanStateMachine(clock) if clock is not None else None
    return ScanProcessor(
        steps=steps,
        status_store=status_store,
        state_machine=machine,
        result_store=result_store,
    )
