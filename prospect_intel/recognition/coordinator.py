"""Bounded-concurrency batch recognition over a scan's screenshots."""

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from prospect_intel.imaging.models import RawImage
from prospect_intel.imaging.preprocessor import ImagePreprocessor
from prospect_intel.logging.logger import Log
from prospect_intel.recognition.base import BaseRecognizer
from prospect_intel.recognition.language import detect_language_mix
from prospect_intel.recognition.layout import align_blocks
from prospect_intel.recognition.models import (
    CombinedRecognition,
    RecognitionOutput,
    RecognitionResult,
    RecognizedLine,
)


class BatchRecognitionCoordinator:
    """Preprocesses and recognizes screenshots in chunks of ``max_concurrency``.

    Each chunk runs concurrently and must finish before the next one starts,
    so the recognizer never sees more than ``max_concurrency`` calls at once.
    A screenshot that fails to decode or recognize yields a zero-confidence
    result instead of failing the batch.
    """

    def __init__(
        self,
        *,
        preprocessor: ImagePreprocessor,
        recognizer: BaseRecognizer,
        max_concurrency: int = 3,
        min_confidence: float = 0.5,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._preprocessor = preprocessor
        self._recognizer = recognizer
        self._max_concurrency = max_concurrency
        self._min_confidence = min_confidence

    def run_batch(self, images: Sequence[RawImage]) -> list[RecognitionResult]:
        """Return one result per input image, in input order."""
        if not images:
            return []

        results: list[RecognitionResult] = []
        with ThreadPoolExecutor(
            max_workers=self._max_concurrency,
            thread_name_prefix="recognition",
        ) as pool:
            for start in range(0, len(images), self._max_concurrency):
                chunk = images[start : start + self._max_concurrency]
                futures = [pool.submit(self._process_image, image) for image in chunk]
                results.extend(future.result() for future in futures)
                Log.debug(
                    f"Recognition chunk {start // self._max_concurrency + 1} done "
                    f"({len(chunk)} image(s))"
                )

        failed = sum(1 for r in results if r.is_failed)
        Log.info(f"Recognized {len(results)} image(s), {failed} failed")
        return results

    def combine(self, results: Sequence[RecognitionResult]) -> CombinedRecognition:
        """Concatenate usable results, dropping those below the confidence floor."""
        usable = [r for r in results if r.confidence >= self._min_confidence]
        dropped = len(results) - len(usable)
        if dropped:
            Log.info(f"Dropped {dropped} recognition result(s) below {self._min_confidence}")

        lines: list[RecognizedLine] = []
        blocks: list[list[RecognizedLine]] = []
        for result in usable:
            tagged = [
                RecognizedLine(
                    text=text,
                    source_image_id=result.source_image_id,
                    line_index=index,
                    confidence=result.confidence,
                )
                for index, text in enumerate(result.lines)
            ]
            lines.extend(tagged)
            blocks.extend(tagged[start:end] for start, end in result.blocks)

        confidence = sum(r.confidence for r in usable) / len(usable) if usable else 0.0
        return CombinedRecognition(
            text="\n\n".join(r.text for r in usable if r.text),
            lines=lines,
            blocks=blocks,
            confidence=confidence,
            used_images=len(usable),
            dropped_images=dropped,
        )

    def _process_image(self, image: RawImage) -> RecognitionResult:
        try:
            slices = self._preprocessor.normalize(image)
            outputs = [self._recognizer.recognize(s) for s in slices]
        except Exception as exc:
            Log.warning(f"Image {image.id} ({image.filename}) skipped: {exc}")
            return RecognitionResult.failed(image.id, str(exc) or type(exc).__name__)
        return self._merge_slices(image.id, outputs)

    @staticmethod
    def _merge_slices(image_id: str, outputs: list[RecognitionOutput]) -> RecognitionResult:
        lines: list[str] = []
        spans: list[tuple[int, int]] = []
        for output in outputs:
            if lines:
                lines.append("")
            offset = len(lines)
            spans.extend(
                (start + offset, end + offset)
                for start, end in align_blocks(output.lines, output.blocks)
            )
            lines.extend(output.lines)

        text = "\n\n".join(o.text for o in outputs if o.text)
        confidence = sum(o.confidence for o in outputs) / len(outputs) if outputs else 0.0
        return RecognitionResult(
            source_image_id=image_id,
            text=text,
            lines=lines,
            blocks=spans,
            confidence=confidence,
            language=detect_language_mix(text),
            slice_count=len(outputs),
        )
