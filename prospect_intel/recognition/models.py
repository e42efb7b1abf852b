from dataclasses import dataclass, field
from enum import Enum


class LanguageMix(str, Enum):
    """Closed set of language guesses for a piece of recognized text."""

    FILIPINO = "tl"
    ENGLISH = "en"
    TAGLISH = "taglish"
    OTHER = "other"


@dataclass(frozen=True)
class RecognitionOutput:
    """Validated output of a single recognize() call on one slice."""

    text: str
    lines: list[str] = field(default_factory=list)
    blocks: list[list[str]] = field(default_factory=list)
    confidence: float = 0.0


@dataclass(frozen=True)
class RecognitionResult:
    """Recognition of one source screenshot, slices already concatenated.

    ``blocks`` holds half-open (start, end) spans into ``lines``.
    """

    source_image_id: str
    text: str
    lines: list[str] = field(default_factory=list)
    blocks: list[tuple[int, int]] = field(default_factory=list)
    confidence: float = 0.0
    language: LanguageMix = LanguageMix.OTHER
    slice_count: int = 0
    error_message: str | None = None

    @classmethod
    def failed(cls, source_image_id: str, error_message: str) -> "RecognitionResult":
        """Zero-confidence placeholder for an image that could not be processed."""
        return cls(
            source_image_id=source_image_id,
            text="",
            confidence=0.0,
            language=LanguageMix.OTHER,
            error_message=error_message,
        )

    @property
    def is_failed(self) -> bool:
        return self.error_message is not None


@dataclass(frozen=True)
class RecognizedLine:
    """A recognized line with provenance back to its screenshot."""

    text: str
    source_image_id: str
    line_index: int
    confidence: float


@dataclass(frozen=True)
class CombinedRecognition:
    """All usable recognition results of a scan, in submission order."""

    text: str
    lines: list[RecognizedLine] = field(default_factory=list)
    blocks: list[list[RecognizedLine]] = field(default_factory=list)
    confidence: float = 0.0
    used_images: int = 0
    dropped_images: int = 0
