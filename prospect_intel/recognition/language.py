"""Language-mix guess from closed sets of Filipino function words and Taglish markers."""

from prospect_intel.recognition.models import LanguageMix

FILIPINO_FUNCTION_WORDS: frozenset[str] = frozenset(
    {"ng", "mga", "sa", "ang", "na", "ay", "ko", "mo", "ka"}
)
TAGLISH_MARKERS: frozenset[str] = frozenset(
    {"kasi", "pero", "yung", "lang", "talaga", "naman"}
)

TAGLISH_MARKER_RATIO = 0.02
FILIPINO_MIXED_RANGE = (0.02, 0.15)
FILIPINO_DOMINANT_RATIO = 0.15
ENGLISH_MAX_FILIPINO_RATIO = 0.01

_STRIP_CHARS = ".,!?;:\"'()[]{}…"


def detect_language_mix(text: str) -> LanguageMix:
    words = [w.strip(_STRIP_CHARS) for w in text.lower().split()]
    words = [w for w in words if w]
    if not words:
        return LanguageMix.OTHER

    total = len(words)
    filipino_ratio = sum(1 for w in words if w in FILIPINO_FUNCTION_WORDS) / total
    marker_ratio = sum(1 for w in words if w in TAGLISH_MARKERS) / total

    low, high = FILIPINO_MIXED_RANGE
    if marker_ratio > TAGLISH_MARKER_RATIO or low < filipino_ratio < high:
        return LanguageMix.TAGLISH
    if filipino_ratio > FILIPINO_DOMINANT_RATIO:
        return LanguageMix.FILIPINO
    if filipino_ratio < ENGLISH_MAX_FILIPINO_RATIO:
        return LanguageMix.ENGLISH
    return LanguageMix.OTHER
