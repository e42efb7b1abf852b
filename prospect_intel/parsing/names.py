"""Name normalization used for entity and prospect deduplication."""

import re
import unicodedata
from typing import ClassVar

import icu  # type: ignore[import-untyped]

_WHITESPACE_RE = re.compile(r"\s+")


def clean_display_name(name: str) -> str:
    """Collapse whitespace in a name as it will be shown to users."""
    return _WHITESPACE_RE.sub(" ", name).strip()


class NameNormalizer:
    """Builds dedup keys: accent-folded, case-folded, whitespace-collapsed.

    "José  DELA Cruz" and "Jose dela Cruz" share the key "jose dela cruz".
    """

    _ICU_TRANSFORM: ClassVar[str] = "Any-Latin; Latin-ASCII; Lower"

    def __init__(self) -> None:
        self._transliterator: icu.Transliterator = icu.Transliterator.createInstance(
            self._ICU_TRANSFORM
        )

    def normalize(self, name: str) -> str:
        composed = unicodedata.normalize("NFC", name)
        folded = self._transliterator.transliterate(composed)
        return clean_display_name(folded).casefold()

    def fold(self, text: str) -> str:
        """Accent-fold and lowercase free text without collapsing lines."""
        return self._transliterator.transliterate(unicodedata.normalize("NFC", text))
