"""Word-boundary keyword matching shared by all analyzers."""

import re
from collections.abc import Iterable
from functools import lru_cache

from prospect_intel.parsing.names import NameNormalizer


@lru_cache(maxsize=4096)
def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![\w-]){re.escape(keyword)}(?![\w-])")


class KeywordMatcher:
    """Finds lexicon entries in text on word boundaries.

    Text is accent-folded and lowercased once via :meth:`prepare`; lexicon
    entries are expected lowercase ASCII.
    """

    def __init__(self, normalizer: NameNormalizer | None = None) -> None:
        self._normalizer = normalizer if normalizer is not None else NameNormalizer()

    def prepare(self, text: str) -> str:
        return self._normalizer.fold(text).lower()

    def find(self, prepared_text: str, keywords: Iterable[str]) -> list[str]:
        """Distinct keywords present in ``prepared_text``, in lexicon order."""
        found: list[str] = []
        for keyword in keywords:
            if keyword not in found and _keyword_pattern(keyword).search(prepared_text):
                found.append(keyword)
        return found

    def count(self, prepared_text: str, keywords: Iterable[str]) -> int:
        return len(self.find(prepared_text, keywords))
