import re
from collections import Counter
from collections.abc import Iterable

from prospect_intel.enrichment import lexicons
from prospect_intel.enrichment.matching import KeywordMatcher
from prospect_intel.enrichment.models import GeneralSignals, NamedEntities, Sentiment

_PERSON_RE = re.compile(r"\b[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)+\b")
_ORGANIZATION_RE = re.compile(
    r"\b[A-Z][A-Za-z&]+(?:[ \t]+[A-Z][A-Za-z&]+)*[ \t]+(?:"
    + "|".join(lexicons.ORGANIZATION_SUFFIXES)
    + r")\b\.?"
)
_LOCATION_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(loc) for loc in lexicons.KNOWN_LOCATIONS) + r")\b"
)
_NON_LETTERS_RE = re.compile(r"[^a-z]")


class GeneralEnricher:
    """Topic, interest, sentiment, keyword, entity and buying-intent detection."""

    def __init__(self, matcher: KeywordMatcher) -> None:
        self._matcher = matcher

    def analyze(self, text: str) -> GeneralSignals:
        prepared = self._matcher.prepare(text)
        return GeneralSignals(
            topics=self._categories(prepared, lexicons.TOPIC_KEYWORDS, lexicons.TOPIC_MIN_HITS),
            interests=self._categories(
                prepared, lexicons.INTEREST_KEYWORDS, lexicons.INTEREST_MIN_HITS
            ),
            sentiment=self._sentiment(prepared),
            keywords=self._top_keywords(prepared),
            entities=self._entities(text),
            industry_signals=[
                label
                for label, phrases in lexicons.INDUSTRY_SIGNALS.items()
                if self._matcher.find(prepared, phrases)
            ],
            buying_signals=self._matcher.find(prepared, lexicons.BUYING_SIGNALS),
        )

    def _categories(
        self, prepared: str, table: dict[str, tuple[str, ...]], min_hits: int
    ) -> list[str]:
        return [
            category
            for category, keywords in table.items()
            if self._matcher.count(prepared, keywords) >= min_hits
        ]

    def _sentiment(self, prepared: str) -> Sentiment:
        positive = self._matcher.count(prepared, lexicons.POSITIVE_WORDS)
        negative = self._matcher.count(prepared, lexicons.NEGATIVE_WORDS)
        if positive > negative:
            return Sentiment.POSITIVE
        if negative > positive:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL

    @staticmethod
    def _top_keywords(prepared: str) -> list[str]:
        counts: Counter[str] = Counter()
        for word in prepared.split():
            cleaned = _NON_LETTERS_RE.sub("", word)
            if len(cleaned) >= lexicons.KEYWORD_MIN_LENGTH and cleaned not in lexicons.KEYWORD_STOPWORDS:
                counts[cleaned] += 1
        return [word for word, _ in counts.most_common(lexicons.KEYWORD_TOP_N)]

    @staticmethod
    def _entities(text: str) -> NamedEntities:
        return NamedEntities(
            people=_unique(_PERSON_RE.findall(text)),
            organizations=_unique(m.rstrip(".") for m in _ORGANIZATION_RE.findall(text)),
            locations=_unique(_LOCATION_RE.findall(text)),
        )


def _unique(items: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return list(seen)
