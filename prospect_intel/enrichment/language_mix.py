"""Filipino/English (Taglish) language-mix analysis."""

from prospect_intel.enrichment import lexicons
from prospect_intel.enrichment.matching import KeywordMatcher
from prospect_intel.enrichment.models import (
    BusinessOpportunity,
    LanguageMixAnalysis,
    LocalizedGreeting,
)


class LanguageMixAnalyzer:
    """Measures how much of the text is Filipino and classifies the style.

    filipino% = min(100, (keyword hits + cultural markers) / words * 100 * 3)
    english%  = 100 - filipino%
    taglish   = mean of both percentages while 20 < filipino% < 80, else 0
    """

    def __init__(self, matcher: KeywordMatcher) -> None:
        self._matcher = matcher

    def analyze(self, text: str) -> LanguageMixAnalysis:
        prepared = self._matcher.prepare(text)
        keywords = {
            category: self._matcher.find(prepared, words)
            for category, words in lexicons.FILIPINO_KEYWORDS.items()
        }
        intent = self._matcher.find(prepared, lexicons.FILIPINO_BUYING_INTENT_PHRASES)
        cultural = self._matcher.find(prepared, lexicons.CULTURAL_SIGNALS)

        filipino, english, taglish = self._percentages(prepared, keywords, cultural)
        style = self._communication_style(filipino, english, taglish)
        return LanguageMixAnalysis(
            filipino_percentage=filipino,
            english_percentage=english,
            taglish_score=taglish,
            communication_style=style,
            filipino_keywords=keywords,
            buying_intent_phrases=intent,
            cultural_signals=cultural,
            business_opportunity=self._business_opportunity(keywords, intent),
        )

    @staticmethod
    def localized_greeting(analysis: LanguageMixAnalysis) -> LocalizedGreeting:
        greeting, approach, tone = lexicons.LOCALIZED_GREETINGS.get(
            analysis.communication_style, lexicons.LOCALIZED_GREETINGS["mixed"]
        )
        return LocalizedGreeting(greeting=greeting, approach=approach, tone=tone)

    @staticmethod
    def _percentages(
        prepared: str, keywords: dict[str, list[str]], cultural: list[str]
    ) -> tuple[int, int, int]:
        words = [w for w in prepared.split() if len(w) >= lexicons.LANGUAGE_WORD_MIN_LENGTH]
        if not words:
            return 0, 0, 0

        hits = sum(len(found) for found in keywords.values()) + len(cultural)
        filipino = _round(
            min(100.0, hits / len(words) * 100 * lexicons.FILIPINO_PERCENT_MULTIPLIER)
        )
        english = 100 - filipino
        low, high = lexicons.TAGLISH_RANGE
        taglish = _round((filipino + english) / 2) if low < filipino < high else 0
        return filipino, english, taglish

    @staticmethod
    def _communication_style(filipino: int, english: int, taglish: int) -> str:
        if taglish > 50:
            return "taglish"
        if filipino > 70:
            return "pure_filipino"
        if english > 70:
            return "pure_english"
        return "mixed"

    @staticmethod
    def _business_opportunity(
        keywords: dict[str, list[str]], intent: list[str]
    ) -> BusinessOpportunity:
        indicators: list[str] = []
        score = 0
        business = keywords.get("business", [])
        if business:
            indicators.append("Filipino business keywords detected")
            score += len(business) * 10
        if intent:
            indicators.append("Buying intent phrases found")
            score += len(intent) * 15
        if any(loc in lexicons.BUSINESS_HUBS for loc in keywords.get("locations", [])):
            indicators.append("Located in business hub")
            score += 10
        score = min(100, score)
        return BusinessOpportunity(
            has_business_interest=score > 30,
            confidence_score=score,
            indicators=indicators,
        )


def _round(value: float) -> int:
    return int(value + 0.5)
