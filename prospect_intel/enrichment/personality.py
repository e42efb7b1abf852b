from prospect_intel.enrichment import lexicons
from prospect_intel.enrichment.matching import KeywordMatcher
from prospect_intel.enrichment.models import PersonalityProfile


class PersonalityProfiler:
    """Communication style, engagement and trait profile from the scan text."""

    def __init__(self, matcher: KeywordMatcher) -> None:
        self._matcher = matcher

    def analyze(self, text: str, post_count: int = 0) -> PersonalityProfile:
        prepared = self._matcher.prepare(text)
        return PersonalityProfile(
            communication_style=self._communication_style(prepared),
            engagement_level=self._engagement_level(post_count),
            decision_maker_signals=self._matcher.count(prepared, lexicons.DECISION_MAKER_SIGNALS),
            influencer_signals=self._matcher.count(prepared, lexicons.INFLUENCER_SIGNALS),
            traits=self._traits(prepared),
            personality_type=self._personality_type(prepared),
        )

    def _communication_style(self, prepared: str) -> str:
        formal = self._matcher.count(prepared, lexicons.FORMAL_VOCABULARY)
        casual = self._matcher.count(prepared, lexicons.CASUAL_VOCABULARY)
        if formal > casual * lexicons.FORMAL_DOMINANCE_RATIO:
            return "formal"
        if casual > formal * lexicons.FORMAL_DOMINANCE_RATIO:
            return "casual"
        if formal and casual:
            return "friendly"
        return "professional"

    @staticmethod
    def _engagement_level(post_count: int) -> str:
        for threshold, level in lexicons.ENGAGEMENT_THRESHOLDS:
            if post_count >= threshold:
                return level
        return "low"

    def _traits(self, prepared: str) -> list[str]:
        traits = [
            trait
            for trait, keywords in lexicons.TRAIT_KEYWORDS.items()
            if self._matcher.count(prepared, keywords) >= lexicons.TRAIT_MIN_HITS
        ]
        return traits[: lexicons.TRAIT_MAX]

    def _personality_type(self, prepared: str) -> str:
        best_type = lexicons.DEFAULT_PERSONALITY_TYPE
        best_score = 0
        for personality_type, keywords in lexicons.PERSONALITY_TYPE_INDICATORS.items():
            score = self._matcher.count(prepared, keywords)
            if score > best_score:
                best_type, best_score = personality_type, score
        return best_type
