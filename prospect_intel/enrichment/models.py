from dataclasses import dataclass, field
from enum import Enum


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class Readiness(str, Enum):
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


@dataclass(frozen=True)
class NamedEntities:
    people: list[str] = field(default_factory=list)
    organizations: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GeneralSignals:
    """Topic, sentiment, entity and buying-intent signals over the full text."""

    topics: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    sentiment: Sentiment = Sentiment.NEUTRAL
    keywords: list[str] = field(default_factory=list)
    entities: NamedEntities = field(default_factory=NamedEntities)
    industry_signals: list[str] = field(default_factory=list)
    buying_signals: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class BusinessOpportunity:
    has_business_interest: bool = False
    confidence_score: int = 0
    indicators: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LocalizedGreeting:
    greeting: str
    approach: str
    tone: str


@dataclass(frozen=True)
class LanguageMixAnalysis:
    """Filipino/English mix of the text plus Filipino keyword hits."""

    filipino_percentage: int = 0
    english_percentage: int = 0
    taglish_score: int = 0
    communication_style: str = "mixed"
    filipino_keywords: dict[str, list[str]] = field(default_factory=dict)
    buying_intent_phrases: list[str] = field(default_factory=list)
    cultural_signals: list[str] = field(default_factory=list)
    business_opportunity: BusinessOpportunity = field(default_factory=BusinessOpportunity)

    @property
    def business_keywords(self) -> list[str]:
        return self.filipino_keywords.get("business", [])


@dataclass(frozen=True)
class PersonalityProfile:
    communication_style: str = "professional"
    engagement_level: str = "low"
    decision_maker_signals: int = 0
    influencer_signals: int = 0
    traits: list[str] = field(default_factory=list)
    personality_type: str = "Connector"


@dataclass(frozen=True)
class PainPoint:
    category: str
    display_name: str
    severity: Severity
    description: str
    keywords: list[str] = field(default_factory=list)
    category_severity: Severity = Severity.MEDIUM


@dataclass(frozen=True)
class BuyingReadiness:
    level: Readiness = Readiness.COLD
    reasons: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class OutreachStrategy:
    approach: str
    timing: str
    talking_points: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PainPointAnalysis:
    pain_points: list[PainPoint] = field(default_factory=list)
    urgency_score: int = 0
    opportunity_score: int = 0
    total_pain_signals: int = 0
    buying_readiness: BuyingReadiness = field(default_factory=BuyingReadiness)
    outreach: OutreachStrategy | None = None


@dataclass(frozen=True)
class EnrichmentBundle:
    """Merged output of the four analyzers for one scan."""

    general: GeneralSignals
    language_mix: LanguageMixAnalysis
    personality: PersonalityProfile
    pain: PainPointAnalysis

    @property
    def buying_signals(self) -> list[str]:
        merged = list(self.general.buying_signals)
        merged.extend(p for p in self.language_mix.buying_intent_phrases if p not in merged)
        return merged

    @property
    def opportunity_score(self) -> int:
        return self.pain.opportunity_score

    @property
    def urgency_score(self) -> int:
        return self.pain.urgency_score
