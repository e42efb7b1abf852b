"""Pain-point, urgency and buying-readiness detection.

Each category in ``lexicons.PAIN_CATEGORIES`` activates on one keyword hit.
Severity follows the hit count only: one hit is low, two medium, three or
more high. The category default only orders pain points of equal severity.
Scores are bounded to [0, 100]:

    urgency     = urgency markers * 10 + frustration markers * 5
    opportunity = high * 20 + medium * 10 + urgency * 0.3 + categories * 5
"""

import math

from prospect_intel.enrichment import lexicons
from prospect_intel.enrichment.matching import KeywordMatcher
from prospect_intel.enrichment.models import (
    BuyingReadiness,
    OutreachStrategy,
    PainPoint,
    PainPointAnalysis,
    Readiness,
    Severity,
)

_READINESS_RANK = {Readiness.COLD: 0, Readiness.WARM: 1, Readiness.HOT: 2}


class PainPointDetector:
    def __init__(self, matcher: KeywordMatcher) -> None:
        self._matcher = matcher

    def analyze(self, text: str) -> PainPointAnalysis:
        prepared = self._matcher.prepare(text)

        pain_points: list[PainPoint] = []
        total_signals = 0
        for category, (default, keywords, description) in lexicons.PAIN_CATEGORIES.items():
            found = self._matcher.find(prepared, keywords)
            if not found:
                continue
            total_signals += len(found)
            pain_points.append(
                PainPoint(
                    category=category,
                    display_name=category.replace("_", " ").title(),
                    severity=_severity(len(found)),
                    category_severity=Severity(default),
                    description=description,
                    keywords=found,
                )
            )
        pain_points.sort(key=lambda p: (p.severity.rank, p.category_severity.rank), reverse=True)

        urgency = self._urgency_score(prepared)
        high = sum(1 for p in pain_points if p.severity is Severity.HIGH)
        medium = sum(1 for p in pain_points if p.severity is Severity.MEDIUM)
        opportunity = min(
            100, _round_half_up(high * 20 + medium * 10 + urgency * 0.3 + len(pain_points) * 5)
        )

        readiness = _buying_readiness(high, urgency, opportunity, total_signals)
        return PainPointAnalysis(
            pain_points=pain_points,
            urgency_score=urgency,
            opportunity_score=opportunity,
            total_pain_signals=total_signals,
            buying_readiness=readiness,
            outreach=_outreach_strategy(readiness.level, pain_points),
        )

    def _urgency_score(self, prepared: str) -> int:
        urgency = self._matcher.count(prepared, lexicons.URGENCY_INDICATORS)
        frustration = self._matcher.count(prepared, lexicons.FRUSTRATION_INDICATORS)
        return min(
            100, urgency * lexicons.URGENCY_POINTS + frustration * lexicons.FRUSTRATION_POINTS
        )


def _severity(hits: int) -> Severity:
    if hits >= 3:
        return Severity.HIGH
    if hits >= 2:
        return Severity.MEDIUM
    return Severity.LOW


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _buying_readiness(
    high_count: int, urgency: int, opportunity: int, total_signals: int
) -> BuyingReadiness:
    level = Readiness.COLD
    reasons: list[str] = []

    def raise_to(candidate: Readiness, reason: str) -> None:
        nonlocal level
        if _READINESS_RANK[candidate] > _READINESS_RANK[level]:
            level = candidate
        reasons.append(reason)

    if urgency >= 50:
        raise_to(Readiness.HOT, "High urgency detected in communication")
    if high_count >= 2:
        raise_to(Readiness.WARM, "Multiple high-severity pain points identified")
    if opportunity >= 70:
        raise_to(Readiness.HOT, "Strong opportunity for solution")
    elif opportunity >= 40:
        raise_to(Readiness.WARM, "Moderate opportunity for solution")
    if total_signals >= 5:
        raise_to(Readiness.WARM, "Frequent mentions of challenges")

    if not reasons:
        reasons.append("Limited pain signals detected")
    return BuyingReadiness(level=level, reasons=reasons)


def _outreach_strategy(level: Readiness, pain_points: list[PainPoint]) -> OutreachStrategy:
    approach, timing = lexicons.OUTREACH_STRATEGIES[level.value]
    talking_points = [
        f"Address {p.display_name.lower()}: {p.description}"
        for p in pain_points[: lexicons.OUTREACH_TALKING_POINTS]
    ]
    return OutreachStrategy(approach=approach, timing=timing, talking_points=talking_points)
