"""Prospect scoring: fuses parsed entities with scan-wide enrichment."""

from collections.abc import Sequence
from dataclasses import asdict
from typing import Any, ClassVar

from prospect_intel.enrichment.language_mix import LanguageMixAnalyzer
from prospect_intel.enrichment.models import EnrichmentBundle
from prospect_intel.logging.logger import Log
from prospect_intel.parsing.models import FriendRow, ParsedEntity, Post, entity_name
from prospect_intel.parsing.names import NameNormalizer, clean_display_name
from prospect_intel.scoring.models import LeadBucket, ScoredProspect


class ProspectScorer:
    """Scores each named entity and keeps one prospect per normalized name.

    Friend rows start lower than post and comment authors. Each bonus is
    applied at most once; the total is clamped to [0, 100]. When the same
    person appears through several entities the highest score wins and the
    metadata of the others is merged underneath it.
    """

    FRIEND_BASE: ClassVar[int] = 40
    AUTHOR_BASE: ClassVar[int] = 50

    # (threshold, bonus), highest tier first
    MUTUAL_TIERS: ClassVar[tuple[tuple[int, int], ...]] = ((20, 20), (10, 10))

    # (friend bonus, author bonus)
    BUYING_INTENT_BONUS: ClassVar[tuple[int, int]] = (10, 20)
    DECISION_MAKER_BONUS: ClassVar[tuple[int, int]] = (10, 15)
    OPPORTUNITY_BONUS: ClassVar[tuple[int, int]] = (10, 15)
    BUSINESS_KEYWORD_BONUS: ClassVar[tuple[int, int]] = (10, 5)

    DECISION_MAKER_MIN_SIGNALS: ClassVar[int] = 2
    OPPORTUNITY_MIN_SCORE: ClassVar[int] = 60
    REACTIONS_THRESHOLD: ClassVar[int] = 100
    COMMENTS_THRESHOLD: ClassVar[int] = 20
    ENGAGEMENT_BONUS: ClassVar[int] = 5

    def __init__(self, name_normalizer: NameNormalizer | None = None) -> None:
        self._names = name_normalizer if name_normalizer is not None else NameNormalizer()

    def score(
        self, entities: Sequence[ParsedEntity], enrichment: EnrichmentBundle
    ) -> list[ScoredProspect]:
        """Return prospects sorted by descending score."""
        by_name: dict[str, ScoredProspect] = {}
        for entity in entities:
            name = entity_name(entity)
            if not name:
                continue
            prospect = self._score_entity(entity, clean_display_name(name), enrichment)
            existing = by_name.get(prospect.normalized_name)
            by_name[prospect.normalized_name] = (
                prospect if existing is None else self._merge(existing, prospect)
            )

        prospects = sorted(by_name.values(), key=lambda p: p.score, reverse=True)
        Log.info(
            f"Scored {len(prospects)} prospect(s) from {len(entities)} entities"
        )
        return prospects

    def _score_entity(
        self, entity: ParsedEntity, name: str, enrichment: EnrichmentBundle
    ) -> ScoredProspect:
        is_friend = isinstance(entity, FriendRow)
        pick = 0 if is_friend else 1
        score = self.FRIEND_BASE if is_friend else self.AUTHOR_BASE
        reasons: list[str] = []

        if isinstance(entity, FriendRow) and entity.mutual_count is not None:
            for threshold, bonus in self.MUTUAL_TIERS:
                if entity.mutual_count > threshold:
                    score += bonus
                    reasons.append(f"More than {threshold} mutual friends")
                    break

        if enrichment.buying_signals:
            score += self.BUYING_INTENT_BONUS[pick]
            reasons.append("Buying intent expressed")

        if enrichment.personality.decision_maker_signals > self.DECISION_MAKER_MIN_SIGNALS:
            score += self.DECISION_MAKER_BONUS[pick]
            reasons.append("Decision-maker signals")

        if enrichment.opportunity_score > self.OPPORTUNITY_MIN_SCORE:
            score += self.OPPORTUNITY_BONUS[pick]
            reasons.append("High opportunity score")

        if isinstance(entity, Post):
            if (entity.reaction_count or 0) > self.REACTIONS_THRESHOLD:
                score += self.ENGAGEMENT_BONUS
                reasons.append("Highly reacted post")
            if (entity.comment_count or 0) > self.COMMENTS_THRESHOLD:
                score += self.ENGAGEMENT_BONUS
                reasons.append("Highly discussed post")

        if enrichment.language_mix.business_keywords:
            score += self.BUSINESS_KEYWORD_BONUS[pick]
            reasons.append("Filipino business keywords")

        score = max(0, min(100, score))
        return ScoredProspect(
            name=name,
            normalized_name=self._names.normalize(name),
            score=score,
            bucket=LeadBucket.for_score(score),
            source_entity=entity,
            metadata=self._metadata(entity, enrichment, reasons),
        )

    @staticmethod
    def _metadata(
        entity: ParsedEntity, enrichment: EnrichmentBundle, reasons: list[str]
    ) -> dict[str, Any]:
        metadata: dict[str, Any] = {
            "sources": [entity.kind],
            "reasons": reasons,
            "buying_signals": enrichment.buying_signals,
            "decision_maker_signals": enrichment.personality.decision_maker_signals,
            "opportunity_score": enrichment.opportunity_score,
            "urgency_score": enrichment.urgency_score,
            "communication_style": enrichment.language_mix.communication_style,
            "personality_type": enrichment.personality.personality_type,
            "business_keywords": enrichment.language_mix.business_keywords,
            "localized_greeting": asdict(
                LanguageMixAnalyzer.localized_greeting(enrichment.language_mix)
            ),
        }
        if isinstance(entity, FriendRow):
            metadata["mutual_count"] = entity.mutual_count
            metadata["extra_info"] = entity.extra_info
        elif isinstance(entity, Post):
            metadata["reaction_count"] = entity.reaction_count
            metadata["comment_count"] = entity.comment_count
            metadata["share_count"] = entity.share_count
        return metadata

    @staticmethod
    def _merge(first: ScoredProspect, second: ScoredProspect) -> ScoredProspect:
        winner, other = (second, first) if second.score > first.score else (first, second)
        metadata = dict(other.metadata)
        for key, value in winner.metadata.items():
            if value is not None or key not in metadata:
                metadata[key] = value
        metadata["sources"] = [*winner.metadata["sources"], *other.metadata["sources"]]
        metadata["reasons"] = list(
            dict.fromkeys([*winner.metadata["reasons"], *other.metadata["reasons"]])
        )
        return ScoredProspect(
            name=winner.name,
            normalized_name=winner.normalized_name,
            score=winner.score,
            bucket=winner.bucket,
            source_entity=winner.source_entity,
            metadata=metadata,
        )
