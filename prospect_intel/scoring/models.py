from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from prospect_intel.parsing.models import ParsedEntity, Provenance


class LeadBucket(str, Enum):
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"

    @classmethod
    def for_score(cls, score: int) -> "LeadBucket":
        if score >= 75:
            return cls.HOT
        if score >= 50:
            return cls.WARM
        return cls.COLD


@dataclass(frozen=True)
class ScoredProspect:
    """One distinct person surfaced by a scan, with a 0-100 score.

    ``metadata`` is the subset of the enrichment bundle relevant to this
    person plus the list of applied score ``reasons``.
    """

    name: str
    normalized_name: str
    score: int
    bucket: LeadBucket
    source_entity: ParsedEntity
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def source_kind(self) -> str:
        return self.source_entity.kind

    @property
    def provenance(self) -> Provenance:
        return self.source_entity.provenance
