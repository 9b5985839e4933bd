"""Validated model of a vital-sign scoring pack."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field, field_validator, model_validator

from ...content import load_pack
from ...schemas.common import StrictModel
from ...schemas.triage import PriorityTier, VitalSigns

__all__ = ["Band", "VitalRule", "TierThreshold", "PackMeta", "ScoringPack", "get_scoring_pack"]


class Band(StrictModel):
    """Strict thresholds; a reading matches when above ``above`` or below ``below``."""

    points: int = Field(ge=0)
    above: Optional[float] = None
    below: Optional[float] = None

    def matches(self, value: float) -> bool:
        if self.above is not None and value > self.above:
            return True
        if self.below is not None and value < self.below:
            return True
        return False


class VitalRule(StrictModel):
    severe: Band
    moderate: Band

    def contribution(self, value: Optional[float]) -> int:
        # Moderate bands overlap the severe ones, so order of evaluation matters.
        if value is None:
            return 0
        if self.severe.matches(value):
            return self.severe.points
        if self.moderate.matches(value):
            return self.moderate.points
        return 0


class TierThreshold(StrictModel):
    tier: PriorityTier
    min_score: int = Field(ge=0)


class PackMeta(StrictModel):
    name: str
    version: str = "1.0.0"


class ScoringPack(StrictModel):
    meta: PackMeta
    vitals: Dict[str, VitalRule]
    tiers: List[TierThreshold]

    @field_validator("vitals")
    @classmethod
    def _known_vitals(cls, value: Dict[str, VitalRule]) -> Dict[str, VitalRule]:
        unknown = sorted(set(value) - set(VitalSigns.model_fields))
        if unknown:
            raise ValueError(f"Unknown vital signs in pack: {', '.join(unknown)}")
        return value

    @model_validator(mode="after")
    def _tiers_cover_zero(self) -> "ScoringPack":
        if not any(threshold.min_score == 0 for threshold in self.tiers):
            raise ValueError("Scoring pack must define a tier starting at score 0")
        return self

    def tier_for(self, score: int) -> PriorityTier:
        for threshold in sorted(self.tiers, key=lambda t: t.min_score, reverse=True):
            if score >= threshold.min_score:
                return threshold.tier
        # Negative totals cannot come out of the rule table.
        raise ValueError(f"Score {score} is below every tier threshold")


@lru_cache(maxsize=8)
def get_scoring_pack(pack_id: str) -> ScoringPack:
    return ScoringPack.model_validate(load_pack(pack_id))
