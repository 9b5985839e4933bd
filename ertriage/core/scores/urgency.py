"""Urgency scoring from a vital-sign snapshot.

Each vital contributes independently and the contributions are summed, so a
patient abnormal on several axes accumulates every penalty. Unmeasured
vitals contribute nothing.
"""

from __future__ import annotations

from typing import Dict, Optional

from ...schemas.triage import Assessment, PriorityTier, VitalSigns
from ..config import get_settings
from .pack import ScoringPack, get_scoring_pack

__all__ = ["contributions", "score", "tier_for_score", "assess"]


def _pack(pack_id: Optional[str]) -> ScoringPack:
    return get_scoring_pack(pack_id or get_settings().scoring_pack)


def contributions(vitals: VitalSigns, pack_id: Optional[str] = None) -> Dict[str, int]:
    """Points added by each vital covered by the pack."""

    pack = _pack(pack_id)
    return {name: rule.contribution(getattr(vitals, name)) for name, rule in pack.vitals.items()}


def score(vitals: VitalSigns, pack_id: Optional[str] = None) -> int:
    return sum(contributions(vitals, pack_id).values())


def tier_for_score(urgency_score: int, pack_id: Optional[str] = None) -> PriorityTier:
    return _pack(pack_id).tier_for(urgency_score)


def assess(vitals: Optional[VitalSigns] = None, pack_id: Optional[str] = None) -> Assessment:
    """Score *vitals* and attach the matching tier."""

    total = score(vitals or VitalSigns(), pack_id)
    return Assessment(urgency_score=total, priority_tier=tier_for_score(total, pack_id))
