"""Score package with the pack model and the urgency scoring function."""

from .pack import ScoringPack, get_scoring_pack
from .urgency import assess, contributions, score, tier_for_score

__all__ = ["ScoringPack", "get_scoring_pack", "assess", "contributions", "score", "tier_for_score"]
