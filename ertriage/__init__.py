"""Emergency department triage scoring and patient ordering."""

from .core.errors import DuplicateIdentity, EmptyQueue, InvalidTransition, NotFound, TriageQueueError
from .core.queue import TriageQueue, build_entry
from .core.scores import assess, score, tier_for_score
from .schemas.triage import Assessment, PriorityTier, QueueEntry, QueueStats, VisitStatus, VitalSigns

__version__ = "0.1.0"

__all__ = [
    "Assessment",
    "DuplicateIdentity",
    "EmptyQueue",
    "InvalidTransition",
    "NotFound",
    "PriorityTier",
    "QueueEntry",
    "QueueStats",
    "TriageQueue",
    "TriageQueueError",
    "VisitStatus",
    "VitalSigns",
    "assess",
    "build_entry",
    "score",
    "tier_for_score",
]
