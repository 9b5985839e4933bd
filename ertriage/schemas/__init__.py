"""Typed shapes exchanged at the triage core boundary."""

from .triage import (
    ACTIVE_STATUSES,
    TIER_ORDER,
    Assessment,
    PriorityTier,
    QueueEntry,
    QueueStats,
    VisitStatus,
    VitalSigns,
)

__all__ = [
    "ACTIVE_STATUSES",
    "TIER_ORDER",
    "Assessment",
    "PriorityTier",
    "QueueEntry",
    "QueueStats",
    "VisitStatus",
    "VitalSigns",
]
