"""Dashboard statistics over queued visits."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Optional

from ..schemas.triage import TIER_ORDER, QueueEntry, QueueStats

__all__ = ["summarize"]


def summarize(entries: Iterable[QueueEntry], now: Optional[datetime] = None) -> QueueStats:
    """Count visits per status and tier and average the wait of waiting visits."""

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    visits = list(entries)
    statuses = Counter(entry.status for entry in visits)
    tiers = Counter(entry.priority_tier for entry in visits)

    waiting = [entry for entry in visits if entry.status == "waiting"]
    average_wait = 0
    if waiting:
        total_seconds = sum((now - entry.checked_in_at).total_seconds() for entry in waiting)
        average_wait = round(total_seconds / len(waiting) / 60)

    return QueueStats(
        total_waiting=statuses["waiting"],
        total_in_progress=statuses["in-progress"],
        total_discharged=statuses["discharged"],
        tier_counts={tier: tiers[tier] for tier in TIER_ORDER},
        average_wait_minutes=max(0, average_wait),
    )
