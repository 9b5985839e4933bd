"""Ordered queue of patient visits.

Active visits (waiting or in progress) are kept in a single total order:
urgency score descending, then check-in time ascending. Discharged visits
leave the order but remain available through :meth:`TriageQueue.get`.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from ..schemas.triage import QueueEntry, QueueStats, VisitStatus, VitalSigns
from .config import get_settings
from .errors import DuplicateIdentity, EmptyQueue, InvalidTransition, NotFound
from .scores import assess
from .stats import summarize

__all__ = ["TriageQueue", "build_entry"]

logger = logging.getLogger(__name__)

_NEXT_STATUS: Dict[str, str] = {
    "waiting": "in-progress",
    "in-progress": "discharged",
}


def build_entry(
    visit_id: str,
    *,
    checked_in_at: Optional[datetime] = None,
    vitals: Optional[VitalSigns] = None,
    status: VisitStatus = "waiting",
    patient_name: str = "",
    chief_complaint: str = "",
    pack_id: Optional[str] = None,
) -> QueueEntry:
    """Create an entry whose score and tier are computed from *vitals*."""

    vitals = vitals or VitalSigns()
    return QueueEntry(
        visit_id=visit_id,
        checked_in_at=checked_in_at or datetime.now(timezone.utc),
        vitals=vitals,
        assessment=assess(vitals, pack_id),
        status=status,
        patient_name=patient_name,
        chief_complaint=chief_complaint,
    )


def _order_key(entry: QueueEntry) -> Tuple[int, datetime]:
    return -entry.urgency_score, entry.checked_in_at


class TriageQueue:
    """Visits of one department or shift, ordered by urgency."""

    def __init__(self, name: Optional[str] = None, *, pack_id: Optional[str] = None) -> None:
        self.name = name or get_settings().department
        self.pack_id = pack_id
        self._entries: Dict[str, QueueEntry] = {}
        self._order: List[str] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, visit_id: object) -> bool:
        if not isinstance(visit_id, str):
            return False
        entry = self._entries.get(visit_id)
        return entry is not None and entry.is_active

    def __repr__(self) -> str:
        return f"<TriageQueue {self.name!r} active={self.size()}>"

    def _reorder(self) -> None:
        # sorted() is stable, so equal keys keep insertion order.
        self._order = [entry.visit_id for entry in sorted(self._entries.values(), key=_order_key)]

    def _active(self, visit_id: str) -> QueueEntry:
        entry = self._entries.get(visit_id)
        if entry is None or not entry.is_active:
            raise NotFound(visit_id)
        return entry

    def insert(self, entry: QueueEntry) -> QueueEntry:
        with self._lock:
            if entry.visit_id in self._entries:
                raise DuplicateIdentity(entry.visit_id)
            self._entries[entry.visit_id] = entry
            self._reorder()
        logger.info(
            "Queued visit %s in %s (score=%s, tier=%s)",
            entry.visit_id,
            self.name,
            entry.urgency_score,
            entry.priority_tier,
        )
        return entry

    def check_in(
        self,
        visit_id: str,
        *,
        checked_in_at: Optional[datetime] = None,
        vitals: Optional[VitalSigns] = None,
        patient_name: str = "",
        chief_complaint: str = "",
    ) -> QueueEntry:
        entry = build_entry(
            visit_id,
            checked_in_at=checked_in_at,
            vitals=vitals,
            patient_name=patient_name,
            chief_complaint=chief_complaint,
            pack_id=self.pack_id,
        )
        return self.insert(entry)

    def remove(self, visit_id: str, *, missing_ok: bool = False) -> Optional[QueueEntry]:
        """Delete a visit entirely; absence raises ``NotFound`` unless *missing_ok*."""

        with self._lock:
            entry = self._entries.pop(visit_id, None)
            if entry is None:
                if missing_ok:
                    return None
                raise NotFound(visit_id)
            self._order.remove(visit_id)
        logger.debug("Removed visit %s from %s", visit_id, self.name)
        return entry

    def update_vitals(self, visit_id: str, vitals: VitalSigns) -> QueueEntry:
        """Rescore an active visit and move it to its new position."""

        with self._lock:
            current = self._active(visit_id)
            updated = current.model_copy(
                update={"vitals": vitals, "assessment": assess(vitals, self.pack_id)}
            )
            self._entries[visit_id] = updated
            self._reorder()
        logger.info(
            "Rescored visit %s: %s -> %s (%s)",
            visit_id,
            current.urgency_score,
            updated.urgency_score,
            updated.priority_tier,
        )
        return updated

    def update_status(self, visit_id: str, status: str) -> QueueEntry:
        """Advance a visit along waiting -> in-progress -> discharged."""

        with self._lock:
            current = self._entries.get(visit_id)
            if current is None:
                raise NotFound(visit_id)
            if _NEXT_STATUS.get(current.status) != status:
                raise InvalidTransition(visit_id, current.status, status)
            updated = current.model_copy(update={"status": status})
            self._entries[visit_id] = updated
        logger.info("Visit %s moved from %s to %s", visit_id, current.status, status)
        return updated

    def get(self, visit_id: str) -> QueueEntry:
        """Look up a visit, discharged ones included."""

        entry = self._entries.get(visit_id)
        if entry is None:
            raise NotFound(visit_id)
        return entry

    def ordered(self) -> List[QueueEntry]:
        """Fresh list of active visits, most urgent first."""

        with self._lock:
            entries = [self._entries[visit_id] for visit_id in self._order]
        return [entry for entry in entries if entry.is_active]

    def peek(self) -> QueueEntry:
        with self._lock:
            for visit_id in self._order:
                entry = self._entries[visit_id]
                if entry.is_active:
                    return entry
        logger.debug("Peek on empty queue %s", self.name)
        raise EmptyQueue()

    def dequeue(self) -> QueueEntry:
        with self._lock:
            entry = self.peek()
            return self.remove(entry.visit_id)

    def size(self) -> int:
        with self._lock:
            return sum(1 for entry in self._entries.values() if entry.is_active)

    def is_empty(self) -> bool:
        return self.size() == 0

    def stats(self, now: Optional[datetime] = None) -> QueueStats:
        with self._lock:
            entries = list(self._entries.values())
        return summarize(entries, now)
