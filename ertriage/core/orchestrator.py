"""Entry points used by the storage and presentation layers.

These functions accept the loosely typed records those layers exchange
(intake events, vital-sign form submissions, store rows) and translate them
into calls on a :class:`TriageQueue`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, get_args

from pydantic import TypeAdapter

from ..schemas.triage import QueueEntry, VisitStatus
from .errors import InvalidTransition
from .normalizer.units import normalize_vitals
from .queue import TriageQueue, build_entry

__all__ = ["check_in", "record_vitals", "request_status", "rebuild_queue"]

logger = logging.getLogger(__name__)

_STATUSES = frozenset(get_args(VisitStatus))
_TIMESTAMP = TypeAdapter(datetime)


def _visit_id(event: Mapping[str, Any]) -> str:
    value = event.get("visit_id", event.get("id"))
    if value is None or str(value).strip() == "":
        raise ValueError("Intake event is missing a visit id")
    return str(value)


def _checked_in_at(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return _TIMESTAMP.validate_python(value)


def _patient_name(event: Mapping[str, Any]) -> str:
    name = event.get("patient_name")
    if name:
        return str(name).strip()
    parts = [str(event.get(key) or "").strip() for key in ("first_name", "last_name")]
    return " ".join(part for part in parts if part)


def _vitals_record(record: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    if record.get("vitals") is not None:
        return record["vitals"]
    # Store joins nest readings under vital_signs; the first one is current.
    readings = record.get("vital_signs")
    if isinstance(readings, Mapping):
        return readings
    if readings:
        return readings[0]
    return None


def _entry_from_record(record: Mapping[str, Any], pack_id: Optional[str]) -> QueueEntry:
    status = record.get("status") or "waiting"
    if status not in _STATUSES:
        raise ValueError(f"Unknown visit status: {status!r}")
    return build_entry(
        _visit_id(record),
        checked_in_at=_checked_in_at(record.get("checked_in_at")),
        vitals=normalize_vitals(_vitals_record(record)),
        status=status,
        patient_name=_patient_name(record),
        chief_complaint=str(record.get("chief_complaint") or ""),
        pack_id=pack_id,
    )


def check_in(queue: TriageQueue, event: Mapping[str, Any]) -> QueueEntry:
    """Queue a newly checked-in patient; vitals are optional."""

    entry = _entry_from_record({**event, "status": "waiting"}, queue.pack_id)
    return queue.insert(entry)


def record_vitals(queue: TriageQueue, visit_id: str, record: Mapping[str, Any]) -> QueueEntry:
    return queue.update_vitals(visit_id, normalize_vitals(record))


def request_status(queue: TriageQueue, visit_id: str, status: str) -> QueueEntry:
    """Apply a "Call" or "Discharge" action coming from the queue view."""

    if status not in _STATUSES:
        current = queue.get(visit_id).status
        raise InvalidTransition(visit_id, current, status)
    return queue.update_status(visit_id, status)


def rebuild_queue(
    records: Iterable[Mapping[str, Any]],
    name: Optional[str] = None,
    *,
    pack_id: Optional[str] = None,
) -> TriageQueue:
    """Build a fresh queue from store rows, rescoring every visit."""

    queue = TriageQueue(name, pack_id=pack_id)
    for record in records:
        queue.insert(_entry_from_record(record, pack_id))
    logger.debug("Rebuilt queue %s with %d active visits", queue.name, queue.size())
    return queue
