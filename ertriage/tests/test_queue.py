from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from ertriage.core.errors import DuplicateIdentity, EmptyQueue, InvalidTransition, NotFound
from ertriage.core.queue import TriageQueue, build_entry
from ertriage.schemas.triage import VitalSigns

T0 = datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)

CRITICAL = VitalSigns(temperature=40, heart_rate=130, blood_pressure_sys=170, oxygen_saturation=85)
MODERATE = VitalSigns(oxygen_saturation=92)


@pytest.fixture
def queue() -> TriageQueue:
    q = TriageQueue("night-shift")
    q.check_in("a", checked_in_at=T0, patient_name="Ana")
    q.check_in("b", checked_in_at=T0 + timedelta(minutes=1), vitals=MODERATE)
    q.check_in("c", checked_in_at=T0 + timedelta(minutes=2), vitals=CRITICAL)
    q.check_in("d", checked_in_at=T0 + timedelta(minutes=3), vitals=MODERATE)
    return q


def _ids(q: TriageQueue) -> list[str]:
    return [entry.visit_id for entry in q.ordered()]


def test_order_is_score_desc_then_arrival_asc(queue):
    assert _ids(queue) == ["c", "b", "d", "a"]
    entries = queue.ordered()
    for first, second in zip(entries, entries[1:]):
        assert (first.urgency_score, -first.checked_in_at.timestamp()) >= (
            second.urgency_score,
            -second.checked_in_at.timestamp(),
        )


def test_later_insert_with_earlier_arrival_goes_first_among_ties(queue):
    queue.check_in("e", checked_in_at=T0 - timedelta(minutes=5), vitals=MODERATE)
    assert _ids(queue) == ["c", "e", "b", "d", "a"]


def test_ordered_is_idempotent_and_detached(queue):
    first = queue.ordered()
    second = queue.ordered()
    assert first == second
    first.clear()
    assert queue.size() == 4


def test_insert_duplicate_identity_fails(queue):
    with pytest.raises(DuplicateIdentity) as excinfo:
        queue.insert(build_entry("a", checked_in_at=T0))
    assert excinfo.value.visit_id == "a"
    assert queue.size() == 4


def test_insert_then_remove_round_trip(queue):
    before = queue.ordered()
    entry = build_entry("z", checked_in_at=T0, vitals=CRITICAL)
    queue.insert(entry)
    assert queue.peek().visit_id == "z"
    queue.remove(entry.visit_id)
    assert queue.ordered() == before


def test_remove_missing(queue):
    with pytest.raises(NotFound):
        queue.remove("nope")
    assert queue.remove("nope", missing_ok=True) is None


def test_update_vitals_rescores_and_reorders(queue):
    updated = queue.update_vitals("a", CRITICAL)
    assert updated.urgency_score == 100
    assert updated.priority_tier == "critical"
    assert updated.checked_in_at == T0
    assert updated.patient_name == "Ana"
    assert _ids(queue) == ["a", "c", "b", "d"]


def test_update_vitals_can_lower_priority(queue):
    queue.update_vitals("c", VitalSigns())
    assert queue.get("c").priority_tier == "low"
    assert _ids(queue) == ["b", "d", "a", "c"]


def test_update_vitals_unknown_visit(queue):
    with pytest.raises(NotFound):
        queue.update_vitals("nope", MODERATE)


def test_status_moves_forward_only(queue):
    assert queue.update_status("b", "in-progress").status == "in-progress"
    assert "b" in queue
    queue.update_status("b", "discharged")
    assert "b" not in queue
    assert _ids(queue) == ["c", "d", "a"]
    assert queue.get("b").status == "discharged"
    for status in ("waiting", "in-progress", "discharged"):
        with pytest.raises(InvalidTransition):
            queue.update_status("b", status)


def test_waiting_cannot_skip_to_discharged(queue):
    with pytest.raises(InvalidTransition) as excinfo:
        queue.update_status("a", "discharged")
    assert excinfo.value.current == "waiting"
    assert excinfo.value.requested == "discharged"


def test_in_progress_cannot_go_back(queue):
    queue.update_status("a", "in-progress")
    with pytest.raises(InvalidTransition):
        queue.update_status("a", "waiting")


def test_update_status_unknown_visit(queue):
    with pytest.raises(NotFound):
        queue.update_status("nope", "in-progress")


def test_discharged_visit_cannot_be_rescored(queue):
    queue.update_status("a", "in-progress")
    queue.update_status("a", "discharged")
    with pytest.raises(NotFound):
        queue.update_vitals("a", CRITICAL)


def test_in_progress_visits_stay_in_order(queue):
    queue.update_status("c", "in-progress")
    assert queue.peek().visit_id == "c"
    assert queue.size() == 4


def test_peek_and_dequeue(queue):
    assert queue.peek().visit_id == "c"
    assert queue.dequeue().visit_id == "c"
    assert queue.peek().visit_id == "b"
    assert queue.size() == 3


def test_empty_queue():
    q = TriageQueue()
    assert q.is_empty()
    assert len(q) == 0
    with pytest.raises(EmptyQueue):
        q.peek()
    with pytest.raises(EmptyQueue):
        q.dequeue()
    assert q.ordered() == []


def test_queue_named_after_configured_department(monkeypatch: pytest.MonkeyPatch):
    from ertriage.core.config import get_settings

    monkeypatch.setenv("DEPARTMENT", "pediatrics")
    get_settings.cache_clear()
    assert TriageQueue().name == "pediatrics"


def test_queues_are_independent():
    first, second = TriageQueue("a"), TriageQueue("b")
    first.check_in("x", checked_in_at=T0)
    assert second.is_empty()
    second.check_in("x", checked_in_at=T0)
    assert first.size() == second.size() == 1


def test_naive_check_in_time_is_treated_as_utc():
    q = TriageQueue()
    entry = q.check_in("n", checked_in_at=datetime(2026, 10, 18, 8, 0))
    q.check_in("m", checked_in_at=T0 + timedelta(seconds=1))
    assert entry.checked_in_at == T0
    assert [e.visit_id for e in q.ordered()] == ["n", "m"]


def test_membership_ignores_non_string_keys(queue):
    assert "a" in queue
    assert ["a"] not in queue
    assert 1 not in queue


def test_concurrent_mutations_keep_order_consistent():
    q = TriageQueue("er")
    snapshots = [VitalSigns(), MODERATE, CRITICAL]
    start = threading.Barrier(5)
    lock = threading.Lock()
    discharged: set[str] = set()
    dequeued: set[str] = set()
    created: set[str] = set()

    def worker(n: int) -> None:
        start.wait()
        for k in range(25):
            visit_id = f"w{n}-{k}"
            q.check_in(
                visit_id,
                checked_in_at=T0 + timedelta(seconds=n * 100 + k),
                vitals=snapshots[k % 3],
            )
            with lock:
                created.add(visit_id)
            try:
                q.update_vitals(visit_id, snapshots[(k + n) % 3])
                if k % 4 == 0:
                    q.update_status(visit_id, "in-progress")
                    q.update_status(visit_id, "discharged")
                    with lock:
                        discharged.add(visit_id)
            except NotFound:
                # Taken by the dequeuing thread in between.
                pass

    def drain() -> None:
        start.wait()
        for _ in range(20):
            try:
                entry = q.dequeue()
            except EmptyQueue:
                continue
            with lock:
                dequeued.add(entry.visit_id)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    threads.append(threading.Thread(target=drain))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    ordered = q.ordered()
    assert ordered == sorted(ordered, key=lambda e: (-e.urgency_score, e.checked_in_at))
    assert {entry.visit_id for entry in ordered} == created - discharged - dequeued
    assert q.size() == len(ordered)
