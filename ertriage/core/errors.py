"""Failures reported by the triage queue."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "TriageQueueError",
    "DuplicateIdentity",
    "NotFound",
    "InvalidTransition",
    "EmptyQueue",
]


class TriageQueueError(Exception):
    """Base class for every error raised by the ordered queue."""


@dataclass(frozen=True)
class DuplicateIdentity(TriageQueueError):
    visit_id: str

    def __str__(self) -> str:
        return f"Visit '{self.visit_id}' is already queued"


@dataclass(frozen=True)
class NotFound(TriageQueueError):
    visit_id: str

    def __str__(self) -> str:
        return f"Visit '{self.visit_id}' is not in the active queue"


@dataclass(frozen=True)
class InvalidTransition(TriageQueueError):
    visit_id: str
    current: str
    requested: str

    def __str__(self) -> str:
        return f"Visit '{self.visit_id}' cannot move from '{self.current}' to '{self.requested}'"


@dataclass(frozen=True)
class EmptyQueue(TriageQueueError):
    def __str__(self) -> str:
        return "No active visits in queue"
