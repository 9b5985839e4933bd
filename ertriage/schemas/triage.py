"""Schemas describing vital signs, assessments and queued visits."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Literal, Optional

from pydantic import Field, field_validator

from .common import StrictModel

PriorityTier = Literal["critical", "urgent", "moderate", "low"]
VisitStatus = Literal["waiting", "in-progress", "discharged"]

TIER_ORDER: tuple[PriorityTier, ...] = ("critical", "urgent", "moderate", "low")
ACTIVE_STATUSES: frozenset[str] = frozenset({"waiting", "in-progress"})


class VitalSigns(StrictModel):
    """Snapshot of vital signs; any reading may be unmeasured."""

    temperature: Optional[float] = Field(default=None, ge=0)
    heart_rate: Optional[float] = Field(default=None, ge=0)
    blood_pressure_sys: Optional[float] = Field(default=None, ge=0)
    blood_pressure_dia: Optional[float] = Field(default=None, ge=0)
    respiratory_rate: Optional[float] = Field(default=None, ge=0)
    oxygen_saturation: Optional[float] = Field(default=None, ge=0, le=100)


class Assessment(StrictModel):
    urgency_score: int = Field(ge=0)
    priority_tier: PriorityTier


class QueueEntry(StrictModel):
    """One patient visit as seen by the ordering logic."""

    visit_id: str = Field(min_length=1)
    checked_in_at: datetime
    vitals: VitalSigns = VitalSigns()
    assessment: Assessment
    status: VisitStatus = "waiting"
    patient_name: str = ""
    chief_complaint: str = ""

    @field_validator("checked_in_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def urgency_score(self) -> int:
        return self.assessment.urgency_score

    @property
    def priority_tier(self) -> PriorityTier:
        return self.assessment.priority_tier

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class QueueStats(StrictModel):
    total_waiting: int = 0
    total_in_progress: int = 0
    total_discharged: int = 0
    tier_counts: Dict[str, int] = Field(default_factory=lambda: {tier: 0 for tier in TIER_ORDER})
    average_wait_minutes: int = 0
