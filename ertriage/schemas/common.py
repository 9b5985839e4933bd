"""Common schema utilities for the triage core."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Immutable snapshot rejecting unknown fields.

    Queue entries are never edited in place: a rescore or status change
    builds a replacement with ``model_copy``, so a score is never seen
    without its tier.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
