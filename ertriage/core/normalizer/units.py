"""Normalisation helpers turning loosely typed vital-sign records into ``VitalSigns``."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

from ...schemas.triage import VitalSigns

__all__ = ["normalize_vitals"]

_ALIASES: Dict[str, tuple[str, ...]] = {
    "temperature": ("temperature", "temp"),
    "heart_rate": ("heart_rate", "heartRate", "hr"),
    "blood_pressure_sys": ("blood_pressure_sys", "bloodPressureSys", "sbp"),
    "blood_pressure_dia": ("blood_pressure_dia", "bloodPressureDia", "dbp"),
    "respiratory_rate": ("respiratory_rate", "respiratoryRate", "rr"),
    "oxygen_saturation": ("oxygen_saturation", "oxygenSaturation", "spo2"),
}


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _lookup(record: Mapping[str, Any], keys: tuple[str, ...]) -> Optional[float]:
    for key in keys:
        value = _to_float(record.get(key))
        if value is not None:
            return value
    return None


def normalize_vitals(record: Optional[Mapping[str, Any]]) -> VitalSigns:
    """Standardise a form or store record, clamping impossible values when feasible."""

    if not record:
        return VitalSigns()
    normalized = {field: _lookup(record, keys) for field, keys in _ALIASES.items()}

    if normalized["temperature"] is not None and normalized["temperature"] > 80:
        normalized["temperature"] = round(normalized["temperature"] / 10.0, 1)
    if normalized["oxygen_saturation"] is not None:
        normalized["oxygen_saturation"] = max(0.0, min(100.0, normalized["oxygen_saturation"]))
    for field, value in normalized.items():
        if value is not None and value < 0:
            normalized[field] = None
    return VitalSigns(**normalized)
