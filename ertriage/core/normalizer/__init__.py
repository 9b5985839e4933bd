from .units import normalize_vitals

__all__ = ["normalize_vitals"]
