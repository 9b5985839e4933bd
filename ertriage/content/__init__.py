"""Packaged vital-sign scoring packs."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Tuple

import yaml

__all__ = ["available_packs", "load_pack"]

_PACKAGE = __name__ + ".scoring_packs"
_SUFFIX = ".yml"


def available_packs() -> Tuple[str, ...]:
    root = resources.files(_PACKAGE)
    return tuple(sorted(item.name[: -len(_SUFFIX)] for item in root.iterdir() if item.name.endswith(_SUFFIX)))


@lru_cache(maxsize=32)
def load_pack(pack_id: str) -> Dict[str, Any]:
    """Parse the scoring pack named *pack_id*; unknown names raise ``FileNotFoundError``."""

    source = resources.files(_PACKAGE).joinpath(pack_id + _SUFFIX)
    if not source.is_file():
        raise FileNotFoundError(
            f"Unknown scoring pack '{pack_id}' (available: {', '.join(available_packs()) or 'none'})"
        )
    data = yaml.safe_load(source.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Scoring pack '{pack_id}' must be a mapping")
    return data
