from __future__ import annotations

import pytest

from ertriage.core.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    for key in ("SCORING_PACK", "DEPARTMENT", "LOG_LEVEL", "LOG_REDACT_PHI"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
