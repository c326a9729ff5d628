"""Shared pytest fixtures for the full nameprep test suite."""

from __future__ import annotations

import pytest

from nameprep.config import ConfigLoader


@pytest.fixture(autouse=True)
def _isolate_nameprep_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove `NAMEPREP_*` variables so tests see deterministic config defaults."""

    for env_key in ConfigLoader._ENV_KEYS:
        monkeypatch.delenv(env_key, raising=False)
