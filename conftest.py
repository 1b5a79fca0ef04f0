"""
Root conftest.py — shared fixtures and environment isolation.

Fixtures:
  counter_store   — HistoryStore seeded with {"count": 0}
  recorder        — list-backed listener for committed states
"""
from __future__ import annotations

import os

import pytest

from undoable import HistoryState, HistoryStore
from undoable.config import ENV_LOG_LEVEL, ENV_SNAPSHOT_MODE


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_undoable_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's UNDOABLE_* variables from leaking into tests."""
    for key in (ENV_SNAPSHOT_MODE, ENV_LOG_LEVEL):
        if key in os.environ:
            monkeypatch.delenv(key)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def counter_store() -> HistoryStore[dict]:
    return HistoryStore({"count": 0})


class Recorder:
    """Collects every HistoryState a store commits."""

    def __init__(self) -> None:
        self.states: list[HistoryState] = []

    def __call__(self, state: HistoryState) -> None:
        self.states.append(state)

    @property
    def count(self) -> int:
        return len(self.states)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
