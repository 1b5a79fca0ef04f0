"""
History types.

HistoryState is the (current, past, future) triple. It is frozen and its
stacks are tuples, so a transition always produces a new object and a store
commits it by swapping a single reference.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

# ─── Callbacks ────────────────────────────────────────────────────────────────

# Per-call completion callback accepted by push_state/update_state/reset_state
CompletionCallback = Callable[[], Any]

# Receives every committed HistoryState
Listener = Callable[["HistoryState[Any]"], None]

# ─── HistoryState ─────────────────────────────────────────────────────────────


class HistoryState(BaseModel, Generic[T]):
    """
    Snapshot of a history: the current value plus both stacks.

    past:   oldest first, most recently superseded value last.
    future: most recently undone value last.
    """
    current: T | None = None
    past: tuple[T | None, ...] = ()
    future: tuple[T | None, ...] = ()

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": self.current,
            "past": list(self.past),
            "future": list(self.future),
        }
