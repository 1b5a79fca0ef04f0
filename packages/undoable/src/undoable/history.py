"""
History store — undo/redo for an arbitrary state value.

Holds a (current, past, future) triple and moves values between the slots
with five operations:

- push_state:   record a new undoable step (clears the redo stack)
- update_state: replace the current value without recording a step
- reset_state:  start a fresh timeline (clears both stacks)
- undo / redo:  step backwards / forwards, returning the restored value

Every transition builds a new frozen HistoryState and commits it with a
single assignment, so readers never see a half-applied transition.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Generic, TypeVar

from .config import UndoableSettings
from .types import CompletionCallback, HistoryState, Listener

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HistoryStore(Generic[T]):
    """
    Undo/redo history over whole-value snapshots of T.

    The store is seeded once from an externally supplied initial value (see
    adopt_initial_state) and afterwards changes only through the five
    operations. Listeners registered with subscribe() receive each committed
    HistoryState.
    """

    def __init__(
        self,
        initial_state: T | None = None,
        settings: UndoableSettings | None = None,
    ) -> None:
        self._settings = settings or UndoableSettings()
        self._state: HistoryState[T] = HistoryState()
        self._adopted = False
        self._listeners: list[Listener] = []

        if initial_state is not None:
            self.adopt_initial_state(initial_state)

    # ── Read access ───────────────────────────────────────────────────────────

    @property
    def state(self) -> HistoryState[T]:
        return self._state

    @property
    def current(self) -> T | None:
        return self._state.current

    @property
    def past(self) -> tuple[T | None, ...]:
        return self._state.past

    @property
    def future(self) -> tuple[T | None, ...]:
        return self._state.future

    @property
    def adopted(self) -> bool:
        return self._adopted

    @property
    def settings(self) -> UndoableSettings:
        return self._settings

    def can_undo(self) -> bool:
        return self._state.can_undo

    def can_redo(self) -> bool:
        return self._state.can_redo

    # ── Subscriptions ─────────────────────────────────────────────────────────

    def subscribe(self, fn: Listener) -> Callable[[], None]:
        """Subscribe to committed states. Returns unsubscribe function."""
        self._listeners.append(fn)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(fn)
            except ValueError:
                pass

        return unsubscribe

    # ── Seeding ───────────────────────────────────────────────────────────────

    def adopt_initial_state(self, value: T | None) -> bool:
        """
        Seed the current value from an externally supplied initial value.

        Runs at most once: after the first non-None value has been adopted, or
        after any operation has committed, later calls are ignored so that a
        changing initial value can never wipe an in-progress history.
        Returns True if the value was adopted.
        """
        if self._adopted or value is None:
            return False
        self._commit(
            "adopt",
            self._state.model_copy(update={"current": self._snapshot(value)}),
        )
        return True

    # ── Tracked operations ────────────────────────────────────────────────────

    def push_state(self, value: T, callback: CompletionCallback | None = None) -> None:
        """Make value current, moving the old current onto the past stack."""
        state = self._state
        self._commit(
            "push",
            state.model_copy(update={
                "current": self._snapshot(value),
                "past": state.past + (state.current,),
                "future": (),
            }),
            callback,
        )

    def reset_state(self, value: T | None = None, callback: CompletionCallback | None = None) -> None:
        """Discard all history and start a fresh timeline at value."""
        self._commit(
            "reset",
            HistoryState(current=self._snapshot(value)),
            callback,
        )

    def update_state(self, value: T, callback: CompletionCallback | None = None) -> None:
        """Replace the current value without recording an undoable step."""
        self._commit(
            "update",
            self._state.model_copy(update={"current": self._snapshot(value)}),
            callback,
        )

    def undo(self) -> T | None:
        """
        Step back one value. Returns the restored value, or None (with no
        state change) when there is nothing to undo.
        """
        state = self._state
        if not state.past:
            return None
        restored = state.past[-1]
        self._commit(
            "undo",
            state.model_copy(update={
                "current": restored,
                "past": state.past[:-1],
                "future": state.future + (state.current,),
            }),
        )
        return restored

    def redo(self) -> T | None:
        """
        Step forward one value. Returns the restored value, or None (with no
        state change) when there is nothing to redo.
        """
        state = self._state
        if not state.future:
            return None
        restored = state.future[-1]
        self._commit(
            "redo",
            state.model_copy(update={
                "current": restored,
                "past": state.past + (state.current,),
                "future": state.future[:-1],
            }),
        )
        return restored

    # ── Internals ─────────────────────────────────────────────────────────────

    def _snapshot(self, value: Any) -> Any:
        if self._settings.snapshot_mode == "deepcopy":
            return copy.deepcopy(value)
        return value

    def _commit(
        self,
        op: str,
        next_state: HistoryState[T],
        callback: CompletionCallback | None = None,
    ) -> None:
        self._state = next_state
        self._adopted = True
        logger.debug(
            "%s committed (past=%d, future=%d)", op, len(next_state.past), len(next_state.future)
        )
        self._emit(op, next_state)
        if callback is not None:
            callback()

    def _emit(self, op: str, state: HistoryState[T]) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("History listener raised after %s", op)
