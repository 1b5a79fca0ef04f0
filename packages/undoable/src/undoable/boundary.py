"""
Presentation boundary — hands a history store to a render callback.

An Undoable owns one HistoryStore and is the single source of truth for the
state it tracks. Views never keep their own copy: they read current_state from
the props passed to the render callback and return new values through
push_state (undoable), update_state (untracked) or reset_state.

    def view(props):
        return f"count={props.current_state['count']}"

    counter = Undoable({"count": 0}, children=view)
    counter.rendered                  # "count=0"
    counter.props().push_state({"count": 1})
    counter.rendered                  # "count=1"

The host wires render()/on_render into its own view layer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

from .config import UndoableSettings
from .history import HistoryStore
from .types import CompletionCallback, HistoryState

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ─────────────────────────────────────────────────────────────────────────────
# IUndoable protocol
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class IUndoable(Protocol[T]):
    """
    What a view may rely on: the current value plus the five operations.
    Both UndoableProps and Undoable satisfy it.
    """

    current_state: T | None

    def push_state(self, state: T, callback: CompletionCallback | None = None) -> None:
        ...

    def update_state(self, state: T, callback: CompletionCallback | None = None) -> None:
        ...

    def reset_state(self, state: T | None = None, callback: CompletionCallback | None = None) -> None:
        ...

    def undo(self) -> T | None:
        ...

    def redo(self) -> T | None:
        ...


# ─────────────────────────────────────────────────────────────────────────────
# Props
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class UndoableProps(Generic[T]):
    """State and operations passed to the render callback."""
    current_state: T | None
    previous_state: tuple[T | None, ...]
    next_state: tuple[T | None, ...]
    push_state: Callable[..., None]
    update_state: Callable[..., None]
    reset_state: Callable[..., None]
    undo: Callable[[], T | None]
    redo: Callable[[], T | None]


RenderFn = Callable[[UndoableProps[Any]], Any]

# ─────────────────────────────────────────────────────────────────────────────
# Undoable
# ─────────────────────────────────────────────────────────────────────────────


class Undoable(Generic[T]):
    """
    Render-callback host for a HistoryStore.

    Re-renders after every committed transition. The initial state is adopted
    once; later calls to set_initial_state() only record the new value.
    """

    def __init__(
        self,
        initial_state: T | None = None,
        children: RenderFn | None = None,
        settings: UndoableSettings | None = None,
        on_render: Callable[[Any], None] | None = None,
    ) -> None:
        self._store: HistoryStore[T] = HistoryStore(settings=settings)
        self._initial_state = initial_state
        self.children = children
        self.on_render = on_render
        self.rendered: Any = None
        self._unsubscribe: Callable[[], None] | None = self._store.subscribe(self._on_commit)

        if not self._store.adopt_initial_state(initial_state):
            # Nothing to adopt yet; still produce a first frame
            self._rerender()

    # ── Properties ────────────────────────────────────────────────────────────

    @property
    def store(self) -> HistoryStore[T]:
        return self._store

    @property
    def state(self) -> HistoryState[T]:
        return self._store.state

    @property
    def initial_state(self) -> T | None:
        return self._initial_state

    def set_initial_state(self, value: T | None) -> bool:
        """
        Record a new externally supplied initial value.

        Adopted only if no value has been adopted yet; returns True in that case.
        """
        self._initial_state = value
        return self._store.adopt_initial_state(value)

    # ── Rendering ─────────────────────────────────────────────────────────────

    def props(self) -> UndoableProps[T]:
        state = self._store.state
        return UndoableProps(
            current_state=state.current,
            previous_state=state.past,
            next_state=state.future,
            push_state=self._store.push_state,
            update_state=self._store.update_state,
            reset_state=self._store.reset_state,
            undo=self._store.undo,
            redo=self._store.redo,
        )

    def render(self) -> Any:
        """Call the render callback with fresh props. None without children."""
        if self.children is None:
            return None
        return self.children(self.props())

    def _rerender(self) -> None:
        self.rendered = self.render()
        if self.on_render is not None:
            self.on_render(self.rendered)

    def _on_commit(self, state: HistoryState[T]) -> None:
        logger.debug("Re-rendering (past=%d, future=%d)", len(state.past), len(state.future))
        self._rerender()

    # ── Teardown ──────────────────────────────────────────────────────────────

    def close(self) -> None:
        """Stop re-rendering on commits."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ── Convenience pass-throughs ─────────────────────────────────────────────

    @property
    def current_state(self) -> T | None:
        return self._store.current

    def push_state(self, state: T, callback: CompletionCallback | None = None) -> None:
        self._store.push_state(state, callback)

    def update_state(self, state: T, callback: CompletionCallback | None = None) -> None:
        self._store.update_state(state, callback)

    def reset_state(self, state: T | None = None, callback: CompletionCallback | None = None) -> None:
        self._store.reset_state(state, callback)

    def undo(self) -> T | None:
        return self._store.undo()

    def redo(self) -> T | None:
        return self._store.redo()
