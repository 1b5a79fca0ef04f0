"""
undoable — undo/redo history for an arbitrary state value.

A HistoryStore keeps (current, past, future) and moves values between them
with push_state, update_state, reset_state, undo and redo. Undoable hands a
store to a render callback so a view can use it as its only source of truth.
"""
from .boundary import IUndoable, Undoable, UndoableProps
from .config import UndoableSettings, load_settings
from .errors import ReplayError, SettingsError, UndoableError
from .history import HistoryStore
from .types import CompletionCallback, HistoryState, Listener

__all__ = [
    # boundary
    "IUndoable",
    "Undoable",
    "UndoableProps",
    # config
    "UndoableSettings",
    "load_settings",
    # errors
    "ReplayError",
    "SettingsError",
    "UndoableError",
    # history
    "HistoryStore",
    # types
    "CompletionCallback",
    "HistoryState",
    "Listener",
]
