"""
Exceptions raised by undoable.

The history core itself never raises: undo/redo on an empty stack is a
no-op that returns None. Errors only come from the edges (settings, CLI input).
"""
from __future__ import annotations


class UndoableError(Exception):
    """Base class for all undoable errors."""


class SettingsError(UndoableError):
    """Settings file could not be read or holds an invalid value."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{self.path}: {msg}" if self.path else msg


class ReplayError(UndoableError):
    """An operation script could not be parsed or applied."""
