"""
undoable CLI.

  undoable demo           interactive counter with undo/redo
  undoable replay FILE    apply a JSON list of operations and print the result
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .boundary import Undoable, UndoableProps
from .config import UndoableSettings, load_settings
from .errors import ReplayError, UndoableError
from .history import HistoryStore

app = typer.Typer(
    name="undoable",
    help="Undo/redo history for any state value",
    no_args_is_help=True,
)

err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

TRACKED_OPS = ("push", "update", "reset")
STEP_OPS = ("undo", "redo")


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def _load(settings_path: Optional[Path], log_level: Optional[str]) -> UndoableSettings:
    try:
        settings = load_settings(str(settings_path) if settings_path else None)
        if log_level:
            settings.log_level = log_level
            settings.validate()
    except UndoableError as e:
        _fail(str(e))
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return settings


# ─── replay ───────────────────────────────────────────────────────────────────

def apply_operation(store: HistoryStore[Any], op: Any) -> None:
    """Apply one {"op": ..., "value": ...} entry to store."""
    if not isinstance(op, dict) or "op" not in op:
        raise ReplayError(f"Operation must be an object with an 'op' key: {op!r}")
    name = op["op"]
    if name in TRACKED_OPS:
        if name != "reset" and "value" not in op:
            raise ReplayError(f"'{name}' needs a 'value'")
        getattr(store, f"{name}_state")(op.get("value"))
    elif name in STEP_OPS:
        getattr(store, name)()
    else:
        raise ReplayError(f"Unknown operation: {name!r}")


def _parse_json(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ReplayError(f"Invalid JSON in {what}: {e}") from e


@app.command()
def replay(
    ops_file: Path = typer.Argument(..., help="JSON file holding a list of operations"),
    initial: str = typer.Option("null", "--initial", "-i", help="Initial state as JSON"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG/INFO/WARNING/ERROR"),
) -> None:
    """Replay an operation script and print the final history as JSON."""
    settings = _load(settings_path, log_level)

    try:
        if not ops_file.is_file():
            raise ReplayError(f"No such file: {ops_file}")
        ops = _parse_json(ops_file.read_text(encoding="utf-8"), str(ops_file))
        if not isinstance(ops, list):
            raise ReplayError("Operation script must be a JSON list")
        store: HistoryStore[Any] = HistoryStore(_parse_json(initial, "--initial"), settings=settings)
        for op in ops:
            apply_operation(store, op)
    except UndoableError as e:
        _fail(str(e))

    logger.info("Replayed %d operations", len(ops))
    typer.echo(json.dumps(store.state.to_dict(), indent=2, default=str))


# ─── demo ─────────────────────────────────────────────────────────────────────

DEMO_HELP = "Commands: + - set N undo redo reset quit"


def _counter_view(props: UndoableProps[dict[str, int]]) -> str:
    count = props.current_state["count"] if props.current_state else 0
    return f"count={count} past={len(props.previous_state)} future={len(props.next_state)}"


@app.command()
def demo(
    start: int = typer.Option(0, "--start", help="Initial counter value"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG/INFO/WARNING/ERROR"),
) -> None:
    """Interactive counter: + and - are undoable, 'set N' is not."""
    settings = _load(settings_path, log_level)
    typer.echo(DEMO_HELP)
    # First frame is echoed when the initial count is adopted
    counter: Undoable[dict[str, int]] = Undoable(
        {"count": start},
        children=_counter_view,
        settings=settings,
        on_render=typer.echo,
    )

    for raw in sys.stdin:
        cmd, _, arg = raw.strip().partition(" ")
        count = counter.current_state["count"]
        if not cmd:
            continue
        if cmd in ("q", "quit", "exit"):
            break
        if cmd == "+":
            counter.push_state({"count": count + 1})
        elif cmd == "-":
            counter.push_state({"count": count - 1})
        elif cmd == "set":
            try:
                counter.update_state({"count": int(arg)})
            except ValueError:
                typer.echo(f"not a number: {arg!r}")
        elif cmd == "undo":
            if counter.undo() is None:
                typer.echo("nothing to undo")
        elif cmd == "redo":
            if counter.redo() is None:
                typer.echo("nothing to redo")
        elif cmd == "reset":
            counter.reset_state({"count": start})
        else:
            typer.echo(DEMO_HELP)

    counter.close()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
