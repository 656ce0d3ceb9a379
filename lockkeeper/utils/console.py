"""
User-facing terminal output for lockkeeper, rendered with Rich.

Commands report results through this module; diagnostics go through
:mod:`lockkeeper.utils.logger` instead. A single shared
:class:`~rich.console.Console` is created on first use and dropped by
:func:`reconfigure_console` when ``--no-color`` changes the environment.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

LOCKKEEPER_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
    }
)

#: Rich colors for the change labels of :func:`get_update_type`.
CHANGE_TYPE_COLORS: Dict[str, str] = {
    "missing": "cyan",
    "respelled": "blue",
    "downgrade": "red",
    "major": "red",
    "minor": "yellow",
    "patch": "green",
    "prerelease": "magenta",
}

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Color only interactive stdout, and never under NO_COLOR or CI."""
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _get_console() -> Console:
    global _console

    with _console_lock:
        if _console is None:
            color = _should_use_color()
            _console = Console(theme=LOCKKEEPER_THEME, no_color=not color, highlight=color)
        return _console


def get_raw_console() -> Console:
    """Return the shared Rich console."""
    return _get_console()


def reconfigure_console() -> None:
    """Forget the shared console; the next output re-reads the environment."""
    global _console
    with _console_lock:
        _console = None


# ---------------------------------------------------------------------------
# Status lines
# ---------------------------------------------------------------------------


def _status(prefix: Optional[str], message: str, style: str) -> None:
    text = f"{prefix} {message}" if prefix else message
    _get_console().print(text, style=style)


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    _status(prefix, message, "success")


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    _status(prefix, message, "error")


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    _status(prefix, message, "warning")


def print_info(message: str) -> None:
    _status(None, message, "info")


# ---------------------------------------------------------------------------
# Tables and prompts
# ---------------------------------------------------------------------------


def print_table(
    rows: Sequence[Mapping[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> None:
    """Print rows as a Rich table; nothing is printed for no rows.

    Args:
        rows: One mapping per row, keyed by column header. Values may
            contain Rich markup.
        headers: Column order; the first row's keys by default.
        title: Table title.
        column_styles: ``style``, ``justify`` and ``no_wrap`` per column.
    """
    if not rows:
        return

    columns = headers if headers is not None else list(rows[0])
    styles = column_styles or {}

    table = Table(title=title, header_style="bold")
    for column in columns:
        options = styles.get(column, {})
        table.add_column(
            column,
            style=options.get("style"),
            justify=options.get("justify", "left"),
            no_wrap=options.get("no_wrap", False),
            overflow="fold",
        )

    for row in rows:
        table.add_row(*(str(row.get(column, "")) for column in columns))

    _get_console().print(table)


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question on the terminal.

    Anything other than ``y``/``yes``/``n``/``no`` (including an empty
    line) answers ``default``; Ctrl+C and end of input answer no.
    """
    console = _get_console()
    console.print(f"{message} {'[Y/n]' if default else '[y/N]'}: ", end="", style="info", markup=False)

    try:
        answer = input().strip().lower()
    except (KeyboardInterrupt, EOFError):
        console.print()
        return False

    if answer in ("y", "yes"):
        return True
    if answer in ("n", "no"):
        return False
    return default


def colorize_update_type(update_type: str) -> str:
    """Wrap a change label in Rich markup for its color, if it has one."""
    color = CHANGE_TYPE_COLORS.get(update_type.lower())
    return f"[{color}]{update_type}[/{color}]" if color else update_type
