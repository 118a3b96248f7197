"""Rich Console factory and theme for acctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ACCTL_THEME = Theme(
    {
        "acctl.ok": "bold green",
        "acctl.error": "bold red",
        "acctl.warning": "bold yellow",
        "acctl.op": "bold cyan",
        "acctl.key": "dim",
        "acctl.id": "bold blue",
        "acctl.status.active": "green",
        "acctl.status.banned": "bold red",
        "acctl.state.disabled": "yellow",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "ACTIVE": "acctl.status.active",
    "BANNED": "acctl.status.banned",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ACCTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 160,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for an account status."""
    return _STATUS_STYLES.get(status, "")
