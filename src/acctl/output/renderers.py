"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to the message renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from acctl.output.console import create_console, get_output, style_for_status
from acctl.output.report import REPORT_COLUMNS

if TYPE_CHECKING:
    from rich.console import Console

    from acctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_message)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict) and "id" in item)

    user_id = result.data.get("id")
    if user_id:
        return str(user_id)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="acctl.key")
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"))
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="acctl.id")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def account_table(items: list[dict[str, Any]]) -> Table:
    """Build a Rich Table for account report rows."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for column in REPORT_COLUMNS:
        if column == "ID":
            table.add_column(column, style="acctl.id", no_wrap=True)
        else:
            table.add_column(column)

    for item in items:
        status = str(item.get("status", ""))
        state = str(item.get("state", ""))
        table.add_row(
            str(item.get("id", "")),
            str(item.get("username", "")),
            str(item.get("profiles", "")),
            str(item.get("roles", "")),
            Text(status, style=style_for_status(status)),
            Text(state, style="acctl.state.disabled" if state.startswith("Disabled") else ""),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="acctl.error")
    op = Text(f"  {result.op}", style="acctl.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err and "hint" in err.detail:
        console.print(Text(f"  hint: {err.detail['hint']}", style="dim"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Success renderers ─────────────────────────────────────────────────


def _render_message(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Print the human success line; with --verbose, the remaining fields too."""
    message = result.data.get("message")
    if message:
        console.print(Text(str(message)))
    else:
        console.print(Text("OK", style="acctl.ok"), Text(f"  {result.op}", style="acctl.op"))
    if verbose:
        for key, value in result.data.items():
            if key != "message":
                _field(console, key, value)


def _render_account_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    console.print(account_table(items))
    if verbose:
        console.print(f"\n{result.data.get('count', len(items))} accounts")


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list_accounts": _render_account_table,
}
