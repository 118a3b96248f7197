"""Command: tabular report of all accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from acctl.commands._base import AcctlCommand
from acctl.output.report import build_rows
from acctl.services.contracts import AccountListData, dump_validated
from acctl.services.result import ServiceResult

if TYPE_CHECKING:
    from acctl.commands._context import AppContext


@click.command(
    "list",
    cls=AcctlCommand,
    examples="""\
  acctl list
  acctl --json list
  acctl -q list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all users."""

    async def handler() -> ServiceResult:
        rows = build_rows(await app.controller.list_accounts())
        data = dump_validated(AccountListData, {"count": len(rows), "items": rows})
        return ServiceResult(ok=True, op="list_accounts", data=data)

    app.run("list_accounts", handler())
