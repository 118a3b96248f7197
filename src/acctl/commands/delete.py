"""Command: delete an account."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from acctl.commands._base import AcctlCommand
from acctl.services.result import ServiceResult

if TYPE_CHECKING:
    from acctl.commands._context import AppContext


@click.command(
    cls=AcctlCommand,
    examples="""\
  acctl delete 3f1c2a9e-1b7d-4a55-9a39-0c4d2f6e8b11""",
)
@click.argument("user_id")
@click.pass_obj
def delete(app: AppContext, user_id: str) -> None:
    """Delete a user."""

    async def handler() -> ServiceResult:
        await app.controller.delete_account(user_id)
        return ServiceResult.success("delete_account", f"Deleted user {user_id}.", id=user_id)

    app.run("delete_account", handler())
