"""Command: update an account's email and/or username."""

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
  acctl update 3f1c2a9e-1b7d-4a55-9a39-0c4d2f6e8b11 --email new@example.com
  acctl update 3f1c2a9e-1b7d-4a55-9a39-0c4d2f6e8b11 --name new_name
  acctl update 3f1c2a9e-1b7d-4a55-9a39-0c4d2f6e8b11 --email new@example.com --name new_name""",
)
@click.argument("user_id")
@click.option("--email", default=None, help="New email (rewrites the local profile).")
@click.option("--name", default=None, help="New username.")
@click.pass_obj
def update(app: AppContext, user_id: str, email: str | None, name: str | None) -> None:
    """Update a user's email or username."""
    if not email and not name:
        click.echo("No changes specified. Use --help for options.", err=True)
        raise SystemExit(1)

    async def handler() -> ServiceResult:
        result = await app.controller.update_profile(user_id, email=email, name=name)
        return ServiceResult.success(
            "update_account",
            f"Updated user {user_id}.",
            id=user_id,
            fields_changed=[item.label for item in result.outcomes],
        )

    app.run("update_account", handler())
