"""Command: mark an account's email as confirmed."""

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
  acctl verify 3f1c2a9e-1b7d-4a55-9a39-0c4d2f6e8b11 ops@example.com""",
)
@click.argument("user_id")
@click.argument("email")
@click.pass_obj
def verify(app: AppContext, user_id: str, email: str) -> None:
    """Mark EMAIL of a user as verified."""

    async def handler() -> ServiceResult:
        await app.controller.verify_email(user_id, email)
        return ServiceResult.success(
            "verify_email",
            f"Verified email {email} for user {user_id}.",
            id=user_id,
            email=email,
        )

    app.run("verify_email", handler())
