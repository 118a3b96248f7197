"""Commands: grant or revoke a role."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from acctl.commands._base import AcctlCommand
from acctl.domain.types import ROLE_VOCABULARY
from acctl.services.result import ServiceResult

if TYPE_CHECKING:
    from acctl.commands._context import AppContext

_ROLES_HELP = f"ROLE is one of: {', '.join(ROLE_VOCABULARY)}."


@click.command(
    cls=AcctlCommand,
    epilog=_ROLES_HELP,
    examples="""\
  acctl addrole 3f1c2a9e-1b7d-4a55-9a39-0c4d2f6e8b11 MODERATOR""",
)
@click.argument("user_id")
@click.argument("role")
@click.pass_obj
def addrole(app: AppContext, user_id: str, role: str) -> None:
    """Add ROLE to a user."""

    async def handler() -> ServiceResult:
        granted = await app.controller.add_role(user_id, role)
        return ServiceResult.success(
            "add_role",
            f"Added the {granted} role to user {user_id}.",
            id=user_id,
            role=granted.value,
        )

    app.run("add_role", handler())


@click.command(
    cls=AcctlCommand,
    epilog=_ROLES_HELP,
    examples="""\
  acctl removerole 3f1c2a9e-1b7d-4a55-9a39-0c4d2f6e8b11 MODERATOR""",
)
@click.argument("user_id")
@click.argument("role")
@click.pass_obj
def removerole(app: AppContext, user_id: str, role: str) -> None:
    """Remove ROLE from a user."""

    async def handler() -> ServiceResult:
        revoked = await app.controller.remove_role(user_id, role)
        return ServiceResult.success(
            "remove_role",
            f"Removed the {revoked} role from user {user_id}.",
            id=user_id,
            role=revoked.value,
        )

    app.run("remove_role", handler())
