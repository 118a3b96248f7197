"""Commands: ban/unban and disable/enable.

Ban status and the disabled flag are separate axes, so each pair of
commands toggles only its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from acctl.commands._base import AcctlCommand
from acctl.domain.types import UserStatus
from acctl.services.result import ServiceResult

if TYPE_CHECKING:
    from acctl.commands._context import AppContext


def _set_status(app: AppContext, user_id: str, status: UserStatus, message: str) -> None:
    async def handler() -> ServiceResult:
        await app.controller.set_status(user_id, status)
        return ServiceResult.success("set_status", message, id=user_id, status=status.value)

    app.run("set_status", handler())


def _set_disabled(app: AppContext, user_id: str, disabled: bool, message: str) -> None:
    async def handler() -> ServiceResult:
        await app.controller.set_disabled(user_id, disabled)
        return ServiceResult.success("set_disabled", message, id=user_id, disabled=disabled)

    app.run("set_disabled", handler())


@click.command(cls=AcctlCommand, examples="  acctl ban <user-id>")
@click.argument("user_id")
@click.pass_obj
def ban(app: AppContext, user_id: str) -> None:
    """Ban a user."""
    _set_status(app, user_id, UserStatus.BANNED, f"Banned user {user_id}.")


@click.command(cls=AcctlCommand, examples="  acctl uban <user-id>")
@click.argument("user_id")
@click.pass_obj
def uban(app: AppContext, user_id: str) -> None:
    """Unban a user."""
    _set_status(app, user_id, UserStatus.ACTIVE, f"Unbanned user {user_id}.")


@click.command(cls=AcctlCommand, examples="  acctl disable <user-id>")
@click.argument("user_id")
@click.pass_obj
def disable(app: AppContext, user_id: str) -> None:
    """Disable a user."""
    _set_disabled(app, user_id, True, f"Disabled user {user_id}.")


@click.command(cls=AcctlCommand, examples="  acctl enable <user-id>")
@click.argument("user_id")
@click.pass_obj
def enable(app: AppContext, user_id: str) -> None:
    """Enable a user."""
    _set_disabled(app, user_id, False, f"Enabled user {user_id}.")
