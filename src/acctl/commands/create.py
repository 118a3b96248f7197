"""Command: create an account from prompts or flags."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from acctl.commands._base import AcctlCommand
from acctl.services.answers import (
    AnswerSource,
    FlagAnswerSource,
    InteractiveAnswerSource,
    ensure_passwords_match,
)
from acctl.services.result import ServiceResult

if TYPE_CHECKING:
    from acctl.commands._context import AppContext


async def create_account(app: AppContext, source: AnswerSource) -> ServiceResult:
    """Acquire answers, check them, create the account, then grant roles.

    Email and username are trimmed; the password is passed through exactly as
    entered so the stored credential is the one that was validated.
    """
    answers = ensure_passwords_match(await source.acquire())
    controller = app.controller

    user = await controller.create_account(
        answers.email.strip() if answers.email else answers.email,
        answers.password,
        answers.username.strip() if answers.username else answers.username,
    )
    roles = sorted(answers.roles)
    if roles:
        await controller.apply_roles(user.id, roles)

    return ServiceResult.success(
        "create_account",
        f"Created user {user.id}.",
        id=user.id,
        username=user.username,
        roles=[role.value for role in roles],
    )


@click.command(
    cls=AcctlCommand,
    examples="""\
  acctl create
  acctl create -f --email ops@example.com --password 's3cret-pass' --name ops
  acctl create -f --email mod@example.com --password 's3cret-pass' --name mod --role MODERATOR""",
)
@click.option("--email", default=None, help="Email of the new user.")
@click.option("--password", default=None, help="Password of the new user.")
@click.option("--name", default=None, help="Username of the new user.")
@click.option("--role", default=None, help="Role of the new user.")
@click.option(
    "-f",
    "--flag_mode",
    is_flag=True,
    help="Source user params from flags instead of prompting.",
)
@click.pass_obj
def create(
    app: AppContext,
    email: str | None,
    password: str | None,
    name: str | None,
    role: str | None,
    flag_mode: bool,
) -> None:
    """Create a new user."""

    async def handler() -> ServiceResult:
        source: AnswerSource
        if flag_mode:
            source = FlagAnswerSource(email=email, password=password, name=name, role=role)
        else:
            source = InteractiveAnswerSource(app.service)
        return await create_account(app, source)

    app.run("create_account", handler())
