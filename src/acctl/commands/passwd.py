"""Command: reset an account's password interactively."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from acctl.commands._base import AcctlCommand
from acctl.services.prompts import Prompt, PromptChain, PromptKind
from acctl.services.result import ServiceResult
from acctl.services.validation import ValidationPipeline, from_predicate, required

if TYPE_CHECKING:
    from acctl.commands._context import AppContext

PASSWORD_PROMPTS = (
    Prompt(
        name="password",
        message="Password",
        kind=PromptKind.SECRET,
        validate=required("Password is required"),
    ),
    Prompt(
        name="confirm_password",
        message="Confirm Password",
        kind=PromptKind.SECRET,
        validate=required("Confirm Password is required"),
    ),
)


def _confirmed(pair: tuple[str, str]) -> bool | str:
    password, confirmation = pair
    return password == confirmation or "Password mismatch"


# Runs on (password, confirmation) and accepts the pair unchanged.
CONFIRMATION = ValidationPipeline(from_predicate(_confirmed))


@click.command(
    cls=AcctlCommand,
    examples="""\
  acctl passwd 3f1c2a9e-1b7d-4a55-9a39-0c4d2f6e8b11""",
)
@click.argument("user_id")
@click.pass_obj
def passwd(app: AppContext, user_id: str) -> None:
    """Reset the password of a user."""

    async def handler() -> ServiceResult:
        answers = await PromptChain(PASSWORD_PROMPTS).run()
        password, _ = await CONFIRMATION.run_or_raise(
            (answers["password"], answers["confirm_password"]), field="confirm_password"
        )
        await app.controller.change_password(user_id, password)
        return ServiceResult.success(
            "change_password", f"Changed password for user {user_id}.", id=user_id
        )

    app.run("change_password", handler())
