"""Command: merge one account into another."""

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
  acctl merge <dst-user-id> <src-user-id>""",
)
@click.argument("dst_user_id")
@click.argument("src_user_id")
@click.pass_obj
def merge(app: AppContext, dst_user_id: str, src_user_id: str) -> None:
    """Merge SRC_USER_ID into DST_USER_ID; the source account is removed."""

    async def handler() -> ServiceResult:
        await app.controller.merge_accounts(dst_user_id, src_user_id)
        return ServiceResult.success(
            "merge_accounts",
            f"Merged user {src_user_id} into user {dst_user_id}.",
            id=dst_user_id,
            merged_id=src_user_id,
        )

    app.run("merge_accounts", handler())
