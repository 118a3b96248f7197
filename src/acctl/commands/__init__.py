"""Subcommand modules for acctl.

Provides register_commands() which uses deferred imports to keep
``acctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every account command on the root CLI group."""
    from acctl.commands.create import create
    from acctl.commands.delete import delete
    from acctl.commands.list_cmd import list_cmd
    from acctl.commands.merge import merge
    from acctl.commands.passwd import passwd
    from acctl.commands.roles import addrole, removerole
    from acctl.commands.status import ban, disable, enable, uban
    from acctl.commands.update import update
    from acctl.commands.verify import verify

    cli.add_command(create)
    cli.add_command(delete)
    cli.add_command(passwd)
    cli.add_command(update)
    cli.add_command(list_cmd)
    cli.add_command(merge)
    cli.add_command(addrole)
    cli.add_command(removerole)
    cli.add_command(ban)
    cli.add_command(uban)
    cli.add_command(disable)
    cli.add_command(enable)
    cli.add_command(verify)
