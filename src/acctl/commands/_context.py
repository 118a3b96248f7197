"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Owns the process :class:`Lifecycle`, lazy store and
service construction, the handler error boundary, and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any

import click

from acctl.infrastructure.lifecycle import Lifecycle
from acctl.output.formatters import OutputSettings, format_result
from acctl.services.runner import run_command

if TYPE_CHECKING:
    from acctl.config.settings import AcctlSettings
    from acctl.infrastructure.store import Store
    from acctl.services.contracts import AccountService
    from acctl.services.controller import RoleAndStatusController
    from acctl.services.result import ServiceResult


def build_service(store: Store, settings: AcctlSettings) -> AccountService:
    """Construct the account service the commands talk to."""
    from acctl.services.accounts import SqlAccountService

    return SqlAccountService(store, settings.accounts)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store and service are created lazily so ``--help`` and
    ``--version`` never open the database.  The store disconnect is
    registered on the lifecycle here, before any command runs.
    """

    def __init__(self, settings: AcctlSettings, lifecycle: Lifecycle | None = None) -> None:
        self.settings = settings
        self.lifecycle = lifecycle or Lifecycle()
        self._store: Store | None = None
        self._service: AccountService | None = None

        from acctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        self.lifecycle.register(self.close_store)

    @property
    def store(self) -> Store:
        if self._store is None:
            from acctl.infrastructure.store import Store

            self._store = Store(self.settings.store_path)
        return self._store

    @property
    def service(self) -> AccountService:
        """The account service (created lazily on first access)."""
        if self._service is None:
            self._service = build_service(self.store, self.settings)
        return self._service

    @property
    def controller(self) -> RoleAndStatusController:
        from acctl.services.controller import RoleAndStatusController

        return RoleAndStatusController(self.service)

    def close_store(self) -> None:
        if self._store is not None:
            self._store.close()

    def run(self, op: str, handler: Coroutine[Any, Any, ServiceResult]) -> None:
        """Run *handler* inside the error boundary and emit its result."""
        self.emit(run_command(op, handler))

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.  Shutdown hooks
          still run when Click closes the context.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
