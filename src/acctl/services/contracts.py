"""Contracts at the service boundary.

:class:`AccountService` is the protocol the command engine consumes; the
SQLite implementation lives in :mod:`acctl.services.accounts` and tests
substitute an in-memory stub.  The payload models validate the shape of
``list_accounts`` output before it reaches the renderers.
"""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel

from acctl.domain.models import UserRecord
from acctl.domain.types import Role, UserStatus


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class AccountService(Protocol):
    """Operations the account domain service offers to the command engine.

    Every method either returns or raises
    :class:`~acctl.errors.DomainServiceError` whose message is the reason
    shown to the operator.
    """

    def create_account(self, email: str | None, password: str | None, username: str | None) -> UserRecord: ...

    def change_password(self, user_id: str, password: str) -> None: ...

    def delete_account(self, user_id: str) -> None: ...

    def update_email(self, user_id: str, email: str) -> None:
        """Rewrite the identifier of the account's ``local`` profile."""
        ...

    def update_username(self, user_id: str, username: str) -> None: ...

    def add_role(self, user_id: str, role: Role) -> None: ...

    def remove_role(self, user_id: str, role: Role) -> None: ...

    def set_status(self, user_id: str, status: UserStatus) -> None: ...

    def disable_account(self, user_id: str) -> None: ...

    def enable_account(self, user_id: str) -> None: ...

    def merge_accounts(self, dst_id: str, src_id: str) -> None:
        """Fold *src_id* into *dst_id*.

        Afterwards *src_id* no longer exists on its own and its roles and
        profiles are reachable through *dst_id*.
        """
        ...

    def confirm_email(self, user_id: str, email: str) -> None: ...

    def get_account(self, user_id: str) -> UserRecord: ...

    def list_accounts(self) -> list[UserRecord]: ...

    def is_valid_password(self, password: str) -> str:
        """Return *password* if acceptable, else raise with the reason."""
        ...

    def is_valid_username(self, username: str) -> str:
        """Return *username* if acceptable and unused, else raise with the reason."""
        ...


class AccountRow(BaseModel):
    """One row of the account report."""

    id: str
    username: str
    profiles: str
    roles: str
    status: str
    state: str


class AccountListData(BaseModel):
    """Payload contract for the ``list_accounts`` operation."""

    count: int
    items: list[AccountRow]
