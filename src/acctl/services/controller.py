"""RoleAndStatusController: preconditions in front of account mutations.

The controller owns the checks that must pass before the account service
is contacted (role membership, which profile fields to touch) and the
fan-out of independent sub-operations.  The mutations themselves are
delegated unchanged; nothing is retried.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from functools import partial
from typing import TYPE_CHECKING, Any

from acctl.domain.types import ROLE_VOCABULARY, Role, UserStatus, is_role
from acctl.errors import DomainServiceError, InvalidRoleError
from acctl.services.fanout import JoinResult, join_all

if TYPE_CHECKING:
    from acctl.domain.models import UserRecord
    from acctl.services.contracts import AccountService

logger = logging.getLogger(__name__)


def require_role(role: str) -> Role:
    """Return *role* as a :class:`Role` or raise :class:`InvalidRoleError`."""
    if not is_role(role):
        raise InvalidRoleError(role, ROLE_VOCABULARY)
    return Role(role)


def _raise_for_batch(result: JoinResult, message: str) -> JoinResult:
    if not result.ok:
        raise DomainServiceError(
            f"{message}: {result.summary()}",
            code="BATCH_FAILED",
            detail={
                "failed": [item.label for item in result.failures],
                "succeeded": [item.label for item in result.outcomes if item.ok],
            },
        )
    return result


class RoleAndStatusController:
    """Async facade over an :class:`AccountService`."""

    def __init__(self, service: AccountService) -> None:
        self._service = service

    async def _call(self, method: Callable[..., Any], *args: Any) -> Any:
        return await asyncio.to_thread(method, *args)

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def add_role(self, user_id: str, role: str) -> Role:
        checked = require_role(role)
        await self._call(self._service.add_role, user_id, checked)
        logger.info("Added role %s to %s", checked, user_id)
        return checked

    async def remove_role(self, user_id: str, role: str) -> Role:
        checked = require_role(role)
        await self._call(self._service.remove_role, user_id, checked)
        logger.info("Removed role %s from %s", checked, user_id)
        return checked

    async def apply_roles(self, user_id: str, roles: Iterable[Role]) -> JoinResult:
        """Grant several roles concurrently; fails if any grant fails."""
        checked = sorted(require_role(role) for role in roles)
        result = await join_all(
            {role.value: partial(self._service.add_role, user_id, role) for role in checked}
        )
        return _raise_for_batch(result, f"Failed to assign roles to user {user_id}")

    # ------------------------------------------------------------------
    # Status and enabled flag (independent axes)
    # ------------------------------------------------------------------

    async def set_status(self, user_id: str, status: UserStatus) -> None:
        await self._call(self._service.set_status, user_id, UserStatus(status))

    async def set_disabled(self, user_id: str, disabled: bool) -> None:
        if disabled:
            await self._call(self._service.disable_account, user_id)
        else:
            await self._call(self._service.enable_account, user_id)

    # ------------------------------------------------------------------
    # Profile, merge, verification
    # ------------------------------------------------------------------

    async def update_profile(
        self,
        user_id: str,
        *,
        email: str | None = None,
        name: str | None = None,
    ) -> JoinResult:
        """Update each non-empty field as its own concurrent sub-operation.

        ``email`` rewrites the local profile identifier, ``name`` the
        username.  Succeeds only if every scheduled update succeeds.
        """
        calls: dict[str, Callable[[], Any]] = {}
        if isinstance(email, str) and email:
            calls["email"] = partial(self._service.update_email, user_id, email)
        if isinstance(name, str) and name:
            calls["name"] = partial(self._service.update_username, user_id, name)
        result = await join_all(calls)
        return _raise_for_batch(result, f"Failed to update user {user_id}")

    async def merge_accounts(self, dst_id: str, src_id: str) -> None:
        await self._call(self._service.merge_accounts, dst_id, src_id)

    async def verify_email(self, user_id: str, email: str) -> None:
        await self._call(self._service.confirm_email, user_id, email)

    # ------------------------------------------------------------------
    # Plain delegation used by the remaining commands
    # ------------------------------------------------------------------

    async def create_account(
        self, email: str | None, password: str | None, username: str | None
    ) -> UserRecord:
        return await self._call(self._service.create_account, email, password, username)

    async def change_password(self, user_id: str, password: str) -> None:
        await self._call(self._service.change_password, user_id, password)

    async def delete_account(self, user_id: str) -> None:
        await self._call(self._service.delete_account, user_id)

    async def list_accounts(self) -> list[UserRecord]:
        return await self._call(self._service.list_accounts)
