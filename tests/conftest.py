"""Shared pytest fixtures and test helpers for acctl tests."""

from __future__ import annotations

import hashlib
import re
import uuid
from base64 import b64decode, b64encode
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from acctl.config.models import AccountsConfig
from acctl.domain.models import Profile, UserRecord
from acctl.domain.types import LOCAL_PROVIDER, Role, UserStatus
from acctl.errors import DomainServiceError
from acctl.infrastructure.passwords import ALGORITHM, HASH_FUNCTION
from acctl.infrastructure.store import Store
from acctl.services.accounts import SqlAccountService


class FakeAccountService:
    """In-memory stand-in for the account service contract.

    Every call is recorded in ``calls`` as ``(method, args)``.  Put a
    reason in ``failures[method]`` to make that method raise
    :class:`DomainServiceError` with it.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.failures: dict[str, str] = {}
        self.accounts: dict[str, dict[str, Any]] = {}

    # -- helpers -----------------------------------------------------------

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if method in self.failures:
            raise DomainServiceError(self.failures[method])

    def called(self, method: str) -> list[tuple[Any, ...]]:
        return [args for name, args in self.calls if name == method]

    @property
    def mutations(self) -> list[str]:
        reads = {"get_account", "list_accounts", "is_valid_password", "is_valid_username"}
        return [name for name, _ in self.calls if name not in reads]

    def _require(self, user_id: str) -> dict[str, Any]:
        if user_id not in self.accounts:
            raise DomainServiceError(f"User {user_id} not found", code="NOT_FOUND")
        return self.accounts[user_id]

    def seed(
        self,
        username: str,
        email: str | None = None,
        *,
        user_id: str | None = None,
        confirmed: bool = False,
        **fields: Any,
    ) -> str:
        user_id = user_id or str(uuid.uuid4())
        profiles = []
        if email is not None:
            metadata = {"confirmed_at": "2024-01-01T00:00:00+00:00"} if confirmed else {}
            profiles.append({"provider": LOCAL_PROVIDER, "id": email, "metadata": metadata})
        self.accounts[user_id] = {
            "username": username,
            "password": "seeded-password",
            "profiles": profiles,
            "roles": set(),
            "status": UserStatus.ACTIVE,
            "disabled": False,
            **fields,
        }
        return user_id

    # -- contract ----------------------------------------------------------

    def is_valid_password(self, password: str) -> str:
        self._record("is_valid_password", password)
        if not password or len(password) < 8:
            raise DomainServiceError("Password must be at least 8 characters")
        return password

    def is_valid_username(self, username: str) -> str:
        self._record("is_valid_username", username)
        if not username or not re.match(r"^[A-Za-z0-9_]+$", username):
            raise DomainServiceError("Username may only contain letters, numbers and _")
        if any(acct["username"] == username for acct in self.accounts.values()):
            raise DomainServiceError(f"Username {username} already in use")
        return username

    def create_account(self, email: str | None, password: str | None, username: str | None) -> UserRecord:
        self._record("create_account", email, password, username)
        if not email:
            raise DomainServiceError("Email is required")
        if not password:
            raise DomainServiceError("Password is required")
        if not username:
            raise DomainServiceError("Username is required")
        user_id = self.seed(username, email)
        self.accounts[user_id]["password"] = password
        return self.get_account(user_id)

    def change_password(self, user_id: str, password: str) -> None:
        self._record("change_password", user_id, password)
        self._require(user_id)["password"] = password

    def delete_account(self, user_id: str) -> None:
        self._record("delete_account", user_id)
        self._require(user_id)
        del self.accounts[user_id]

    def update_email(self, user_id: str, email: str) -> None:
        self._record("update_email", user_id, email)
        for profile in self._require(user_id)["profiles"]:
            if profile["provider"] == LOCAL_PROVIDER:
                profile["id"] = email

    def update_username(self, user_id: str, username: str) -> None:
        self._record("update_username", user_id, username)
        self._require(user_id)["username"] = username

    def add_role(self, user_id: str, role: Role) -> None:
        self._record("add_role", user_id, role)
        self._require(user_id)["roles"].add(Role(role))

    def remove_role(self, user_id: str, role: Role) -> None:
        self._record("remove_role", user_id, role)
        self._require(user_id)["roles"].discard(Role(role))

    def set_status(self, user_id: str, status: UserStatus) -> None:
        self._record("set_status", user_id, status)
        self._require(user_id)["status"] = UserStatus(status)

    def disable_account(self, user_id: str) -> None:
        self._record("disable_account", user_id)
        self._require(user_id)["disabled"] = True

    def enable_account(self, user_id: str) -> None:
        self._record("enable_account", user_id)
        self._require(user_id)["disabled"] = False

    def merge_accounts(self, dst_id: str, src_id: str) -> None:
        self._record("merge_accounts", dst_id, src_id)
        dst = self._require(dst_id)
        src = self._require(src_id)
        dst["profiles"].extend(src["profiles"])
        dst["roles"] |= src["roles"]
        del self.accounts[src_id]

    def confirm_email(self, user_id: str, email: str) -> None:
        self._record("confirm_email", user_id, email)
        for profile in self._require(user_id)["profiles"]:
            if profile["provider"] == LOCAL_PROVIDER and profile["id"] == email:
                profile["metadata"]["confirmed_at"] = "2024-06-01T00:00:00+00:00"
                return
        raise DomainServiceError(f"User {user_id} has no local profile with email {email}")

    def get_account(self, user_id: str) -> UserRecord:
        self._record("get_account", user_id)
        acct = self._require(user_id)
        return UserRecord(
            id=user_id,
            username=acct["username"],
            profiles=[Profile(**p) for p in acct["profiles"]],
            roles=frozenset(acct["roles"]),
            status=acct["status"],
            disabled=acct["disabled"],
        )

    def list_accounts(self) -> list[UserRecord]:
        self._record("list_accounts")
        return [self.get_account(user_id) for user_id in list(self.accounts)]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_service(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> FakeAccountService:
    """Route every CLI command to a fresh :class:`FakeAccountService`."""
    service = FakeAccountService()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ACCTL_CONFIG", raising=False)
    monkeypatch.setattr("acctl.commands._context.build_service", lambda store, settings: service)
    return service


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on end-to-end
    command test classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ACCTL_CONFIG", raising=False)


@pytest.fixture
def store(tmp_path: Path) -> Iterator[Store]:
    """SQLite store in a temp directory."""
    s = Store(tmp_path / "accounts.db")
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def sql_service(store: Store) -> SqlAccountService:
    return SqlAccountService(store, AccountsConfig())


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def create_user(service: SqlAccountService, username: str, **kwargs: Any) -> UserRecord:
    """Create an account with sensible defaults via the SQLite service."""
    email = kwargs.pop("email", f"{username.lower()}@example.com")
    password = kwargs.pop("password", "correct-horse")
    return service.create_account(email, password, username)


def password_matches(password: str, stored: str) -> bool:
    """Recompute a stored ``algo$iter$salt$hash`` string for *password*."""
    algorithm, iterations, salt, expected = stored.split("$")
    assert algorithm == ALGORITHM
    digest = hashlib.pbkdf2_hmac(HASH_FUNCTION, password.encode("utf-8"), b64decode(salt), int(iterations))
    return b64encode(digest).decode("ascii") == expected
