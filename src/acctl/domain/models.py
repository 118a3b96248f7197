"""Pydantic models for accounts and collected operator answers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from acctl.domain.types import LOCAL_PROVIDER, Role, UserStatus


class Profile(BaseModel):
    """One login identity attached to an account."""

    model_config = {"frozen": True}

    provider: str
    id: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class UserRecord(BaseModel):
    """Read-only view of an account as returned by the account service.

    ``status`` (ban state) and ``disabled`` are separate axes; a banned
    account may be enabled and a disabled account may be active.
    """

    model_config = {"frozen": True}

    id: str
    username: str | None = None
    profiles: list[Profile] = Field(default_factory=list)
    roles: frozenset[Role] = frozenset()
    status: UserStatus = UserStatus.ACTIVE
    disabled: bool = False
    created_at: str | None = None

    @property
    def local_profile(self) -> Profile | None:
        """The first ``local`` profile, if any."""
        for profile in self.profiles:
            if profile.provider == LOCAL_PROVIDER:
                return profile
        return None


class UserAnswerSet(BaseModel):
    """Answers collected for the ``create`` flow, from flags or prompts.

    Fields are optional because the flag-sourced path passes missing values
    through untouched; the account service rejects them.
    """

    model_config = {"frozen": True}

    email: str | None = None
    password: str | None = None
    confirm_password: str | None = None
    username: str | None = None
    roles: frozenset[Role] = frozenset()

    @property
    def passwords_match(self) -> bool:
        return self.password == self.confirm_password
