"""Role and status vocabularies.

Roles form a closed vocabulary: anything an operator types must be a
member, and non-members are rejected rather than dropped (the flag-sourced
``create`` path is the one documented exception, see
:class:`acctl.services.answers.FlagAnswerSource`).
"""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Roles that can be granted to an account."""

    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"
    STAFF = "STAFF"


class UserStatus(StrEnum):
    """Ban status. Independent from the enabled/disabled flag."""

    ACTIVE = "ACTIVE"
    BANNED = "BANNED"


LOCAL_PROVIDER = "local"

ROLE_VOCABULARY: tuple[str, ...] = tuple(role.value for role in Role)


def is_role(value: object) -> bool:
    """Return True if *value* is a member of the role vocabulary."""
    return isinstance(value, str) and value in ROLE_VOCABULARY
