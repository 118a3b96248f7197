"""Exception hierarchy for acctl.

Every error that crosses a layer boundary inherits from :class:`AcctlError`
so the command boundary can turn it into a clean ``ServiceError`` without
leaking stack traces.  Raw SQLAlchemy exceptions never leave the store; they
are re-raised as :class:`DomainServiceError`.

Hierarchy
---------
AcctlError
├── ValidationError       bad operator input (mismatch, weak password, ...)
├── UsageError            malformed command usage
│   └── InvalidRoleError  role outside the vocabulary
└── DomainServiceError    persistence or domain-service failure
"""

from __future__ import annotations

from typing import Any


class AcctlError(Exception):
    """Base exception for all acctl errors."""

    code = "ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        hint: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""
        self.detail: dict[str, Any] = detail or {}


# --- Operator input --------------------------------------------------------


class ValidationError(AcctlError):
    """Raised when operator-supplied input is rejected."""

    code = "VALIDATION_FAILED"

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.field = field


class UsageError(AcctlError):
    """Raised when a command is invoked with unusable arguments."""

    code = "USAGE"


class InvalidRoleError(UsageError):
    """Raised when a role is not a member of the role vocabulary."""

    code = "INVALID_ROLE"

    def __init__(self, role: str, vocabulary: tuple[str, ...]) -> None:
        super().__init__(
            f"Role {role} is not supported. Supported roles: {', '.join(vocabulary)}"
        )
        self.role = role
        self.vocabulary = vocabulary


# --- Domain service --------------------------------------------------------


class DomainServiceError(AcctlError):
    """Raised by the account service or the store; the message is the reason."""

    code = "SERVICE_ERROR"
