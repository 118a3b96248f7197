"""Answer sources for the ``create`` flow.

Both sources produce the same :class:`UserAnswerSet`, so everything after
acquisition is mode-agnostic.  They differ deliberately in strictness:

* :class:`FlagAnswerSource` is permissive for scripting.  An unknown or
  missing ``--role`` yields an empty role set and missing fields pass
  through as ``None`` for the account service to reject.
* :class:`InteractiveAnswerSource` rejects unknown roles inline and checks
  password, confirmation and username against the account service as they
  are typed.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from acctl.domain.models import UserAnswerSet
from acctl.domain.types import ROLE_VOCABULARY, Role, is_role
from acctl.errors import ValidationError
from acctl.services.prompts import Prompt, PromptChain, PromptKind, click_ask
from acctl.services.validation import ValidationPipeline, from_check, required

if TYPE_CHECKING:
    from acctl.services.contracts import AccountService


class AnswerSource(ABC):
    """Produces a :class:`UserAnswerSet` for account creation."""

    @abstractmethod
    async def acquire(self) -> UserAnswerSet: ...


class FlagAnswerSource(AnswerSource):
    """Answers taken verbatim from command-line options."""

    def __init__(
        self,
        *,
        email: str | None = None,
        password: str | None = None,
        name: str | None = None,
        role: str | None = None,
    ) -> None:
        self.email = email
        self.password = password
        self.name = name
        self.role = role

    async def acquire(self) -> UserAnswerSet:
        roles = frozenset({Role(self.role)}) if is_role(self.role) else frozenset()
        return UserAnswerSet(
            email=self.email,
            password=self.password,
            confirm_password=self.password,
            username=self.name,
            roles=roles,
        )


def validate_roles(selected: Iterable[str]) -> bool | str:
    """Multi-select validator: every token must be in the role vocabulary."""
    unknown = [token for token in selected if not is_role(token)]
    if unknown:
        return (
            f"Unknown role(s): {', '.join(unknown)}. "
            f"Supported roles: {', '.join(ROLE_VOCABULARY)}"
        )
    return True


def build_create_prompts(service: AccountService) -> list[Prompt]:
    """The fixed ``create`` question order: email, password, confirm, username, roles."""

    def checked(method: Callable[[str], str]) -> ValidationPipeline:
        async def _check(value: str) -> str:
            return await asyncio.to_thread(method, value)

        return ValidationPipeline(from_check(_check))

    return [
        Prompt(
            name="email",
            message="Email",
            validate=required("Email is required"),
        ),
        Prompt(
            name="password",
            message="Password",
            kind=PromptKind.SECRET,
            filter=checked(service.is_valid_password),
        ),
        Prompt(
            name="confirm_password",
            message="Confirm Password",
            kind=PromptKind.SECRET,
            filter=checked(service.is_valid_password),
        ),
        Prompt(
            name="username",
            message="Username",
            filter=checked(service.is_valid_username),
        ),
        Prompt(
            name="roles",
            message="User Roles",
            kind=PromptKind.MULTISELECT,
            choices=ROLE_VOCABULARY,
            validate=validate_roles,
        ),
    ]


class InteractiveAnswerSource(AnswerSource):
    """Answers collected by a prompt chain on the operator's terminal."""

    def __init__(
        self,
        service: AccountService,
        *,
        ask: Callable[[Prompt], Any] = click_ask,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        self.chain = PromptChain(build_create_prompts(service), ask=ask, echo=echo)

    async def acquire(self) -> UserAnswerSet:
        answers = await self.chain.run()
        return UserAnswerSet(
            email=answers["email"],
            password=answers["password"],
            confirm_password=answers["confirm_password"],
            username=answers["username"],
            roles=frozenset(Role(token) for token in answers["roles"]),
        )


def ensure_passwords_match(answers: UserAnswerSet) -> UserAnswerSet:
    """Reject an answer set whose password and confirmation differ.

    Raises:
        ValidationError: Before any account is touched.
    """
    if not answers.passwords_match:
        raise ValidationError("Passwords do not match", field="confirm_password")
    return answers
