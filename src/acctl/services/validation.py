"""Composable validation steps shared by both input-acquisition modes.

Two shapes of check exist:

* **validators** (``required``) return ``True`` or an error string.  The
  string is shown inline and the question is asked again; nothing is
  raised.
* **pipeline steps** take a raw value and return an :class:`Accepted` or
  :class:`Rejected` outcome, optionally asynchronously.
  :class:`ValidationPipeline` runs them in order and stops at the first
  rejection.

Neither depends on how the value was obtained: the ``create`` prompt chain
filters answers through pipelines, and ``passwd`` runs its confirmation
check through one after prompting.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from acctl.errors import DomainServiceError, ValidationError

Validator = Callable[[Any], bool | str]


@dataclass(frozen=True)
class Accepted:
    value: Any
    ok: bool = True


@dataclass(frozen=True)
class Rejected:
    reason: str
    ok: bool = False


Outcome = Accepted | Rejected
Step = Callable[[Any], Outcome | Awaitable[Outcome]]


def required(message: str, min_length: int = 1) -> Validator:
    """Build a validator that accepts present input of at least *min_length*.

    Returns *message* (not raised) when the input is missing or too short.
    """

    def _validate(value: Any) -> bool | str:
        if value is None:
            return message
        if len(value) < min_length:
            return message
        return True

    return _validate


def from_predicate(validator: Validator) -> Step:
    """Adapt a ``required``-style validator into a pipeline step."""

    def _step(value: Any) -> Outcome:
        verdict = validator(value)
        if verdict is True:
            return Accepted(value)
        return Rejected(verdict if isinstance(verdict, str) else "Invalid value")

    return _step


def from_check(check: Callable[[Any], Awaitable[Any]]) -> Step:
    """Adapt an async domain check into a pipeline step.

    The check resolves to the (possibly normalized) value or raises
    :class:`DomainServiceError`; the rejection carries the error's reason,
    not the exception object.
    """

    async def _step(value: Any) -> Outcome:
        try:
            return Accepted(await check(value))
        except DomainServiceError as exc:
            return Rejected(exc.message)

    return _step


class ValidationPipeline:
    """Ordered steps; each receives the previous step's accepted value."""

    def __init__(self, *steps: Step) -> None:
        self._steps = list(steps)

    async def run(self, raw: Any) -> Outcome:
        value = raw
        for step in self._steps:
            outcome = step(value)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            if not outcome.ok:
                return outcome
            value = outcome.value
        return Accepted(value)

    async def run_or_raise(self, raw: Any, *, field: str | None = None) -> Any:
        """Run the pipeline and return the final value.

        Raises:
            ValidationError: With the first rejection's reason.
        """
        outcome = await self.run(raw)
        if isinstance(outcome, Rejected):
            raise ValidationError(outcome.reason, field=field)
        return outcome.value
