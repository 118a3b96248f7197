"""Sequential interactive prompts on top of click.

A :class:`PromptChain` asks its :class:`Prompt` questions in order.  For each
answer the prompt's ``validate`` runs first: an error string is echoed to
stderr and the same question is asked again.  The accepted raw answer then
goes through the prompt's ``filter`` pipeline, which may normalize it or
reject it; a rejection aborts the whole chain with
:class:`~acctl.errors.ValidationError` and later questions are never asked.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

import click

from acctl.services.validation import ValidationPipeline, Validator

logger = logging.getLogger(__name__)


class PromptKind(StrEnum):
    TEXT = "text"
    SECRET = "secret"
    MULTISELECT = "multiselect"


@dataclass(frozen=True)
class Prompt:
    """One question in a prompt chain."""

    name: str
    message: str
    kind: PromptKind = PromptKind.TEXT
    validate: Validator | None = None
    filter: ValidationPipeline | None = None
    choices: Sequence[str] = field(default_factory=tuple)


def split_choices(raw: str) -> list[str]:
    """Split a comma/space separated multi-select answer into tokens."""
    return [token for token in raw.replace(",", " ").split() if token]


def click_ask(prompt: Prompt) -> Any:
    """Ask *prompt* on the terminal and return the raw answer."""
    if prompt.kind is PromptKind.MULTISELECT:
        label = f"{prompt.message} [{', '.join(prompt.choices)}] (comma-separated, empty for none)"
        raw = click.prompt(label, default="", show_default=False)
        return split_choices(raw)
    return click.prompt(
        prompt.message,
        default="",
        show_default=False,
        hide_input=prompt.kind is PromptKind.SECRET,
    )


class PromptChain:
    """Ordered prompts producing a dict of answers keyed by prompt name."""

    def __init__(
        self,
        prompts: Sequence[Prompt],
        *,
        ask: Callable[[Prompt], Any] = click_ask,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        self.prompts = list(prompts)
        self._ask = ask
        self._echo = echo or (lambda message: click.echo(f">> {message}", err=True))

    async def run(self) -> dict[str, Any]:
        answers: dict[str, Any] = {}
        for prompt in self.prompts:
            raw = self._ask_until_valid(prompt)
            if prompt.filter is not None:
                raw = await prompt.filter.run_or_raise(raw, field=prompt.name)
            answers[prompt.name] = raw
            logger.debug("Prompt %s answered", prompt.name)
        return answers

    def _ask_until_valid(self, prompt: Prompt) -> Any:
        while True:
            raw = self._ask(prompt)
            if prompt.validate is None:
                return raw
            verdict = prompt.validate(raw)
            if verdict is True:
                return raw
            self._echo(str(verdict))
