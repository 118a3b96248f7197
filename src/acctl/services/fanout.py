"""Fan-out-then-join for independent sibling operations.

Used when one command touches several sub-resources at once (roles on a new
account, email and name on ``update``).  Siblings run concurrently in worker
threads with no ordering guarantee; one failing does not cancel the others.
The join keeps every per-item outcome so callers can report which items
failed, even when they only print a summary.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from acctl.errors import AcctlError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemOutcome:
    label: str
    ok: bool
    value: Any = None
    error: BaseException | None = None

    @property
    def reason(self) -> str | None:
        if self.error is None:
            return None
        if isinstance(self.error, AcctlError):
            return self.error.message
        return str(self.error) or type(self.error).__name__


@dataclass(frozen=True)
class JoinResult:
    outcomes: tuple[ItemOutcome, ...]

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def failures(self) -> tuple[ItemOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.ok)

    def summary(self) -> str:
        """``label: reason`` for each failed item, joined with ``; ``."""
        return "; ".join(f"{item.label}: {item.reason}" for item in self.failures)


async def join_all(calls: Mapping[str, Callable[[], Any]]) -> JoinResult:
    """Run each labelled blocking call concurrently and wait for all of them."""
    labels = list(calls)
    results = await asyncio.gather(
        *(asyncio.to_thread(calls[label]) for label in labels),
        return_exceptions=True,
    )

    outcomes: list[ItemOutcome] = []
    for label, result in zip(labels, results, strict=True):
        if isinstance(result, Exception):
            logger.debug("Sibling operation %s failed: %s", label, result)
            outcomes.append(ItemOutcome(label=label, ok=False, error=result))
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes.append(ItemOutcome(label=label, ok=True, value=result))
    return JoinResult(tuple(outcomes))
