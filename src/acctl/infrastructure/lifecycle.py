"""Lifecycle: teardown hooks that run exactly once per invocation.

The CLI creates one :class:`Lifecycle` per process, registers teardown
actions (the store disconnect) before any command runs, and ties
:meth:`Lifecycle.shutdown` to the Click context close so it fires on every
exit path: success, reported failure (``SystemExit(1)``), and unexpected
exceptions.

Hooks are zero-argument callables.  Their return value is the completion
signal and is ignored; a hook that raises is logged and the remaining hooks
still run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

ShutdownHook = Callable[[], Any]


class Lifecycle:
    """Append-only registry of shutdown hooks, invoked once."""

    def __init__(self) -> None:
        self._hooks: list[ShutdownHook] = []
        self._shut_down = False

    @property
    def hooks(self) -> tuple[ShutdownHook, ...]:
        return tuple(self._hooks)

    @property
    def is_shut_down(self) -> bool:
        return self._shut_down

    def register(self, hook: ShutdownHook) -> ShutdownHook:
        """Append *hook*. Returns it so this can be used as a decorator.

        Raises:
            RuntimeError: If shutdown has already started.
        """
        if self._shut_down:
            msg = "Cannot register a shutdown hook after shutdown"
            raise RuntimeError(msg)
        self._hooks.append(hook)
        return hook

    def shutdown(self) -> list[BaseException]:
        """Run every hook in registration order; later calls are no-ops.

        Returns the exceptions raised by failing hooks (empty on a clean
        teardown).
        """
        if self._shut_down:
            return []
        self._shut_down = True

        failures: list[BaseException] = []
        for hook in self._hooks:
            name = getattr(hook, "__qualname__", repr(hook))
            try:
                hook()
            except Exception as exc:
                logger.warning("Shutdown hook %s failed: %s", name, exc, exc_info=True)
                failures.append(exc)
            else:
                logger.debug("Shutdown hook %s completed", name)
        return failures
