"""The single error boundary every command handler runs inside.

A handler is a coroutine that returns a successful ServiceResult.  Whatever
it raises is turned into a failed ServiceResult here, so no exception
escapes a handler and the output layer alone decides stream and exit code.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

import click

from acctl.errors import AcctlError, ValidationError
from acctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


def run_command(op: str, handler: Coroutine[Any, Any, ServiceResult]) -> ServiceResult:
    """Drive *handler* to completion and convert failures into results."""
    try:
        return asyncio.run(handler)
    except AcctlError as exc:
        logger.info("%s failed: %s", op, exc.message)
        detail = dict(exc.detail)
        if isinstance(exc, ValidationError) and exc.field:
            detail["field"] = exc.field
        if exc.hint:
            detail["hint"] = exc.hint
        return ServiceResult.failure(op, exc.code, exc.message, **detail)
    except click.Abort:
        return ServiceResult.failure(op, "ABORTED", "Aborted by operator")
    except Exception as exc:
        logger.error("%s failed unexpectedly", op, exc_info=True)
        return ServiceResult.failure(op, "UNEXPECTED", f"{type(exc).__name__}: {exc}")
