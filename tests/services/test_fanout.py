"""Tests for fan-out-then-join of sibling operations."""

from __future__ import annotations

import asyncio
import threading

from acctl.errors import DomainServiceError
from acctl.services.fanout import ItemOutcome, JoinResult, join_all


def _fail(message: str):
    def _call() -> None:
        raise DomainServiceError(message)

    return _call


class TestJoinAll:
    def test_empty(self) -> None:
        result = asyncio.run(join_all({}))
        assert result.ok
        assert result.outcomes == ()

    def test_all_succeed(self) -> None:
        result = asyncio.run(join_all({"a": lambda: 1, "b": lambda: 2}))
        assert result.ok
        assert [(o.label, o.value) for o in result.outcomes] == [("a", 1), ("b", 2)]

    def test_one_failure_does_not_cancel_siblings(self) -> None:
        ran: list[str] = []

        def ok() -> str:
            ran.append("ok")
            return "done"

        result = asyncio.run(join_all({"bad": _fail("store offline"), "good": ok}))
        assert not result.ok
        assert ran == ["ok"]
        assert [o.label for o in result.failures] == ["bad"]
        assert result.summary() == "bad: store offline"

    def test_siblings_run_concurrently(self) -> None:
        barrier = threading.Barrier(2, timeout=5)
        result = asyncio.run(join_all({"a": barrier.wait, "b": barrier.wait}))
        assert result.ok


class TestOutcomes:
    def test_reason_for_plain_exception(self) -> None:
        assert ItemOutcome("x", ok=False, error=ValueError()).reason == "ValueError"
        assert ItemOutcome("x", ok=False, error=ValueError("bad")).reason == "bad"

    def test_reason_none_on_success(self) -> None:
        assert ItemOutcome("x", ok=True, value=1).reason is None

    def test_summary_lists_every_failure(self) -> None:
        result = JoinResult(
            (
                ItemOutcome("email", ok=False, error=DomainServiceError("Email taken")),
                ItemOutcome("name", ok=True),
                ItemOutcome("other", ok=False, error=DomainServiceError("nope")),
            )
        )
        assert result.summary() == "email: Email taken; other: nope"
