"""Tests for account and answer models."""

import pytest
from pydantic import ValidationError

from acctl.domain.models import Profile, UserAnswerSet, UserRecord
from acctl.domain.types import Role, UserStatus


class TestUserRecord:
    def test_defaults(self) -> None:
        record = UserRecord(id="u1")
        assert record.roles == frozenset()
        assert record.status is UserStatus.ACTIVE
        assert record.disabled is False
        assert record.local_profile is None

    def test_local_profile_is_first_local(self) -> None:
        record = UserRecord(
            id="u1",
            profiles=[
                Profile(provider="google", id="g-1"),
                Profile(provider="local", id="a@example.com"),
            ],
        )
        assert record.local_profile == Profile(provider="local", id="a@example.com")

    def test_roles_validated(self) -> None:
        assert UserRecord(id="u1", roles=["ADMIN"]).roles == frozenset({Role.ADMIN})
        with pytest.raises(ValidationError):
            UserRecord(id="u1", roles=["ROOT"])

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            UserRecord(id="u1").disabled = True  # type: ignore[misc]


class TestUserAnswerSet:
    def test_passwords_match(self) -> None:
        assert UserAnswerSet(password="a", confirm_password="a").passwords_match
        assert not UserAnswerSet(password="a", confirm_password="b").passwords_match
        assert UserAnswerSet().passwords_match
