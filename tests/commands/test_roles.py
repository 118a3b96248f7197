"""Tests for addrole / removerole."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from acctl.cli import cli
from acctl.domain.types import Role
from tests.conftest import FakeAccountService


@pytest.mark.parametrize("command", ["addrole", "removerole"])
@pytest.mark.parametrize("role", ["ROOT", "admin", "", "ADMIN,STAFF"])
def test_unknown_role_rejected_without_service_call(
    cli_runner: CliRunner, fake_service: FakeAccountService, command: str, role: str
) -> None:
    user_id = fake_service.seed("ops", "ops@example.com")
    result = cli_runner.invoke(cli, [command, user_id, role])
    assert result.exit_code == 1
    assert f"Role {role} is not supported" in result.stderr
    assert "Supported roles: ADMIN, MODERATOR, STAFF" in result.stderr
    assert fake_service.calls == []


class TestAddRole:
    def test_add_role(self, cli_runner: CliRunner, fake_service: FakeAccountService) -> None:
        user_id = fake_service.seed("ops", "ops@example.com")
        result = cli_runner.invoke(cli, ["addrole", user_id, "ADMIN"])
        assert result.exit_code == 0, result.output
        assert f"Added the ADMIN role to user {user_id}." in result.stdout
        assert fake_service.called("add_role") == [(user_id, Role.ADMIN)]

    def test_add_role_missing_user(self, cli_runner: CliRunner, fake_service: FakeAccountService) -> None:
        result = cli_runner.invoke(cli, ["addrole", "nobody", "STAFF"])
        assert result.exit_code == 1
        assert "User nobody not found" in result.stderr

    def test_add_role_json(self, cli_runner: CliRunner, fake_service: FakeAccountService) -> None:
        user_id = fake_service.seed("ops", "ops@example.com")
        result = cli_runner.invoke(cli, ["--json", "addrole", user_id, "STAFF"])
        assert result.exit_code == 0
        assert '"role": "STAFF"' in result.stdout


class TestRemoveRole:
    def test_remove_role(self, cli_runner: CliRunner, fake_service: FakeAccountService) -> None:
        user_id = fake_service.seed("ops", "ops@example.com", roles={Role.ADMIN, Role.STAFF})
        result = cli_runner.invoke(cli, ["removerole", user_id, "ADMIN"])
        assert result.exit_code == 0, result.output
        assert f"Removed the ADMIN role from user {user_id}." in result.stdout
        assert fake_service.accounts[user_id]["roles"] == {Role.STAFF}

    def test_remove_role_service_failure(
        self, cli_runner: CliRunner, fake_service: FakeAccountService
    ) -> None:
        user_id = fake_service.seed("ops", "ops@example.com")
        fake_service.failures["remove_role"] = "store offline"
        result = cli_runner.invoke(cli, ["removerole", user_id, "ADMIN"])
        assert result.exit_code == 1
        assert "store offline" in result.stderr
        assert len(fake_service.called("remove_role")) == 1
