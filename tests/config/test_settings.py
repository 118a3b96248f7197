"""Tests for AcctlSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from acctl.config.settings import AcctlSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ACCTL_CONFIG", raising=False)
    monkeypatch.delenv("ACCTL_STORE__PATH", raising=False)
    monkeypatch.delenv("ACCTL_ACCOUNTS__MIN_PASSWORD_LENGTH", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = AcctlSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.store.path == ".acctl/accounts.db"
        assert settings.accounts.min_password_length == 8
        assert settings.store_path == tmp_path / ".acctl" / "accounts.db"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = AcctlSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = AcctlSettings.from_cli(root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "acctl.toml").write_text(
            '[store]\npath = "data/users.db"\n[accounts]\nmin_password_length = 12\n'
        )
        settings = AcctlSettings.from_cli(root=tmp_path)
        assert settings.store_path == tmp_path / "data" / "users.db"
        assert settings.accounts.min_password_length == 12
        assert settings.accounts.max_password_length == 128  # default preserved

    def test_root_is_config_parent(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "acctl.toml").write_text("")
        child = tmp_path / "sub"
        child.mkdir()
        monkeypatch.chdir(child)
        settings = AcctlSettings.from_cli()
        assert settings.root == tmp_path.resolve()
        assert settings.config_path == (tmp_path / "acctl.toml").resolve()

    def test_explicit_config_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "conf" / "other.toml"
        config.parent.mkdir()
        config.write_text('[store]\npath = "/var/lib/acctl/accounts.db"\n')
        monkeypatch.chdir(tmp_path)
        settings = AcctlSettings.from_cli(config_path=str(config))
        assert settings.config_path == config
        assert settings.root == config.parent
        assert settings.store_path == Path("/var/lib/acctl/accounts.db")

    def test_missing_explicit_config_uses_defaults(self, tmp_path: Path) -> None:
        settings = AcctlSettings.from_cli(config_path=str(tmp_path / "nope.toml"), root=tmp_path)
        assert settings.config_path is None
        assert settings.store.path == ".acctl/accounts.db"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "acctl.toml").write_text("[store\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            AcctlSettings.from_cli(root=tmp_path)


class TestEnvVars:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "acctl.toml").write_text('[store]\npath = "from-toml.db"\n')
        monkeypatch.setenv("ACCTL_STORE__PATH", "from-env.db")
        settings = AcctlSettings.from_cli(root=tmp_path)
        assert settings.store.path == "from-env.db"

    def test_cli_flag_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACCTL_QUIET", "true")
        assert AcctlSettings.from_cli(root=tmp_path).quiet is True
        assert AcctlSettings.from_cli(root=tmp_path, quiet=False).quiet is False
