"""Tests for configuration loading, account resolution and the config CLI."""

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from missive.cli.main import app
from missive.config import (
    DEFAULT_READ_HEADERS,
    get_account,
    load_config,
    resolve_account,
    set_config_value,
)
from missive.errors import ConfigError


@pytest.fixture
def config_file(tmp_path: Path):
    """Point the config layer at a file in tmp_path with an empty cache."""
    path = tmp_path / "missive" / "config.toml"
    with (
        patch("missive.config.CONFIG_FILE", path),
        patch("missive.config.paths.CONFIG_FILE", path),
        patch("missive.cli.commands.config.CONFIG_FILE", path),
        patch("missive.config._cached_config", None),
    ):
        yield path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestGetAccount:
    def test_first_account_by_default(self):
        config = {"accounts": {"a": {"mail_dir": "/a"}, "b": {"mail_dir": "/b"}}}
        assert get_account(config) == {"mail_dir": "/a"}

    def test_by_name(self):
        config = {"accounts": {"a": {"mail_dir": "/a"}, "b": {"mail_dir": "/b"}}}
        assert get_account(config, "b") == {"mail_dir": "/b"}
        assert get_account(config, "c") is None

    def test_no_accounts(self):
        assert get_account({}) is None


class TestResolveAccount:
    def test_builtin_defaults(self):
        account = resolve_account({"accounts": {"a": {"mail_dir": "/a"}}})
        assert account == {
            "mail_dir": "/a",
            "default_folder": "INBOX",
            "read_headers": DEFAULT_READ_HEADERS,
        }

    def test_defaults_section_applies(self):
        config = {
            "defaults": {"folder": "Archive", "read_headers": ["Subject"]},
            "accounts": {"a": {"mail_dir": "/a"}},
        }
        account = resolve_account(config, "a")
        assert account["default_folder"] == "Archive"
        assert account["read_headers"] == ["Subject"]

    def test_account_overrides_defaults(self):
        config = {
            "defaults": {"folder": "Archive", "read_headers": ["Subject"]},
            "accounts": {
                "a": {"mail_dir": "/a", "default_folder": "Work", "read_headers": ["From"]}
            },
        }
        account = resolve_account(config, "a")
        assert account["default_folder"] == "Work"
        assert account["read_headers"] == ["From"]

    def test_missing_mail_dir(self):
        with pytest.raises(ConfigError, match="no mail_dir"):
            resolve_account({"accounts": {"a": {"default_folder": "INBOX"}}}, "a")

    def test_unknown_account(self):
        with pytest.raises(ConfigError, match="Account 'x' not found"):
            resolve_account({"accounts": {"a": {"mail_dir": "/a"}}}, "x")


class TestLoadAndSet:
    def test_missing_file_is_empty(self, config_file: Path):
        assert load_config() == {}

    def test_invalid_toml(self, config_file: Path):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("not = [valid")

        with pytest.raises(ConfigError, match="Invalid config file"):
            load_config()

    def test_set_value_roundtrip(self, config_file: Path):
        set_config_value("accounts.work.mail_dir", "~/Mail/Work")
        set_config_value("accounts.work.read_headers", "From, Subject,Date")

        config = load_config(force_reload=True)
        assert config["accounts"]["work"] == {
            "mail_dir": "~/Mail/Work",
            "read_headers": ["From", "Subject", "Date"],
        }

    def test_empty_list_rejected(self, config_file: Path):
        with pytest.raises(ValueError):
            set_config_value("defaults.read_headers", " , ")


class TestConfigCommand:
    def test_init_creates_template(self, runner: CliRunner, config_file: Path):
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert config_file.exists()
        assert "read_headers" in config_file.read_text()

    def test_init_does_not_overwrite(self, runner: CliRunner, config_file: Path):
        runner.invoke(app, ["config", "init"])
        result = runner.invoke(app, ["config", "init"])

        assert "already exists" in result.output

    def test_show(self, runner: CliRunner, config_file: Path):
        set_config_value("accounts.work.mail_dir", "~/Mail/Work")
        set_config_value("accounts.work.read_headers", "From,Subject")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "[accounts.work]" in result.output
        assert "read_headers = From, Subject" in result.output

    def test_show_unknown_account(self, runner: CliRunner, config_file: Path):
        set_config_value("accounts.work.mail_dir", "~/Mail/Work")

        result = runner.invoke(app, ["config", "show", "--account", "home"])

        assert result.exit_code == 1
        assert "Account 'home' not found" in result.output

    def test_set(self, runner: CliRunner, config_file: Path):
        result = runner.invoke(app, ["config", "set", "defaults.folder", "Archive"])

        assert result.exit_code == 0
        assert load_config(force_reload=True)["defaults"]["folder"] == "Archive"
