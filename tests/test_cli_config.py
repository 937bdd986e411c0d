"""Tests for config loading and CLI overrides."""

import argparse

import pytest

from cli_config import ConfigError, apply_config_overrides, load_config
from constants import Constants, _load_yaml_config


def test_load_yaml(isolated_env):
    path = isolated_env / "c.yaml"
    path.write_text("log_level: debug\ndeclaring_identifier: a-v1\n", encoding="utf-8")
    assert load_config(str(path)) == {"log_level": "debug", "declaring_identifier": "a-v1"}


def test_load_json(isolated_env):
    path = isolated_env / "c.JSON"
    path.write_text('{"log_level": "ERROR"}', encoding="utf-8")
    assert load_config(str(path)) == {"log_level": "ERROR"}


def test_empty_file_is_empty_config(isolated_env):
    path = isolated_env / "c.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == {}


def test_non_mapping_rejected(isolated_env):
    path = isolated_env / "c.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_malformed_json_rejected(isolated_env):
    path = isolated_env / "c.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_missing_explicit_file(isolated_env):
    with pytest.raises(OSError):
        load_config(str(isolated_env / "missing.yml"))


def test_default_locations(isolated_env):
    assert load_config(None) == {}
    user_dir = isolated_env / ".config" / "nestdeps"
    user_dir.mkdir(parents=True)
    (user_dir / "nestdeps.yaml").write_text("log_level: WARNING\n", encoding="utf-8")
    assert _load_yaml_config() == {"log_level": "WARNING"}
    (isolated_env / "nestdeps.yml").write_text("log_level: ERROR\n", encoding="utf-8")
    assert load_config("") == {"log_level": "ERROR"}


class TestOverrides:
    """Precedence of flags, environment and config."""

    def test_builtin_defaults(self, isolated_env):
        args = argparse.Namespace(LOG_LEVEL=None, DECLARING=None)
        apply_config_overrides(args, None)
        assert args.LOG_LEVEL == "INFO"
        assert args.DECLARING is None

    def test_config_fills_unset(self, isolated_env):
        args = argparse.Namespace(LOG_LEVEL=None, DECLARING=None)
        apply_config_overrides(args, {"log_level": "debug", "declaring_identifier": "a-v1"})
        assert args.LOG_LEVEL == "DEBUG"
        assert args.DECLARING == "a-v1"

    def test_environment_over_config(self, isolated_env, monkeypatch):
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "warning")
        args = argparse.Namespace(LOG_LEVEL=None, DECLARING=None)
        apply_config_overrides(args, {"log_level": "debug"})
        assert args.LOG_LEVEL == "WARNING"

    def test_flags_over_everything(self, isolated_env, monkeypatch):
        monkeypatch.setenv(Constants.ENV_DECLARING_IDENTIFIER, "b-v2")
        args = argparse.Namespace(LOG_LEVEL="ERROR", DECLARING="a-v1")
        apply_config_overrides(args, {"log_level": "debug", "declaring_identifier": "c-v3"})
        assert args.LOG_LEVEL == "ERROR"
        assert args.DECLARING == "a-v1"

    def test_commands_without_declaring_untouched(self, isolated_env):
        args = argparse.Namespace(LOG_LEVEL=None)
        apply_config_overrides(args, {"declaring_identifier": "a-v1"})
        assert not hasattr(args, "DECLARING")
