"""Tests for notelytic.core.config module."""

import logging
from pathlib import Path

import pytest

import notelytic.core.config as config


class TestEnvHelpers:
    """Tests for environment variable helpers."""

    def test_get_env_returns_value(self, monkeypatch):
        """get_env returns environment variable value."""
        monkeypatch.setenv("TEST_VAR", "test_value")

        assert config.get_env("TEST_VAR") == "test_value"

    def test_get_env_returns_default(self, monkeypatch):
        """get_env returns default when var not set."""
        monkeypatch.delenv("NONEXISTENT_VAR", raising=False)

        assert config.get_env("NONEXISTENT_VAR", "default") == "default"

    @pytest.mark.parametrize(
        "value,default,expected",
        [
            ("42", 3, 42),
            ("not_a_number", 99, 99),
            (None, 123, 123),
        ],
    )
    def test_get_env_int(self, monkeypatch, value, default, expected):
        """get_env_int parses or falls back to default."""
        if value is None:
            monkeypatch.delenv("INT_VAR", raising=False)
        else:
            monkeypatch.setenv("INT_VAR", value)

        assert config.get_env_int("INT_VAR", default) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", True),
            ("True", True),
            ("1", True),
            ("yes", True),
            ("false", False),
            ("False", False),
            ("0", False),
            ("no", False),
        ],
    )
    def test_get_env_bool_parses_known_values(self, monkeypatch, value, expected):
        """get_env_bool parses known values."""
        monkeypatch.setenv("BOOL_VAR", value)

        assert config.get_env_bool("BOOL_VAR") is expected

    @pytest.mark.parametrize("default", [True, False])
    def test_get_env_bool_default(self, monkeypatch, default):
        """get_env_bool returns default for unknown values."""
        monkeypatch.setenv("BOOL_VAR", "maybe")

        assert config.get_env_bool("BOOL_VAR", default) is default

    def test_get_env_treats_empty_as_unset(self, monkeypatch):
        monkeypatch.setenv("EMPTY_VAR", "")

        assert config.get_env("EMPTY_VAR", "default") == "default"

    def test_get_env_path_expands_home(self, monkeypatch, tmp_path):
        """get_env_path expands ``~`` and falls back to the default."""
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("PATH_VAR", "~/notes")

        assert config.get_env_path("PATH_VAR", Path("/x")) == tmp_path / "notes"

        monkeypatch.delenv("PATH_VAR")
        assert config.get_env_path("PATH_VAR", Path("/x")) == Path("/x")

    def test_get_env_list(self, monkeypatch):
        monkeypatch.setenv("LIST_VAR", " a, b ,,c ")

        assert config.get_env_list("LIST_VAR", "") == ["a", "b", "c"]
        assert config.get_env_list("MISSING_LIST_VAR", "x,y") == ["x", "y"]


class TestDefaults:
    """Tests for configuration defaults."""

    def test_database_path_is_a_path(self):
        """DATABASE_PATH is a filesystem path."""
        assert isinstance(config.DATABASE_PATH, Path)

    def test_max_pinned_is_positive(self):
        """MAX_PINNED_NOTES is a positive integer."""
        assert isinstance(config.MAX_PINNED_NOTES, int)
        assert config.MAX_PINNED_NOTES > 0

    def test_setup_logging_returns_logger(self):
        """setup_logging returns the config logger."""
        logger = config.setup_logging()

        assert isinstance(logger, logging.Logger)
        assert logger.name == "notelytic.core.config"


class TestValidateApiEnvironment:
    """Tests for API environment validation."""

    def test_validate_missing_api_key(self, monkeypatch):
        """Validation fails without an API key or the no-auth override."""
        monkeypatch.setattr(config, "NOTELYTIC_API_KEY", None)
        monkeypatch.setattr(config, "NOTELYTIC_ALLOW_NO_AUTH", False)

        is_valid, message = config.validate_api_environment()
        assert is_valid is False
        assert "NOTELYTIC_API_KEY" in message

    def test_validate_no_auth_override(self, monkeypatch):
        """Validation passes when unauthenticated access is allowed."""
        monkeypatch.setattr(config, "NOTELYTIC_API_KEY", None)
        monkeypatch.setattr(config, "NOTELYTIC_ALLOW_NO_AUTH", True)

        is_valid, message = config.validate_api_environment()
        assert is_valid is True
        assert message == ""

    def test_validate_with_api_key(self, monkeypatch):
        """Validation passes with an API key."""
        monkeypatch.setattr(config, "NOTELYTIC_API_KEY", "secret")
        monkeypatch.setattr(config, "NOTELYTIC_ALLOW_NO_AUTH", False)

        is_valid, _ = config.validate_api_environment()
        assert is_valid is True
