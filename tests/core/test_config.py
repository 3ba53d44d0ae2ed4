# tests/core/test_config.py
"""
Tests for the Config class.
"""

import os
from unittest.mock import patch

import pytest

from costgraph.core.config import Config


class TestGetSecret:
    """Tests for the Config._get_secret method."""

    def test_get_secret_from_env_var(self):
        with patch.dict(os.environ, {"TEST_SECRET": "env_value"}):
            with patch("costgraph.core.config.os.path.exists", return_value=False):
                assert Config._get_secret("TEST_SECRET") == "env_value"

    def test_get_secret_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            with patch("costgraph.core.config.os.path.exists", return_value=False):
                assert Config._get_secret("NONEXISTENT_SECRET", default="default_value") == "default_value"

    def test_get_secret_file_takes_precedence_over_env(self):
        with patch.dict(os.environ, {"TEST_SECRET": "env_value"}):
            with patch("costgraph.core.config.os.path.exists", return_value=True):
                with patch("builtins.open", create=True) as mock_open:
                    mock_open.return_value.__enter__.return_value.read.return_value = "  file_value \n"
                    assert Config._get_secret("TEST_SECRET") == "file_value"
                    mock_open.assert_called_once_with("/etc/costgraph/secrets/TEST_SECRET", "r")

    def test_get_secret_permission_error(self):
        with patch("costgraph.core.config.os.path.exists", return_value=True):
            with patch("builtins.open", side_effect=PermissionError("Permission denied")):
                with pytest.raises(PermissionError) as exc_info:
                    Config._get_secret("TEST_SECRET")

        assert "exists but cannot be read due to permission denied" in str(exc_info.value)

    def test_get_secret_io_error(self):
        with patch("costgraph.core.config.os.path.exists", return_value=True):
            with patch("builtins.open", side_effect=IOError("Disk read error")):
                with pytest.raises(IOError) as exc_info:
                    Config._get_secret("TEST_SECRET")

        assert "Please check the file integrity" in str(exc_info.value)


class TestValidateInstance:
    def test_defaults_are_valid(self):
        Config().validate_instance()

    def test_dgraph_url_is_read_at_access_time(self, monkeypatch):
        cfg = Config()
        monkeypatch.setenv("DGRAPH_URL", "https://dgraph.example.com/")

        assert cfg.DGRAPH_URL == "https://dgraph.example.com"

    def test_rejects_non_http_dgraph_url(self, monkeypatch):
        monkeypatch.setenv("DGRAPH_URL", "grpc://dgraph:9080")

        with pytest.raises(ValueError, match="DGRAPH_URL"):
            Config().validate_instance()

    def test_rejects_negative_price(self, monkeypatch):
        cfg = Config()
        monkeypatch.setattr(cfg, "DEFAULT_MEMORY_PRICE", -1.0)

        with pytest.raises(ValueError, match="DEFAULT_MEMORY_PRICE"):
            cfg.validate_instance()

    def test_rejects_empty_period(self, monkeypatch):
        cfg = Config()
        monkeypatch.setattr(cfg, "COST_PERIOD_HOURS", 0)

        with pytest.raises(ValueError, match="COST_PERIOD_HOURS"):
            cfg.validate_instance()
