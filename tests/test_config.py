"""
Tests for server settings.
"""

import pytest
from pydantic import ValidationError

from strict_jsonrpc.config import Settings, get_settings


class TestSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in (
            "JSONRPC_SERVICE_NAME",
            "JSONRPC_DEBUG_METHODS",
            "JSONRPC_API_PREFIX",
            "JSONRPC_ENDPOINT_PATH",
            "JSONRPC_CONCURRENT_BATCHES",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.service_name == "strict-jsonrpc"
        assert settings.debug_methods is False
        assert settings.api_prefix == "/api/v1"
        assert settings.endpoint_path == "/jsonrpc"
        assert settings.concurrent_batches is True

    def test_environment_override(self, monkeypatch):
        """Test JSONRPC_* variables override defaults."""
        monkeypatch.setenv("JSONRPC_DEBUG_METHODS", "true")
        monkeypatch.setenv("JSONRPC_CONCURRENT_BATCHES", "false")
        monkeypatch.setenv("JSONRPC_ENDPOINT_PATH", "/rpc")

        settings = Settings(_env_file=None)

        assert settings.debug_methods is True
        assert settings.concurrent_batches is False
        assert settings.endpoint_path == "/rpc"

    def test_trailing_slash_stripped(self):
        settings = Settings(_env_file=None, api_prefix="/api/v2/", endpoint_path="/rpc/")

        assert settings.api_prefix == "/api/v2"
        assert settings.endpoint_path == "/rpc"

    def test_empty_prefix_allowed(self):
        settings = Settings(_env_file=None, api_prefix="")

        assert settings.api_prefix == ""

    @pytest.mark.parametrize("field", ["api_prefix", "endpoint_path"])
    def test_relative_path_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: "jsonrpc"})

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
