"""JSON-RPC server configuration settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings loaded from JSONRPC_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="JSONRPC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    service_name: str = Field(default="strict-jsonrpc", description="Service name")

    # Diagnostics
    debug_methods: bool = Field(
        default=False,
        description="Log handler name, raw params and raw return value when a method misbehaves",
    )

    # HTTP binding
    api_prefix: str = Field(default="/api/v1", description="Router prefix")
    endpoint_path: str = Field(default="/jsonrpc", description="JSON-RPC endpoint path")

    # Batch processing
    concurrent_batches: bool = Field(
        default=True, description="Run the members of a batch concurrently"
    )

    @field_validator("api_prefix", "endpoint_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Paths are absolute and carry no trailing slash."""
        v = v.rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError("Path must start with '/'")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
