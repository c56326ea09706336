"""Configuration management for Linear MCP."""

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env" if os.getenv("ENVIRONMENT") != "test" else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow"
    )

    # Application
    app_name: str = "Linear MCP"
    app_version: str = "0.1.0"
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Prefix applied to every tool name and description, used when several
    # Linear workspaces are configured side by side in one MCP client.
    tool_prefix: Optional[str] = Field(default=None)

    # Personal access token (takes precedence over OAuth)
    linear_access_token: Optional[str] = Field(default=None)

    # OAuth Configuration - Linear
    linear_client_id: Optional[str] = Field(default=None)
    linear_client_secret: Optional[str] = Field(default=None)
    linear_redirect_uri: Optional[str] = Field(default=None)
    linear_scopes: str = Field(default="read write")

    # Linear API
    linear_api_url: str = Field(default="https://api.linear.app/graphql")

    # HTTP
    http_timeout_ms: int = Field(default=30000)
    http_max_retries: int = Field(default=3)
    http_rate_limit_max_requests: Optional[int] = Field(
        default=None,
        description="Requests allowed per window. Unset disables the limiter.",
    )
    http_rate_limit_window_ms: int = Field(default=60000)

    # Bulk operations
    bulk_concurrency: int = Field(
        default=5,
        description="Maximum concurrent requests issued by bulk tools",
    )

    @field_validator("tool_prefix", "linear_access_token", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("http_max_retries", "bulk_concurrency")
    @classmethod
    def at_least_one(cls, v):
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @property
    def http_timeout(self) -> float:
        """HTTP timeout in seconds."""
        return self.http_timeout_ms / 1000.0

    @property
    def rate_limit_window(self) -> float:
        """Rate limit window in seconds."""
        return self.http_rate_limit_window_ms / 1000.0

    def has_oauth_client(self) -> bool:
        return bool(
            self.linear_client_id
            and self.linear_client_secret
            and self.linear_redirect_uri
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
