"""Application settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """DexCache configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Application
    app_name: str = Field(default="DexCache", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Minimum log level"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, ge=1, le=65535, description="Server port")

    # Cache - Redis
    redis_host: str = Field(default="localhost", description="Redis host")
    redis_port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    redis_password: SecretStr | None = Field(default=None, description="Redis password")
    redis_db: int = Field(default=0, ge=0, description="Redis database index")
    redis_socket_timeout: float = Field(
        default=5.0, gt=0, description="Redis socket timeout in seconds"
    )

    # Upstream - DexScreener
    dexscreener_base_url: str = Field(
        default="https://api.dexscreener.com",
        description="DexScreener API base URL",
    )
    dexscreener_timeout: float = Field(
        default=10.0, gt=0, description="DexScreener request timeout in seconds"
    )

    # Circuit Breaker
    circuit_breaker_threshold: int = Field(
        default=5, ge=1, description="Failures before circuit opens"
    )
    circuit_breaker_cooldown: int = Field(
        default=30, ge=1, description="Seconds before half-open"
    )

    @field_validator("dexscreener_base_url")
    @classmethod
    def validate_dexscreener_base_url(cls, v: str) -> str:
        """Validate DexScreener URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("DexScreener URL must start with http:// or https://")
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
