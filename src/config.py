"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WEBHOOK_TOKEN = "default-webhook-token"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Server
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=3000)

    # Webhook
    webhook_token: str = Field(default=DEFAULT_WEBHOOK_TOKEN)
    webhook_rate_limit: int = Field(default=10, ge=1)
    webhook_rate_window_seconds: float = Field(default=60.0, gt=0)

    # Web push
    admin_email: str = Field(default="admin@example.com")
    vapid_public_key: str | None = Field(default=None)
    vapid_private_key: str | None = Field(default=None)
    push_timeout_seconds: float = Field(default=5.0, gt=0)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    max_body_bytes: int = Field(default=1024 * 1024, gt=0)

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Reject half-configured keys and insecure production settings."""
        if bool(self.vapid_public_key) != bool(self.vapid_private_key):
            raise ValueError("VAPID_PUBLIC_KEY and VAPID_PRIVATE_KEY must be set together")
        if self.is_production and self.webhook_token == DEFAULT_WEBHOOK_TOKEN:
            raise ValueError("WEBHOOK_TOKEN must be changed in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
