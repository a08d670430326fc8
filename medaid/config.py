"""Application configuration via pydantic-settings.

Values come from environment variables or a `.env` file. Only the HTTP
surface reads these; the pricing and persona engines take no configuration.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Root settings.

    Usage:
        settings = Settings()
        settings.max_compare_plans
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    api_host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    api_port: int = Field(default=8000, description="Bind port for uvicorn")

    max_compare_plans: int = Field(default=3, ge=1, description="Plans allowed in the compare tray")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# Module-level singleton, import this wherever settings are needed.
settings = Settings()
