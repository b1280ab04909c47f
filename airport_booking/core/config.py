"""Configuration settings for the booking core."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with Pydantic validation."""

    # Database settings
    database_url: str = Field(
        default="sqlite+aiosqlite:///./airport_booking.db",
        description="SQLAlchemy async database URL"
    )

    # Environment settings
    environment: str = Field(
        default="development",
        description="Application environment"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Application log level"
    )

    # Tracing settings
    otlp_endpoint: Optional[str] = Field(
        default=None,
        description="OTLP collector endpoint; tracing export is disabled when unset"
    )

    # Concurrency settings
    lock_stripes: int = Field(
        default=64,
        ge=1,
        description="Number of lock stripes used to serialize per-flight and per-booking mutations"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_environments = ["development", "test", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @property
    def debug(self) -> bool:
        """Return True if in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Return True if in production mode."""
        return self.environment == "production"

    model_config = {
        "env_prefix": "AIRPORT_BOOKING_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Global settings instance
settings = Settings()
