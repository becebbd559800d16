"""
Configuration for Raster Lab.

Uses pydantic-settings; every field can be overridden through an environment
variable with the RASTER_ prefix or a local .env file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine-wide settings."""

    model_config = SettingsConfigDict(
        env_prefix="RASTER_",
        env_file=".env",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    # Codec
    jpeg_quality: int = Field(default=95, ge=1, le=100)
    png_compression: int = Field(default=3, ge=0, le=9)

    # Scripts
    stop_on_error: bool = Field(default=False)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
