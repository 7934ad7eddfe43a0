"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

from geolog.shared.constants import (
    DEFAULT_ALERT_DISTANCE_KM,
    DEFAULT_MAXMIND_DB,
    GEOCODE_DELAY_SECONDS,
    GEOCODE_TIMEOUT_SECONDS,
    GOOGLE_GEOCODE_URL,
    PLACEHOLDER_API_KEY,
)


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Alerting ===
    alert_distance_km: float = Field(
        default=DEFAULT_ALERT_DISTANCE_KM,
        description="Distance an IP must be from the geocenter to alert"
    )
    group_by_month: bool = Field(
        default=False,
        description="Compute one geocenter per user and month"
    )

    # === IP geolocation ===
    maxmind_db_path: str = Field(
        default=DEFAULT_MAXMIND_DB,
        description="Location of MaxMind city database"
    )

    # === Reverse geocoding ===
    google_api_key: Optional[str] = Field(
        default=None,
        description="Key to Google geocoding API"
    )
    reverse_geocode_url: str = Field(default=GOOGLE_GEOCODE_URL)
    reverse_geocode_timeout: float = Field(default=GEOCODE_TIMEOUT_SECONDS)
    reverse_geocode_delay: float = Field(default=GEOCODE_DELAY_SECONDS)

    @field_validator('alert_distance_km')
    @classmethod
    def check_alert_distance(cls, v: float) -> float:
        """Threshold must be a positive distance."""
        if v <= 0:
            raise ValueError("alert_distance_km must be positive")
        return v

    @field_validator('google_api_key')
    @classmethod
    def drop_placeholder_key(cls, v: Optional[str]) -> Optional[str]:
        """Treat the placeholder or an empty key as not configured."""
        if not v or v == PLACEHOLDER_API_KEY:
            return None
        return v

    @property
    def reverse_geocoding_enabled(self) -> bool:
        """Check if a real geocoding key is configured."""
        return self.google_api_key is not None

    model_config = SettingsConfigDict(
        env_prefix="GEOLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
