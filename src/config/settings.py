"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.geo.gateway import GeocoderConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Geocoding is optional: with `GEOCODER_ENABLED=false` place references are still extracted but
    never resolved, and coordinates are never classified.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    geocoder_enabled: bool = Field(default=True, alias="GEOCODER_ENABLED")
    geocoder_base_url: str = Field(
        default="https://nominatim.openstreetmap.org", alias="GEOCODER_BASE_URL"
    )
    geocoder_user_agent: str = Field(default="RC-Spot-Finder/1.0", alias="GEOCODER_USER_AGENT")
    geocoder_timeout_s: float = Field(default=10.0, alias="GEOCODER_TIMEOUT_S")
    geocoder_country_codes: str = Field(default="us", alias="GEOCODER_COUNTRY_CODES")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("geocoder_timeout_s")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Validate that the geocoder timeout is positive."""

        if value <= 0:
            raise ValueError("GEOCODER_TIMEOUT_S must be > 0")
        return value

    @field_validator("geocoder_user_agent")
    @classmethod
    def validate_user_agent(cls, value: str) -> str:
        """Nominatim's usage policy rejects requests without an identifying User-Agent."""

        if not value.strip():
            raise ValueError("GEOCODER_USER_AGENT must not be empty")
        return value.strip()

    def geocoder_config(self) -> GeocoderConfig:
        return GeocoderConfig(
            base_url=self.geocoder_base_url,
            user_agent=self.geocoder_user_agent,
            timeout_s=self.geocoder_timeout_s,
            country_codes=self.geocoder_country_codes,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        # Raising here is fine: caller can decide how to handle startup errors.
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
