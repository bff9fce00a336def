"""Configuration management for the application."""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shopping_list.models.enums import PurchaseCadence


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Calendar days (soon / kind of soon cutoffs, dormancy) are counted in this zone
    calendar_timezone: str = Field(default="UTC")

    # Cadence used when a new item is added without an explicit one
    default_cadence_days: int = Field(default=int(PurchaseCadence.KIND_OF_SOON), ge=0)

    # API
    environment: str = Field(default="development")

    @field_validator("calendar_timezone")
    @classmethod
    def validate_calendar_timezone(cls, value: str) -> str:
        """Reject timezone names that zoneinfo cannot resolve."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        """Timezone object for calendar-day arithmetic."""
        return ZoneInfo(self.calendar_timezone)

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
