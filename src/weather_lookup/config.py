"""Typed settings loader for the weather lookup client."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

DEFAULT_QUICK_CITIES = (
    "London",
    "New York",
    "Tokyo",
    "Paris",
    "Mumbai",
    "Sydney",
    "Dubai",
    "Singapore",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")
    weather_api_base_url: AnyUrl = Field(
        default="http://localhost:8080",
        alias="WEATHER_API_BASE_URL",
        validate_default=True,
    )
    weather_timeout_seconds: float = Field(default=10.0, alias="WEATHER_TIMEOUT_SECONDS")
    weather_units: Literal["metric", "imperial"] = Field(default="metric", alias="WEATHER_UNITS")
    weather_quick_cities: str = Field(
        default=",".join(DEFAULT_QUICK_CITIES),
        alias="WEATHER_QUICK_CITIES",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL {value!r} is not a valid logging level.")
        return level

    @model_validator(mode="before")
    @classmethod
    def drop_empty_strings(cls, data: Any) -> Any:
        """Treat empty env-string values as unset so defaults apply."""
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (isinstance(value, str) and value.strip() == "")
            }
        return data

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate numeric and list settings."""
        if self.weather_timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        if self.weather_api_base_url.scheme not in {"http", "https"}:
            raise ValueError("WEATHER_API_BASE_URL must use http or https.")
        if not self.quick_cities:
            raise ValueError("WEATHER_QUICK_CITIES must list at least one city.")
        return self

    @property
    def base_url(self) -> str:
        return str(self.weather_api_base_url).rstrip("/")

    @property
    def quick_cities(self) -> list[str]:
        """Quick-pick city names in configured order, blanks dropped."""
        return [part.strip() for part in self.weather_quick_cities.split(",") if part.strip()]

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging."""
        return {
            "app_env": self.app_env,
            "base_url": self.base_url,
            "timeout_seconds": self.weather_timeout_seconds,
            "units": self.weather_units,
            "quick_cities": self.quick_cities,
            "log_level": self.log_level,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
