"""Typed models for the weather service wire contract."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

UNAVAILABLE = -1


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)


class ServerHealth(BaseModel):
    """Health probe payload; fields beyond the cache counter are kept as extras."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    cache_entries: int = Field(
        ge=0,
        validation_alias=AliasChoices("cache_entries", "cacheEntries"),
    )


class TemperatureReading(_Frozen):
    """One temperature expressed in all three scales."""

    kelvin: float = 0.0
    celsius: float = 0.0
    fahrenheit: float = 0.0


class MainReadings(_Frozen):
    temp_kelvin: float = 0.0
    temp_celsius: float = 0.0
    temp_fahrenheit: float = 0.0
    feels_like: TemperatureReading = Field(default_factory=TemperatureReading)
    temp_min: TemperatureReading = Field(default_factory=TemperatureReading)
    temp_max: TemperatureReading = Field(default_factory=TemperatureReading)
    humidity: int = Field(default=0, ge=0, le=100)
    pressure: int = 0

    @property
    def feels_like_celsius(self) -> float:
        return self.feels_like.celsius

    @property
    def temp_min_celsius(self) -> float:
        return self.temp_min.celsius

    @property
    def temp_max_celsius(self) -> float:
        return self.temp_max.celsius


class WeatherCondition(_Frozen):
    main: str = ""
    description: str = ""
    icon: str | None = None


class WindReadings(_Frozen):
    speed_ms: float = 0.0
    speed_kmh: float = 0.0
    direction: str = ""
    degrees: int | None = None


class CloudCover(_Frozen):
    all: int = Field(default=0, ge=0, le=100)


class Coordinates(_Frozen):
    latitude: float = 0.0
    longitude: float = 0.0


class WeatherSnapshot(_Frozen):
    """Normalized current-weather snapshot for one city.

    Nested blocks default to empty readings and the UV/AQI fields default to
    the -1 sentinel so partial payloads still render.
    """

    name: str
    country: str = ""
    timezone: int | None = None
    main: MainReadings = Field(default_factory=MainReadings)
    weather: tuple[WeatherCondition, ...] = ()
    wind: WindReadings = Field(default_factory=WindReadings)
    clouds: CloudCover = Field(default_factory=CloudCover)
    visibility_meters: int = Field(default=0, ge=0)
    uv_index: float = UNAVAILABLE
    aqi: int = UNAVAILABLE
    air_quality: str = ""
    sunrise_time: str = ""
    sunset_time: str = ""
    local_time: str = ""
    last_updated: str = ""
    coordinates: Coordinates = Field(default_factory=Coordinates)
    cache_hit: bool = False

    @property
    def primary_condition(self) -> WeatherCondition | None:
        """First reported condition, or None when the service sent none."""
        return self.weather[0] if self.weather else None
