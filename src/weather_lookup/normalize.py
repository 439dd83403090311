"""Pure display mappings for weather snapshot values.

Every function here is total: unknown or sentinel inputs map to a documented
fallback instead of raising.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from types import MappingProxyType
from typing import Literal

from .models import WeatherSnapshot

Units = Literal["metric", "imperial"]

FALLBACK_ICON = "🌤️"
FALLBACK_FLAG = "🌍"
NEUTRAL_COLOR = "#636e72"
UNAVAILABLE_TEXT = "N/A"

_MS_TO_MPH = 2.2369362920544

WEATHER_ICONS = MappingProxyType(
    {
        "clear sky": "☀️",
        "few clouds": "⛅",
        "scattered clouds": "☁️",
        "broken clouds": "☁️",
        "overcast clouds": "☁️",
        "shower rain": "🌦️",
        "rain": "🌧️",
        "light rain": "🌧️",
        "moderate rain": "🌧️",
        "heavy rain": "⛈️",
        "thunderstorm": "⛈️",
        "snow": "❄️",
        "light snow": "🌨️",
        "mist": "🌫️",
        "fog": "🌫️",
        "haze": "🌫️",
        "smoke": "💨",
        "dust": "💨",
        "sand": "💨",
    }
)

COUNTRY_FLAGS = MappingProxyType(
    {
        "GB": "🇬🇧", "US": "🇺🇸", "JP": "🇯🇵", "FR": "🇫🇷",
        "IN": "🇮🇳", "AU": "🇦🇺", "DE": "🇩🇪", "CA": "🇨🇦",
        "IT": "🇮🇹", "ES": "🇪🇸", "BR": "🇧🇷", "RU": "🇷🇺",
        "CN": "🇨🇳", "MX": "🇲🇽", "NL": "🇳🇱", "SE": "🇸🇪",
        "CH": "🇨🇭", "BE": "🇧🇪", "AT": "🇦🇹", "NO": "🇳🇴",
        "DK": "🇩🇰", "FI": "🇫🇮", "PL": "🇵🇱", "PT": "🇵🇹",
        "GR": "🇬🇷", "CZ": "🇨🇿", "IE": "🇮🇪", "NZ": "🇳🇿",
        "SG": "🇸🇬", "TH": "🇹🇭", "AE": "🇦🇪", "SA": "🇸🇦",
    }
)

# Lower bound of each band, ascending severity.
UV_BANDS: tuple[tuple[float, str], ...] = (
    (11.0, "#b567a4"),
    (8.0, "#ff0000"),
    (6.0, "#ff7e00"),
    (3.0, "#ffff00"),
    (0.0, "#00e400"),
)

AQI_COLORS = MappingProxyType(
    {
        1: "#00e400",
        2: "#ffff00",
        3: "#ff7e00",
        4: "#ff0000",
        5: "#8f3f97",
    }
)


def weather_icon(description: str | None) -> str:
    """Glyph for a condition description, matched exactly and case-insensitively."""
    if not description:
        return FALLBACK_ICON
    return WEATHER_ICONS.get(description.lower(), FALLBACK_ICON)


def condition_icon(snapshot: WeatherSnapshot) -> str:
    """Glyph for the first reported condition, or the fallback when none is reported."""
    condition = snapshot.primary_condition
    return weather_icon(condition.description) if condition else FALLBACK_ICON


def country_flag(code: str | None) -> str:
    """Flag for an ISO alpha-2 code; unknown or empty codes get the globe."""
    if not code:
        return FALLBACK_FLAG
    return COUNTRY_FLAGS.get(code, FALLBACK_FLAG)


def uv_color(uv_index: float) -> str:
    """Severity color for a UV reading; negative readings are the unavailable sentinel."""
    if uv_index < 0:
        return NEUTRAL_COLOR
    for lower_bound, color in UV_BANDS:
        if uv_index >= lower_bound:
            return color
    return NEUTRAL_COLOR


def aqi_color(aqi: int) -> str:
    """Color for AQI 1-5; the sentinel and out-of-range values are neutral."""
    return AQI_COLORS.get(aqi, NEUTRAL_COLOR)


def round_temperature(value: float) -> float:
    """Round to one decimal place, halves away from zero (20.05 -> 20.1).

    Non-finite values come back unchanged.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(str(value))
    with localcontext() as ctx:
        # Room for every integer digit plus the tenths digit.
        ctx.prec = max(ctx.prec, exact.adjusted() + 3)
        rounded = exact.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(rounded)


def format_distance(meters: int | float) -> str:
    """Meters below 1000, kilometers with one decimal above; N/A when not finite."""
    if not math.isfinite(meters):
        return UNAVAILABLE_TEXT
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{int(meters)} m"


def format_uv_index(uv_index: float) -> str:
    """One-decimal UV reading, or N/A for the sentinel."""
    if uv_index < 0:
        return UNAVAILABLE_TEXT
    return f"{uv_index:.1f}"


def format_air_quality(aqi: int, label: str) -> str:
    """Server's AQI label, or N/A for the sentinel."""
    if aqi < 0:
        return UNAVAILABLE_TEXT
    return label or f"AQI {aqi}"


def format_temperature(celsius: float, fahrenheit: float, units: Units = "metric") -> str:
    """Primary temperature reading for the selected unit system."""
    if units == "imperial":
        return f"{round_temperature(fahrenheit)}°F"
    return f"{round_temperature(celsius)}°C"


def alternate_temperature(celsius: float, fahrenheit: float, units: Units = "metric") -> str:
    other: Units = "metric" if units == "imperial" else "imperial"
    return format_temperature(celsius, fahrenheit, other)


def format_wind_speed(speed_ms: float, speed_kmh: float, units: Units = "metric") -> str:
    if units == "imperial":
        return f"{speed_ms * _MS_TO_MPH:.1f} mph"
    return f"{speed_ms:g} m/s ({speed_kmh:.1f} km/h)"


def format_coordinate(value: float) -> str:
    return f"{value:.4f}°"


def describe(description: str) -> str:
    """Capitalize the first letter only, leaving the rest untouched."""
    return description[:1].upper() + description[1:]
