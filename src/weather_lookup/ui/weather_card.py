"""Rich renderables for search sessions and the startup health line."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..health import HealthStatus
from ..models import WeatherSnapshot
from ..normalize import (
    Units,
    alternate_temperature,
    aqi_color,
    condition_icon,
    country_flag,
    describe,
    format_air_quality,
    format_coordinate,
    format_distance,
    format_temperature,
    format_uv_index,
    format_wind_speed,
    uv_color,
)
from ..state import Error, Idle, Loading, SearchSession, Success


def detail_rows(snapshot: WeatherSnapshot, units: Units = "metric") -> list[tuple[str, str, str]]:
    """Label, value and style for each detail cell of the weather card."""
    main = snapshot.main
    aqi_value = format_air_quality(snapshot.aqi, snapshot.air_quality)
    if snapshot.aqi >= 0:
        aqi_value = f"{aqi_value} (AQI {snapshot.aqi})"
    return [
        (
            "Wind",
            f"{format_wind_speed(snapshot.wind.speed_ms, snapshot.wind.speed_kmh, units)} "
            f"{snapshot.wind.direction}".rstrip(),
            "",
        ),
        ("Humidity", f"{main.humidity}%", ""),
        ("Pressure", f"{main.pressure} hPa", ""),
        ("Cloudiness", f"{snapshot.clouds.all}%", ""),
        ("Visibility", format_distance(snapshot.visibility_meters), ""),
        ("UV Index", format_uv_index(snapshot.uv_index), f"bold {uv_color(snapshot.uv_index)}"),
        ("Sunrise", snapshot.sunrise_time or "-", ""),
        ("Sunset", snapshot.sunset_time or "-", ""),
        ("Air Quality", aqi_value, f"bold {aqi_color(snapshot.aqi)}"),
        ("Local Time", snapshot.local_time or "-", ""),
        (
            "Coordinates",
            f"{format_coordinate(snapshot.coordinates.latitude)}, "
            f"{format_coordinate(snapshot.coordinates.longitude)}",
            "",
        ),
        ("Last Updated", snapshot.last_updated or "-", "dim"),
    ]


def render_weather_card(snapshot: WeatherSnapshot, units: Units = "metric") -> Panel:
    main = snapshot.main
    condition = snapshot.primary_condition

    header = Text()
    header.append(snapshot.name, style="bold white")
    header.append(f"  {country_flag(snapshot.country)} {snapshot.country}")
    if snapshot.cache_hit:
        header.append("  💾 Cached", style="cyan")

    temps = Text()
    temps.append(f"{condition_icon(snapshot)} ")
    temps.append(
        format_temperature(main.temp_celsius, main.temp_fahrenheit, units), style="bold yellow"
    )
    temps.append(f"  {alternate_temperature(main.temp_celsius, main.temp_fahrenheit, units)}")
    temps.append(
        "  Feels like "
        f"{format_temperature(main.feels_like.celsius, main.feels_like.fahrenheit, units)}",
        style="dim",
    )
    temps.append(
        f"  ↓ {format_temperature(main.temp_min.celsius, main.temp_min.fahrenheit, units)}"
        f"  ↑ {format_temperature(main.temp_max.celsius, main.temp_max.fahrenheit, units)}"
    )
    if condition is not None:
        temps.append(f"\n{condition.main}: {describe(condition.description)}")

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    for label, value, style in detail_rows(snapshot, units):
        table.add_row(label, Text(value, style=style))

    return Panel(Group(header, temps, table), title="Weather", border_style="blue")


def render_session(session: SearchSession, units: Units = "metric") -> RenderableType:
    request = session.request
    if isinstance(request, Success):
        return render_weather_card(request.snapshot, units)
    if isinstance(request, Error):
        return Panel(
            Text(request.message, style="bold red"),
            title=f"❌ Error: {request.city}",
            border_style="red",
        )
    if isinstance(request, Loading):
        return Text(f"⏳ Fetching weather data for {request.city}...", style="dim")
    if isinstance(request, Idle):
        return Text("Enter a city name to get started.", style="dim")
    raise TypeError(f"Unknown request state: {type(request).__name__}")


def render_health(status: HealthStatus) -> Text:
    if status.online:
        return Text(f"● {status.status_line()}", style="green")
    return Text(f"⚠️ {status.status_line()}", style="bold yellow")
