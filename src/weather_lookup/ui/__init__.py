"""Terminal renderables for the weather lookup CLI."""

from .weather_card import detail_rows, render_health, render_session, render_weather_card

__all__ = ["detail_rows", "render_health", "render_session", "render_weather_card"]
