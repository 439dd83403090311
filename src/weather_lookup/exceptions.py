"""Application exception classes."""

CONNECTIVITY_MESSAGE = "Unable to fetch weather data. Please try again."
SERVICE_FALLBACK_MESSAGE = "Failed to fetch weather data"


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class EmptyCityError(ValueError):
    """Raised when a search is attempted with a blank city name."""


class WeatherServiceError(Exception):
    """Raised when weather service calls fail or return malformed data."""

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        self.user_message = user_message or message


class ConnectivityError(WeatherServiceError):
    """Raised when the weather service cannot be reached at all."""

    def __init__(self, message: str) -> None:
        super().__init__(message, user_message=CONNECTIVITY_MESSAGE)


class ServiceError(WeatherServiceError):
    """Raised for non-success responses with status metadata."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(WeatherServiceError):
    """Raised when a response body cannot be parsed into the expected shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message, user_message=CONNECTIVITY_MESSAGE)
