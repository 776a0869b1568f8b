"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import Optional

from weather_data import DecodeError, WeatherData


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, city: str) -> WeatherData:
        """
        Fetch current weather for a city.

        Args:
            city: City name as typed by the user

        Returns:
            WeatherData: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather lookup fails."""
    pass


class EmptyInputError(WeatherProviderError):
    """No city was entered; nothing was sent over the network."""

    def __init__(self, message: str = "Please enter a city."):
        super().__init__(message)


class TransportError(WeatherProviderError):
    """The request never produced an HTTP response."""
    pass


class BadStatusError(WeatherProviderError):
    """The API answered with a status outside 200-299 (or not at all)."""

    def __init__(self, status_code: Optional[int], api_message: Optional[str] = None):
        self.status_code = status_code
        self.api_message = api_message
        if status_code is None:
            message = "Invalid response: no HTTP status received"
        else:
            message = f"Invalid response: HTTP {status_code}"
        if api_message:
            message += f" ({api_message})"
        super().__init__(message)


class NoDataError(WeatherProviderError):
    """The API answered 2xx with an empty body."""

    def __init__(self, message: str = "No data received."):
        super().__init__(message)


class ResponseDecodeError(WeatherProviderError, DecodeError):
    """The body was present but did not match the weather schema."""
    pass


__all__ = [
    "WeatherProviderBase",
    "WeatherProviderError",
    "EmptyInputError",
    "TransportError",
    "BadStatusError",
    "NoDataError",
    "ResponseDecodeError",
    "DecodeError",
]
