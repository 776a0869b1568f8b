"""OpenWeather Current Weather API provider implementation."""
import logging
import requests
from typing import Optional
from weather_provider import (
    BadStatusError,
    EmptyInputError,
    NoDataError,
    ResponseDecodeError,
    TransportError,
    WeatherProviderBase,
)
from weather_data import DecodeError, WeatherData


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API, queried by city name.

    Uses the free Current Weather API: https://openweathermap.org/current
    No ``units`` parameter is sent, so temperatures arrive in Kelvin.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            base_url: Endpoint to query (override for test servers)
            timeout: HTTP request timeout in seconds; None keeps the transport default
            session: requests session to reuse (a new one is created if omitted)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _params(self, city: str) -> dict:
        return {"q": city, "appid": self.api_key}

    def build_url(self, city: str) -> str:
        """Return the full request URL with the city percent-encoded."""
        request = requests.Request("GET", self.base_url, params=self._params(city))
        return request.prepare().url

    def get_current(self, city: str) -> WeatherData:
        """
        Fetch current weather for ``city`` from OpenWeather. One attempt, no retries.

        Returns:
            WeatherData: Current weather information

        Raises:
            EmptyInputError: city is blank; no request is made
            TransportError: the request failed before any response arrived
            BadStatusError: status outside 200-299
            NoDataError: 2xx with an empty body
            ResponseDecodeError: body does not match the weather schema
        """
        city = city.strip()
        if not city:
            logging.warning("Refusing to query OpenWeather with an empty city")
            raise EmptyInputError()

        try:
            logging.info(f"Making OpenWeather API request: {self.base_url} q={city!r}")
            response = self.session.get(self.base_url, params=self._params(city), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise TransportError(f"Network error: {e}") from e

        if response is None or response.status_code is None:
            logging.error("Request completed without an HTTP response")
            raise BadStatusError(None)

        logging.info(f"API response status: {response.status_code}")
        logging.debug(f"Response headers: {dict(response.headers)}")

        if not 200 <= response.status_code <= 299:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        body = response.content
        if not body:
            logging.error("API response had an empty body")
            raise NoDataError()

        # Log full response in debug mode (truncated for readability)
        logging.debug(f"API response (truncated): {body[:500]!r}...")

        try:
            weather_data = WeatherData.from_json(body)
        except DecodeError as e:
            logging.error(f"Failed to parse API response: {e}")
            raise ResponseDecodeError(f"Failed to parse response: {e}") from e

        logging.info(
            f"Successfully parsed weather data: {weather_data.name}, "
            f"{weather_data.main.temp}K, {weather_data.condition.main}"
        )
        return weather_data

    def _handle_error_response(self, response: requests.Response) -> None:
        """Raise BadStatusError, including OpenWeather's own message when it sent JSON."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise BadStatusError(response.status_code)

        logging.error(f"OpenWeather API error response: {error_data}")
        message = error_data.get("message") if isinstance(error_data, dict) else None
        raise BadStatusError(response.status_code, message if isinstance(message, str) else None)
