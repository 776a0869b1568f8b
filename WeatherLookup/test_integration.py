"""Integration tests - can optionally hit real API (disabled by default)."""
import os
import pytest
from app_controller import AppController
from openweather_provider import OpenWeatherProvider
from persistence import JsonFileStore
from weather_provider import BadStatusError


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_openweather_integration():
    """
    Integration test that hits the real OpenWeather API.

    Set OPENWEATHER_API_KEY environment variable to run this test.
    """
    api_key = os.environ.get("OPENWEATHER_API_KEY")

    provider = OpenWeatherProvider(api_key=api_key, timeout=10)

    # Should succeed
    weather = provider.get_current("London")

    assert weather.name == "London"
    assert weather.sys.country == "GB"
    assert weather.main.temp > 0  # Kelvin
    assert weather.dt > 0


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_openweather_unknown_city_integration():
    provider = OpenWeatherProvider(api_key=os.environ.get("OPENWEATHER_API_KEY"), timeout=10)

    with pytest.raises(BadStatusError) as exc_info:
        provider.get_current("Nowhereville Qzxv")

    assert exc_info.value.status_code == 404


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_controller_integration(tmp_path):
    """Search, then restart from the same state file."""
    api_key = os.environ.get("OPENWEATHER_API_KEY")
    state_file = str(tmp_path / "state.json")

    controller = AppController(OpenWeatherProvider(api_key=api_key, timeout=10), JsonFileStore(state_file))
    weather = controller.search("London")
    assert weather is not None

    restarted = AppController(OpenWeatherProvider(api_key=api_key, timeout=10), JsonFileStore(state_file))
    assert restarted.current == weather
    assert restarted.history == ["London"]
