"""Shared fixtures for the weather lookup tests."""
import copy

import pytest

from weather_data import WeatherData

SAMPLE_RESPONSE = {
    "coord": {"lon": 2.3488, "lat": 48.8534},
    "weather": [
        {
            "id": 803,
            "main": "Clouds",
            "description": "broken clouds",
            "icon": "04d"
        }
    ],
    "base": "stations",
    "main": {
        "temp": 292.55,
        "feels_like": 292.87,
        "temp_min": 291.15,
        "temp_max": 293.71,
        "pressure": 1014,
        "humidity": 89
    },
    "visibility": 10000,
    "wind": {"speed": 3.13, "deg": 93},
    "rain": {"1h": 2.93},
    "clouds": {"all": 53},
    "dt": 1684929490,
    "sys": {
        "type": 2,
        "id": 2041230,
        "country": "FR",
        "sunrise": 1684901234,
        "sunset": 1684957890
    },
    "timezone": 7200,
    "id": 2988507,
    "name": "Paris",
    "cod": 200
}


@pytest.fixture
def sample_openweather_response():
    """Sample OpenWeather API response (fresh copy per test)."""
    return copy.deepcopy(SAMPLE_RESPONSE)


@pytest.fixture
def sample_weather(sample_openweather_response):
    """Decoded sample response."""
    return WeatherData.from_dict(sample_openweather_response)
