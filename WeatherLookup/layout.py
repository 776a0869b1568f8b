"""Layout and rendering logic for weather display - pure functions for testability."""
from typing import List, Sequence

from units import MeasurementSystem, TemperatureUnit, format_decimal, speed_string, temperature_string
from weather_data import WeatherData

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]


def compass_point(deg: int) -> str:
    """
    Map a wind direction in degrees to a 16-point compass label.

    Args:
        deg: Direction the wind comes from, 0-359

    Returns:
        Label such as "N", "ENE" or "SW"
    """
    index = int((deg % 360) / 22.5 + 0.5) % 16
    return COMPASS_POINTS[index]


def get_condition_text(weather: WeatherData) -> str:
    """Primary condition as shown in the summary, e.g. "Clouds"."""
    return weather.condition.main


def format_summary(
    weather: WeatherData,
    unit: TemperatureUnit,
    system: MeasurementSystem = MeasurementSystem.METRIC
) -> List[str]:
    """Lines of the result panel shown right after a search."""
    return [
        f"Temperature: {temperature_string(weather.main.temp, unit)}",
        f"Humidity: {weather.main.humidity}%",
        f"Wind Speed: {speed_string(weather.wind.speed, system)}",
        f"Weather Condition: {get_condition_text(weather)}",
    ]


def format_details(
    weather: WeatherData,
    unit: TemperatureUnit,
    system: MeasurementSystem = MeasurementSystem.METRIC
) -> List[str]:
    """
    Lines of the details view.

    Times (observation, sunrise, sunset) are shown in the city's own
    UTC offset, not the local machine's.
    """
    main = weather.main
    sunrise = weather.local_time(weather.sys.sunrise).strftime("%H:%M")
    sunset = weather.local_time(weather.sys.sunset).strftime("%H:%M")
    observed = weather.observed_at().strftime("%Y-%m-%d %H:%M")

    visibility_km = format_decimal(weather.visibility / 1000.0, 1)
    wind = f"{speed_string(weather.wind.speed, system)} {compass_point(weather.wind.deg)} ({weather.wind.deg}°)"

    return [
        "Weather Details",
        f"Location: {weather.name}, {weather.sys.country} ({weather.coord.lat}, {weather.coord.lon})",
        f"Observed: {observed}",
        f"Weather Condition: {get_condition_text(weather)} ({weather.condition.description})",
        f"Temperature: {temperature_string(main.temp, unit)}",
        f"Feels Like: {temperature_string(main.feels_like, unit)}",
        f"Min / Max: {temperature_string(main.temp_min, unit)} / {temperature_string(main.temp_max, unit)}",
        f"Humidity: {main.humidity}%",
        f"Pressure: {main.pressure} hPa",
        f"Wind Speed: {wind}",
        f"Cloudiness: {weather.clouds.all}%",
        f"Visibility: {visibility_km} km",
        f"Sunrise: {sunrise}",
        f"Sunset: {sunset}",
    ]


def format_history(history: Sequence[str]) -> List[str]:
    """Search history block; oldest search first."""
    lines = ["Search History:"]
    if not history:
        lines.append("  (none)")
    lines.extend(f"  {city}" for city in history)
    return lines
