"""Unit conversion and display formatting - pure functions for testability."""
from enum import Enum

KELVIN_OFFSET = 273.15
KMH_PER_MPS = 3.6
MPH_PER_MPS = 2.2369362920544


class TemperatureUnit(Enum):
    """Display scale for temperatures (the API always reports Kelvin)."""
    CELSIUS = "Celsius"
    FAHRENHEIT = "Fahrenheit"

    @property
    def symbol(self) -> str:
        return "°C" if self is TemperatureUnit.CELSIUS else "°F"

    def convert(self, kelvin: float) -> float:
        celsius = kelvin - KELVIN_OFFSET
        if self is TemperatureUnit.CELSIUS:
            return celsius
        return celsius * 9 / 5 + 32

    @classmethod
    def parse(cls, text: str) -> "TemperatureUnit":
        """Accept 'Celsius', 'celsius', 'c', 'F', ..."""
        key = text.strip().lower()
        for unit in cls:
            if key in (unit.value.lower(), unit.value[0].lower()):
                return unit
        raise ValueError(f"Unknown temperature unit: {text!r}")


class MeasurementSystem(Enum):
    """Picks the natural speed unit: km/h for metric, mph for imperial."""
    METRIC = "metric"
    IMPERIAL = "imperial"


def format_decimal(value: float, max_fraction_digits: int = 3) -> str:
    """
    Format a number in decimal style: thousands grouping, at most
    ``max_fraction_digits`` fraction digits, trailing zeros dropped.

    NaN and infinities are rendered as-is; nothing is guarded.
    """
    if value != value or value in (float("inf"), float("-inf")):
        return str(value)
    # adding 0.0 folds -0.0 into 0.0 after rounding
    rounded = round(value, max_fraction_digits) + 0.0
    text = f"{rounded:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def temperature_string(kelvin: float, unit: TemperatureUnit) -> str:
    """Convert a Kelvin reading to ``unit`` and format it, e.g. ``"21.85°C"``."""
    return f"{format_decimal(unit.convert(kelvin))}{unit.symbol}"


def speed_string(meters_per_second: float, system: MeasurementSystem = MeasurementSystem.METRIC) -> str:
    """Format a wind speed given in m/s, e.g. ``"11.268 km/h"`` or ``"7.002 mph"``."""
    if system is MeasurementSystem.IMPERIAL:
        return f"{format_decimal(meters_per_second * MPH_PER_MPS)} mph"
    return f"{format_decimal(meters_per_second * KMH_PER_MPS)} km/h"
