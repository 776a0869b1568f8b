"""Weather domain model - the decoded shape of one current-weather response."""
import json
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from typing import Any, Dict, Mapping, Tuple, Union


class DecodeError(ValueError):
    """Raised when a payload does not match the weather schema."""
    pass


def _field(data: Mapping[str, Any], key: str, path: str) -> Any:
    if not isinstance(data, Mapping):
        raise DecodeError(f"{path or 'payload'}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"{path + '.' if path else ''}{key}: missing required field")
    return data[key]


def _int(data: Mapping[str, Any], key: str, path: str = "") -> int:
    value = _field(data, key, path)
    # bool is an int subclass; JSON true/false is never a number here
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{path + '.' if path else ''}{key}: expected integer, got {value!r}")
    return value


def _float(data: Mapping[str, Any], key: str, path: str = "") -> float:
    value = _field(data, key, path)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"{path + '.' if path else ''}{key}: expected number, got {value!r}")
    return float(value)


def _str(data: Mapping[str, Any], key: str, path: str = "") -> str:
    value = _field(data, key, path)
    if not isinstance(value, str):
        raise DecodeError(f"{path + '.' if path else ''}{key}: expected string, got {value!r}")
    return value


def _check(condition: bool, where: str, message: str) -> None:
    if not condition:
        raise DecodeError(f"{where}: {message}")


@dataclass(frozen=True)
class Coord:
    lon: float
    lat: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Coord":
        coord = cls(lon=_float(data, "lon", "coord"), lat=_float(data, "lat", "coord"))
        _check(-180.0 <= coord.lon <= 180.0, "coord.lon", f"{coord.lon} out of range [-180, 180]")
        _check(-90.0 <= coord.lat <= 90.0, "coord.lat", f"{coord.lat} out of range [-90, 90]")
        return coord


@dataclass(frozen=True)
class Condition:
    """One entry of the ``weather`` array, e.g. Clouds / broken clouds."""
    id: int
    main: str
    description: str
    icon: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str) -> "Condition":
        return cls(
            id=_int(data, "id", path),
            main=_str(data, "main", path),
            description=_str(data, "description", path),
            icon=_str(data, "icon", path),
        )


@dataclass(frozen=True)
class MainReadings:
    """Temperatures are in Kelvin, the API's native unit."""
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MainReadings":
        readings = cls(
            temp=_float(data, "temp", "main"),
            feels_like=_float(data, "feels_like", "main"),
            temp_min=_float(data, "temp_min", "main"),
            temp_max=_float(data, "temp_max", "main"),
            pressure=_int(data, "pressure", "main"),
            humidity=_int(data, "humidity", "main"),
        )
        _check(0 <= readings.humidity <= 100, "main.humidity", f"{readings.humidity} out of range [0, 100]")
        return readings


@dataclass(frozen=True)
class Wind:
    speed: float  # m/s
    deg: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Wind":
        wind = cls(speed=_float(data, "speed", "wind"), deg=_int(data, "deg", "wind"))
        _check(wind.speed >= 0, "wind.speed", f"{wind.speed} is negative")
        _check(0 <= wind.deg < 360, "wind.deg", f"{wind.deg} out of range [0, 360)")
        return wind


@dataclass(frozen=True)
class Clouds:
    all: int  # percentage

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Clouds":
        clouds = cls(all=_int(data, "all", "clouds"))
        _check(0 <= clouds.all <= 100, "clouds.all", f"{clouds.all} out of range [0, 100]")
        return clouds


@dataclass(frozen=True)
class SysInfo:
    type: int
    id: int
    country: str
    sunrise: int
    sunset: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SysInfo":
        info = cls(
            type=_int(data, "type", "sys"),
            id=_int(data, "id", "sys"),
            country=_str(data, "country", "sys"),
            sunrise=_int(data, "sunrise", "sys"),
            sunset=_int(data, "sunset", "sys"),
        )
        _check(len(info.country) == 2, "sys.country", f"{info.country!r} is not a 2-letter code")
        return info


@dataclass(frozen=True)
class WeatherData:
    """
    Decoded OpenWeather current-weather response.

    Instances only come out of ``from_dict``/``from_json``, which either
    build the whole object or raise DecodeError. Keys outside the schema
    (``rain``, ``snow``, ...) are ignored.
    """
    coord: Coord
    weather: Tuple[Condition, ...]
    base: str
    main: MainReadings
    visibility: int  # meters
    wind: Wind
    clouds: Clouds
    dt: int  # UNIX timestamp (UTC)
    sys: SysInfo
    timezone: int  # offset from UTC in seconds
    id: int
    name: str
    cod: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeatherData":
        conditions = _field(data, "weather", "")
        if not isinstance(conditions, list):
            raise DecodeError(f"weather: expected array, got {conditions!r}")
        _check(len(conditions) > 0, "weather", "array is empty")

        visibility = _int(data, "visibility")
        _check(visibility >= 0, "visibility", f"{visibility} is negative")

        return cls(
            coord=Coord.from_dict(_field(data, "coord", "")),
            weather=tuple(
                Condition.from_dict(entry, f"weather[{index}]")
                for index, entry in enumerate(conditions)
            ),
            base=_str(data, "base"),
            main=MainReadings.from_dict(_field(data, "main", "")),
            visibility=visibility,
            wind=Wind.from_dict(_field(data, "wind", "")),
            clouds=Clouds.from_dict(_field(data, "clouds", "")),
            dt=_int(data, "dt"),
            sys=SysInfo.from_dict(_field(data, "sys", "")),
            timezone=_int(data, "timezone"),
            id=_int(data, "id"),
            name=_str(data, "name"),
            cod=_int(data, "cod"),
        )

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "WeatherData":
        try:
            payload = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as e:
            raise DecodeError(f"invalid JSON: {e}") from e
        return cls.from_dict(payload)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["weather"] = list(data["weather"])
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @property
    def condition(self) -> Condition:
        """The primary condition (first entry of ``weather``)."""
        return self.weather[0]

    def local_time(self, timestamp: int) -> datetime:
        """Convert a UNIX timestamp to the city's own UTC offset."""
        return datetime.fromtimestamp(timestamp, tz=dt_timezone(timedelta(seconds=self.timezone)))

    def observed_at(self) -> datetime:
        return self.local_time(self.dt)
