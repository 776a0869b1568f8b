"""Local state persistence - last successful weather result and search history."""
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from weather_data import DecodeError, WeatherData

LAST_WEATHER_KEY = "WeatherData"
HISTORY_KEY = "SearchHistory"


class PersistenceStore(ABC):
    """
    Key-value store holding the two pieces of state that survive restarts.

    Subclasses only provide raw ``_read``/``_write`` of JSON-compatible
    values. Reads never raise: anything missing or malformed comes back as
    "not present". Writes replace the stored value wholesale.
    """

    @abstractmethod
    def _read(self, key: str) -> Any:
        """Return the raw stored value for ``key`` or None."""
        pass

    @abstractmethod
    def _write(self, key: str, value: Any) -> None:
        """Replace the stored value for ``key``."""
        pass

    def load_last_weather(self) -> Optional[WeatherData]:
        raw = self._read(LAST_WEATHER_KEY)
        if raw is None:
            return None
        try:
            if isinstance(raw, str):
                return WeatherData.from_json(raw)
            return WeatherData.from_dict(raw)
        except DecodeError as e:
            logging.warning(f"Ignoring corrupt stored weather: {e}")
            return None

    def save_last_weather(self, weather: WeatherData) -> None:
        self._write(LAST_WEATHER_KEY, weather.to_dict())

    def load_history(self) -> List[str]:
        raw = self._read(HISTORY_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list) or not all(isinstance(city, str) for city in raw):
            logging.warning(f"Ignoring corrupt stored search history: {str(raw)[:200]}")
            return []
        return list(raw)

    def save_history(self, history: Sequence[str]) -> None:
        self._write(HISTORY_KEY, list(history))


class MemoryStore(PersistenceStore):
    """Process-local store; nothing survives a restart."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def _read(self, key: str) -> Any:
        return self._data.get(key)

    def _write(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileStore(PersistenceStore):
    """
    Store backed by a single JSON document on disk.

    Every write rewrites the whole document through a temporary file and
    ``os.replace``, so a crash mid-write leaves the previous file intact.
    """

    def __init__(self, path: str):
        self.path = os.path.abspath(os.path.expanduser(path))

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError, RecursionError) as e:
            logging.warning(f"Could not read state file {self.path}: {e}")
            return {}
        if not isinstance(document, dict):
            logging.warning(f"State file {self.path} is not a JSON object, ignoring it")
            return {}
        return document

    def _read(self, key: str) -> Any:
        return self._load().get(key)

    def _write(self, key: str, value: Any) -> None:
        document = self._load()
        document[key] = value

        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".weather-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
        logging.debug(f"Wrote {key} to {self.path}")
