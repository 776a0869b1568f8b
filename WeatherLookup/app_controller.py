"""Search orchestration - ties the weather provider to in-memory state and persistence."""
import logging
import threading
from concurrent.futures import Executor, Future
from enum import Enum
from typing import List, Optional

from persistence import PersistenceStore
from units import TemperatureUnit
from weather_data import WeatherData
from weather_provider import EmptyInputError, WeatherProviderBase, WeatherProviderError


class SearchState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AppController:
    """
    Holds what the user sees (city input, current weather, error, history)
    and runs the search pipeline.

    State is seeded once from the store at construction. After each
    successful search the model and history are written back; a failed
    search leaves the last good result on screen and only sets ``error``.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        store: PersistenceStore,
        unit: TemperatureUnit = TemperatureUnit.CELSIUS
    ):
        """
        Initialize the controller.

        Args:
            provider: Weather provider used for every search
            store: Where the last result and history are persisted
            unit: Initial display unit
        """
        self.provider = provider
        self.store = store
        self.unit = unit

        self.city: str = ""
        self.error: Optional[str] = None
        self.state = SearchState.IDLE
        self.current: Optional[WeatherData] = store.load_last_weather()
        self.history: List[str] = store.load_history()

        # every state change goes through this lock; searches may resolve on worker threads
        self._lock = threading.Lock()

        if self.current is not None:
            logging.info(f"Restored last weather for {self.current.name}")
        logging.debug(f"Restored {len(self.history)} history entries")

    def set_unit(self, unit: TemperatureUnit) -> None:
        self.unit = unit

    def _validate(self, city: Optional[str]) -> Optional[str]:
        """Record the input and move to REQUESTING, or set the empty-input error."""
        with self._lock:
            if city is not None:
                self.city = city
            self.state = SearchState.VALIDATING
            query = self.city.strip()
            if not query:
                logging.info("Search rejected: empty city")
                self.error = str(EmptyInputError())
                self.state = SearchState.IDLE
                return None
            self.state = SearchState.REQUESTING
            return query

    def search(self, city: Optional[str] = None) -> Optional[WeatherData]:
        """
        Run one search synchronously.

        Args:
            city: New city input; if None the current ``self.city`` is used

        Returns:
            The new weather on success, None on any failure (see ``error``)
        """
        query = self._validate(city)
        if query is None:
            return None

        try:
            weather = self.provider.get_current(query)
        except WeatherProviderError as e:
            with self._lock:
                self._apply_failure(query, e)
            return None
        with self._lock:
            self._apply_success(query, weather)
        return weather

    def start_search(self, city: Optional[str], executor: Executor) -> Optional[Future]:
        """
        Validate on the calling thread, then fetch on ``executor``.

        The returned future resolves to the weather (or None on failure) after
        the result has been applied. Overlapping searches are not coalesced:
        whichever resolves last determines the visible state. If the executor
        cancels the fetch, the returned future is cancelled too.
        """
        query = self._validate(city)
        if query is None:
            return None

        outcome: Future = Future()

        def _on_done(fetch: Future) -> None:
            with self._lock:
                if fetch.cancelled():
                    logging.info(f"Search for {query!r} was cancelled")
                    self.state = SearchState.IDLE
                    outcome.cancel()
                    return
                exc = fetch.exception()
                if exc is None:
                    self._apply_success(query, fetch.result())
                    outcome.set_result(fetch.result())
                elif isinstance(exc, WeatherProviderError):
                    self._apply_failure(query, exc)
                    outcome.set_result(None)
                else:
                    logging.error(f"Unexpected error while fetching {query!r}: {exc}")
                    self.state = SearchState.IDLE
                    outcome.set_exception(exc)

        executor.submit(self.provider.get_current, query).add_done_callback(_on_done)
        return outcome

    def _apply_success(self, query: str, weather: WeatherData) -> None:
        self.state = SearchState.SUCCEEDED
        self.error = None
        self.current = weather
        if query not in self.history:
            self.history.append(query)
        logging.info(f"Search for {query!r} succeeded: {weather.name}, {weather.condition.main}")
        self._persist(weather)
        self.state = SearchState.IDLE

    def _apply_failure(self, query: str, error: WeatherProviderError) -> None:
        self.state = SearchState.FAILED
        self.error = str(error)
        logging.warning(f"Search for {query!r} failed: {error}")
        self.state = SearchState.IDLE

    def _persist(self, weather: WeatherData) -> None:
        try:
            self.store.save_last_weather(weather)
            self.store.save_history(self.history)
        except OSError as e:
            logging.error(f"Failed to persist weather state: {e}")
