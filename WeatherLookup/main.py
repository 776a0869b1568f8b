"""Terminal front end for the weather lookup."""
import argparse
import logging
import os
import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional, TextIO

from dotenv import load_dotenv

from app_controller import AppController
from layout import format_details, format_history, format_summary
from openweather_provider import OpenWeatherProvider
from persistence import JsonFileStore, MemoryStore, PersistenceStore
from units import MeasurementSystem, TemperatureUnit

DEFAULT_STATE_FILE = os.path.join("~", ".weather-lookup.json")


@dataclass
class Config:
    api_key: str
    base_url: str = OpenWeatherProvider.BASE_URL
    timeout: Optional[float] = None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Current weather lookup by city")
    parser.add_argument("cities", nargs="*", help="Cities to look up; omit for an interactive prompt")
    parser.add_argument("--unit", type=TemperatureUnit.parse, default=TemperatureUnit.CELSIUS,
                        help="Celsius or Fahrenheit")
    parser.add_argument("--system", choices=[s.value for s in MeasurementSystem],
                        default=MeasurementSystem.METRIC.value, help="Wind speed units")
    parser.add_argument("--details", action="store_true", help="Show the details view after each search")
    parser.add_argument("--history", action="store_true", help="Print search history and exit")
    parser.add_argument("--state-file", default=None, help="Overrides WEATHER_STATE_FILE")
    parser.add_argument("--no-persist", action="store_true", help="Keep state in memory only")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def load_config() -> Config:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    if not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")

    timeout_text = os.getenv("WEATHER_TIMEOUT")
    timeout = None
    if timeout_text:
        try:
            timeout = float(timeout_text)
        except ValueError as exc:
            raise SystemExit(f"Invalid WEATHER_TIMEOUT: {exc}") from exc

    config = Config(
        api_key=api_key,
        base_url=os.getenv("WEATHER_BASE_URL", OpenWeatherProvider.BASE_URL),
        timeout=timeout,
    )
    logging.info("Configuration loaded: base_url=%s", config.base_url)
    return config


def resolve_state_file(args: argparse.Namespace) -> str:
    """--state-file, then WEATHER_STATE_FILE, then the default; no API key needed."""
    load_dotenv()
    return args.state_file or os.getenv("WEATHER_STATE_FILE", DEFAULT_STATE_FILE)


def build_store(state_file: str, args: argparse.Namespace) -> PersistenceStore:
    if args.no_persist:
        return MemoryStore()
    return JsonFileStore(state_file)


def build_controller(config: Config, store: PersistenceStore, unit: TemperatureUnit) -> AppController:
    provider = OpenWeatherProvider(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
    )
    controller = AppController(provider=provider, store=store, unit=unit)
    logging.info("Controller ready (%s history entries)", len(controller.history))
    return controller


def render(controller: AppController, system: MeasurementSystem, details: bool, out: TextIO) -> None:
    if controller.error:
        print(controller.error, file=out)
    weather = controller.current
    if weather is not None:
        lines = format_details(weather, controller.unit, system) if details else format_summary(
            weather, controller.unit, system
        )
        print("\n".join(lines), file=out)


def prompt_loop(
    controller: AppController,
    system: MeasurementSystem,
    details: bool,
    lines: Iterable[str],
    out: TextIO
) -> None:
    """
    Read one command per line until a blank line or EOF.

    A line is a city to search, or one of ``:c``/``:f`` (switch unit),
    ``:details`` (show the details view) and ``:history``.
    """
    for raw in lines:
        line = raw.strip()
        if not line:
            break
        if line in (":c", ":f"):
            controller.set_unit(TemperatureUnit.parse(line[1:]))
            render(controller, system, details, out)
        elif line == ":details":
            if controller.current is None:
                print("No weather to show yet.", file=out)
            else:
                print("\n".join(format_details(controller.current, controller.unit, system)), file=out)
        elif line == ":history":
            print("\n".join(format_history(controller.history)), file=out)
        else:
            controller.search(line)
            render(controller, system, details, out)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    system = MeasurementSystem(args.system)
    store = build_store(resolve_state_file(args), args)

    if args.history:
        print("\n".join(format_history(store.load_history())))
        return 0

    config = load_config()
    controller = build_controller(config, store, args.unit)

    if args.cities:
        for city in args.cities:
            controller.search(city)
            render(controller, system, args.details, sys.stdout)
        return 1 if controller.error else 0

    render(controller, system, args.details, sys.stdout)
    try:
        prompt_loop(controller, system, args.details, sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        logging.info("Interrupted, exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
