"""CLI entry point for city-vitals."""

import argparse
import logging

import city_vitals.io.logging_setup
from city_vitals.app.sources import CountersFileSource, FixedSource
from city_vitals.io.settings import SettingsStore
from city_vitals.tui.app import DEFAULT_FRAME_INTERVAL, CityVitalsApp

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="City vitals dashboard overlay")
    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        help="Settings file path (default: $XDG_CONFIG_HOME/city-vitals/settings.json)",
    )
    parser.add_argument(
        "--counters",
        type=str,
        default=None,
        help="JSON counters file written by the simulation (default: no simulation, all zero)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_FRAME_INTERVAL,
        help="Seconds between dashboard refreshes (default: {})".format(DEFAULT_FRAME_INTERVAL),
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.interval <= 0:
        raise SystemExit("--interval must be positive")

    runtime = city_vitals.io.logging_setup.configure()
    logger.info("Logging to %s", runtime.file_path)

    store = SettingsStore(args.settings)
    source = CountersFileSource(args.counters) if args.counters else FixedSource(available=False)

    app = CityVitalsApp(store, source, frame_interval=args.interval)
    city_vitals.io.logging_setup.set_stream_enabled(False)
    try:
        app.run()
    finally:
        city_vitals.io.logging_setup.set_stream_enabled(True)


if __name__ == "__main__":
    main()
