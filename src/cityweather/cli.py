# connects command line input (city, date) to the lookup service and prints the result as json

from __future__ import annotations
import argparse
import json
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional
from .client import OpenMeteoClient
from .models import ErrorResult
from .service import WeatherLookup

def _version() -> str:
    try:
        return version("cityweather")
    except PackageNotFoundError:
        return "unknown"

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cityweather",
        description="Current weather, 7-day forecast and past weather for a city (Open-Meteo)",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    today = sub.add_parser("today", help="Current weather for a city")
    today.add_argument("city")

    forecast = sub.add_parser("forecast", help="7-day forecast for a city")
    forecast.add_argument("city")

    past = sub.add_parser("past", help="Weather for a past day (YYYY-MM-DD)")
    past.add_argument("city")
    past.add_argument("date")
    return parser

def run(lookup: WeatherLookup, args: argparse.Namespace):
    if args.command == "today":
        return lookup.get_today_weather(args.city)
    if args.command == "forecast":
        return lookup.get_7day_forecast(args.city)
    return lookup.get_past_weather(args.city, args.date)

def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    with OpenMeteoClient() as client:
        result = run(WeatherLookup(client), args)

    print(json.dumps(result.to_dict(), indent=2))
    # error payloads still go to stdout so callers can parse them, only the exit code differs
    return 1 if isinstance(result, ErrorResult) else 0

if __name__ == "__main__":
    sys.exit(main())
