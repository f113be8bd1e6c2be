# orchestration and business rules: geocode -> fetch -> reshape
# pure parse helpers turn provider payloads into value objects; WeatherLookup wires them to the client
# every provider failure ends up as an ErrorResult, nothing is raised to the caller

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Union
from .client import OpenMeteoClient, WeatherAPIError
from .models import (
    Coordinates,
    DailyWeather,
    ErrorKind,
    ErrorResult,
    ForecastResult,
    HistoricalResult,
    WeatherResult,
)

log = logging.getLogger(__name__)

# transform the first geocoding hit into coordinates and check shape
def parse_coordinates(results: List[Any]) -> Optional[Coordinates]:
    if not results:
        return None
    try:
        first = results[0]
        return Coordinates(latitude=float(first["latitude"]), longitude=float(first["longitude"]))
    except (KeyError, TypeError, ValueError):
        return None

# open-meteo daily shape: data["daily"][field][i], four parallel arrays
def parse_daily(daily: Dict[str, Any]) -> List[DailyWeather]:
    try:
        dates = daily["time"]
        codes = daily["weathercode"]
        tmax = daily["temperature_2m_max"]
        tmin = daily["temperature_2m_min"]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"daily block is missing {exc}") from exc

    columns = (dates, codes, tmax, tmin)
    if not all(isinstance(c, list) for c in columns):
        raise ValueError("daily fields must be arrays")
    lengths = {len(c) for c in columns}
    if len(lengths) != 1:
        raise ValueError(f"daily arrays differ in length: {[len(c) for c in columns]}")

    return [
        DailyWeather(date=d, weather_code=c, temp_max=hi, temp_min=lo)
        for d, c, hi, lo in zip(dates, codes, tmax, tmin)
    ]

class WeatherLookup:
    # the client is injected and lives as long as the lookup does

    def __init__(self, client: Optional[OpenMeteoClient] = None):
        self.client = client or OpenMeteoClient()

    def resolve_coordinates(self, city: str) -> Optional[Coordinates]:
        # network errors, bad payloads and empty results all collapse into None
        try:
            results = self.client.search_city(city)
        except WeatherAPIError as exc:
            log.warning("geocoding failed for %r: %s", city, exc)
            return None
        coords = parse_coordinates(results)
        if coords is None:
            log.info("no geocoding match for %r", city)
        return coords

    def fetch_current(self, city: str, coords: Coordinates) -> Union[WeatherResult, ErrorResult]:
        try:
            data = self.client.current(coords.latitude, coords.longitude)
        except WeatherAPIError as exc:
            log.warning("current weather request failed for %r: %s", city, exc)
            return ErrorResult(ErrorKind.WEATHER_UNAVAILABLE)

        current = data.get("current_weather")
        if not isinstance(current, dict) or not current:
            return ErrorResult(ErrorKind.WEATHER_UNAVAILABLE)
        return WeatherResult(
            city=city,
            coordinates=coords,
            time=current.get("time"),
            temperature=current.get("temperature"),
            weather_code=current.get("weathercode"),
        )

    def fetch_forecast(self, city: str, coords: Coordinates) -> Union[ForecastResult, ErrorResult]:
        try:
            data = self.client.daily_forecast(coords.latitude, coords.longitude)
        except WeatherAPIError as exc:
            log.warning("forecast request failed for %r: %s", city, exc)
            return ErrorResult(ErrorKind.FORECAST_UNAVAILABLE)

        daily = data.get("daily")
        if daily is None:
            return ErrorResult(ErrorKind.FORECAST_UNAVAILABLE)
        try:
            days = parse_daily(daily)
        except ValueError as exc:
            log.warning("malformed forecast for %r: %s", city, exc)
            return ErrorResult(ErrorKind.FORECAST_UNAVAILABLE)
        return ForecastResult(city=city, coordinates=coords, forecast=tuple(days))

    def fetch_historical(self, city: str, coords: Coordinates, date: str) -> Union[HistoricalResult, ErrorResult]:
        try:
            data = self.client.archive_day(coords.latitude, coords.longitude, date)
        except WeatherAPIError as exc:
            log.warning("archive request failed for %r on %s: %s", city, date, exc)
            return ErrorResult(ErrorKind.HISTORICAL_UNAVAILABLE)

        daily = data.get("daily")
        if daily is None:
            return ErrorResult(ErrorKind.HISTORICAL_UNAVAILABLE)
        if isinstance(daily, dict) and daily.get("time") == []:
            return ErrorResult(ErrorKind.NO_DATA_FOR_DATE)
        try:
            days = parse_daily(daily)
        except ValueError as exc:
            log.warning("malformed archive data for %r on %s: %s", city, date, exc)
            return ErrorResult(ErrorKind.HISTORICAL_UNAVAILABLE)
        # start_date == end_date, so the first row is the requested day
        return HistoricalResult(city=city, coordinates=coords, day=days[0])

    def get_today_weather(self, city: str) -> Union[WeatherResult, ErrorResult]:
        coords = self.resolve_coordinates(city)
        if coords is None:
            return ErrorResult(ErrorKind.CITY_NOT_FOUND)
        return self.fetch_current(city, coords)

    def get_7day_forecast(self, city: str) -> Union[ForecastResult, ErrorResult]:
        coords = self.resolve_coordinates(city)
        if coords is None:
            return ErrorResult(ErrorKind.CITY_NOT_FOUND)
        return self.fetch_forecast(city, coords)

    def get_past_weather(self, city: str, date: str) -> Union[HistoricalResult, ErrorResult]:
        coords = self.resolve_coordinates(city)
        if coords is None:
            return ErrorResult(ErrorKind.CITY_NOT_FOUND)
        return self.fetch_historical(city, coords, date)
