# value objects for coordinates, the three result shapes and the error value
# to_dict() gives the wire shape callers see (camelCase keys)

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

class ErrorKind(str, Enum):
    # value is the reason string surfaced in the error payload
    CITY_NOT_FOUND = "City not found"
    WEATHER_UNAVAILABLE = "Weather data unavailable"
    FORECAST_UNAVAILABLE = "Forecast data unavailable"
    HISTORICAL_UNAVAILABLE = "Historical data not available"
    NO_DATA_FOR_DATE = "No data for given date"

@dataclass(frozen=True)
class ErrorResult:
    kind: ErrorKind

    @property
    def error(self) -> str:
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error}

class _Located:
    # flat latitude/longitude access, matching the wire shape
    coordinates: Coordinates

    @property
    def latitude(self) -> float:
        return self.coordinates.latitude

    @property
    def longitude(self) -> float:
        return self.coordinates.longitude

@dataclass(frozen=True)
class WeatherResult(_Located):
    city: str
    coordinates: Coordinates
    time: Any
    temperature: Any
    weather_code: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "time": self.time,
            "temperature": self.temperature,
            "weatherCode": self.weather_code,
        }

@dataclass(frozen=True)
class DailyWeather:
    # one row of the provider's parallel daily arrays
    date: Any
    weather_code: Any
    temp_max: Any
    temp_min: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "weatherCode": self.weather_code,
            "tempMax": self.temp_max,
            "tempMin": self.temp_min,
        }

@dataclass(frozen=True)
class ForecastResult(_Located):
    city: str
    coordinates: Coordinates
    forecast: Tuple[DailyWeather, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        days: List[Dict[str, Any]] = [d.to_dict() for d in self.forecast]
        return {
            "city": self.city,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "forecast": days,
        }

@dataclass(frozen=True)
class HistoricalResult(_Located):
    city: str
    coordinates: Coordinates
    day: DailyWeather

    @property
    def date(self):
        return self.day.date

    @property
    def weather_code(self):
        return self.day.weather_code

    @property
    def temp_max(self):
        return self.day.temp_max

    @property
    def temp_min(self):
        return self.day.temp_min

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "city": self.city,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        out.update(self.day.to_dict())
        return out
