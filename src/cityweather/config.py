# runtime settings read from the environment
# .env is honored for local runs; in production the variables are injected by the platform

from __future__ import annotations
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from dotenv import load_dotenv

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "cityweather/0.1"

@dataclass(frozen=True)
class Settings:
    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL
    archive_url: str = ARCHIVE_URL
    timeout: float = DEFAULT_TIMEOUT
    # 0 keeps every call a single best-effort attempt
    max_retries: int = 0
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        # urllib3 rejects timeouts <= 0 with a bare ValueError at request time
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ValueError(f"timeout must be a finite number > 0 (got {self.timeout})")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0 (got {self.max_retries})")

def _number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a {cast.__name__} (got {raw!r})") from exc

def load_settings(env: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> Settings:
    # pass an explicit mapping in tests to keep them independent of the real environment
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    return Settings(
        geocoding_url=env.get("CITYWEATHER_GEOCODING_URL") or GEOCODING_URL,
        forecast_url=env.get("CITYWEATHER_FORECAST_URL") or FORECAST_URL,
        archive_url=env.get("CITYWEATHER_ARCHIVE_URL") or ARCHIVE_URL,
        timeout=_number(env, "CITYWEATHER_TIMEOUT", DEFAULT_TIMEOUT, float),
        max_retries=_number(env, "CITYWEATHER_MAX_RETRIES", 0, int),
        user_agent=env.get("CITYWEATHER_USER_AGENT") or DEFAULT_USER_AGENT,
    )
