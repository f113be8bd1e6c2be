# OOP boundary for external i/o against the Open-Meteo APIs
# all http, urls, timeouts and retries live here, so the service layer only sees dicts
# use a thread-local session so a host dispatching tool calls in parallel never shares one;
# close() releases the sessions of every thread

from __future__ import annotations
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from .config import Settings, load_settings

log = logging.getLogger(__name__)

# daily fields requested from both the forecast and the archive endpoints
DAILY_FIELDS = ("weathercode", "temperature_2m_max", "temperature_2m_min")
CURRENT_FIELDS = ("temperature_2m", "weathercode")

class WeatherAPIError(RuntimeError):
    # single error type used to propagate clear messages from this layer
    pass

def _coord(value: float) -> str:
    # provider only needs 4 decimals (~11 m)
    return f"{value:.4f}"

class OpenMeteoClient:
    # encapsulates provider details like base URLs, query params, timeouts and retries

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()
        self.timeout = self.settings.timeout
        self._local = threading.local()
        # every session handed out on any thread, so close() can release them all
        self._sessions: List[requests.Session] = []
        self._lock = threading.Lock()
        self._retry = Retry(
            total=self.settings.max_retries,
            backoff_factor=0.5,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET",),
            raise_on_status=False,
        )

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({"User-Agent": self.settings.user_agent})
        adapter = HTTPAdapter(max_retries=self._retry)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def _session(self) -> requests.Session:
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._build_session()
            self._local.session = sess
            with self._lock:
                self._sessions.append(sess)
        return sess

    def close(self) -> None:
        with self._lock:
            sessions, self._sessions = self._sessions, []
            # fresh thread-local so no thread keeps using a closed session
            self._local = threading.local()
        for sess in sessions:
            sess.close()

    def __enter__(self) -> "OpenMeteoClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_json(self, url: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        # one GET, returning the decoded JSON object or raising WeatherAPIError
        try:
            resp = self._session().get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise WeatherAPIError(f"Request error for {url}: {exc}") from exc

        if resp.status_code >= 400:
            snippet = (resp.text or "")[:300]
            raise WeatherAPIError(f"HTTP {resp.status_code} for {url}. Body: {snippet}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise WeatherAPIError(f"Invalid JSON from {url}: {exc}") from exc

        if not isinstance(data, dict):
            raise WeatherAPIError(f"Unexpected API shape from {url}: expected an object")
        log.debug("GET %s -> %s", url, sorted(data))
        return data

    def search_city(self, name: str) -> List[Any]:
        # requests exactly one english match; returns the raw "results" list (possibly empty)
        params = {"name": name, "language": "en", "count": 1}
        data = self.get_json(self.settings.geocoding_url, params)
        results = data.get("results")
        if results is None:
            return []
        if not isinstance(results, list):
            raise WeatherAPIError("Unexpected API shape: results is not a list")
        return results

    def current(self, latitude: float, longitude: float) -> Dict[str, Any]:
        params = {
            "latitude": _coord(latitude),
            "longitude": _coord(longitude),
            "current": ",".join(CURRENT_FIELDS),
            # the flat current_weather block is what the service layer reads
            "current_weather": "true",
            "timezone": "UTC",
        }
        return self.get_json(self.settings.forecast_url, params)

    def daily_forecast(self, latitude: float, longitude: float) -> Dict[str, Any]:
        params = {
            "latitude": _coord(latitude),
            "longitude": _coord(longitude),
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "UTC",
        }
        return self.get_json(self.settings.forecast_url, params)

    def archive_day(self, latitude: float, longitude: float, date: str) -> Dict[str, Any]:
        # date goes through as given (YYYY-MM-DD expected, not validated here)
        params = {
            "latitude": _coord(latitude),
            "longitude": _coord(longitude),
            "start_date": date,
            "end_date": date,
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "UTC",
        }
        return self.get_json(self.settings.archive_url, params)
