# shared fixtures: recorded provider payloads and a client double, so tests never hit the network

import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from cityweather.client import OpenMeteoClient
from cityweather.service import WeatherLookup

DATA = Path(__file__).parent / "data"


def load(name):
    return json.loads((DATA / name).read_text(encoding="utf-8"))


@pytest.fixture
def client():
    # spec keeps the double honest about method names and signatures
    fake = Mock(spec=OpenMeteoClient)
    fake.search_city.return_value = load("geocode_paris.json")["results"]
    fake.current.return_value = load("current_paris.json")
    fake.daily_forecast.return_value = load("forecast_paris.json")
    fake.archive_day.return_value = load("archive_paris.json")
    return fake


@pytest.fixture
def lookup(client):
    return WeatherLookup(client)
