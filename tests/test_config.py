# settings come from an explicit mapping here so the real environment and .env never leak in

import pytest

from cityweather.config import ARCHIVE_URL, DEFAULT_TIMEOUT, Settings, load_settings


def test_defaults_from_empty_env():
    assert load_settings(env={}) == Settings()


def test_overrides():
    s = load_settings(env={
        "CITYWEATHER_FORECAST_URL": "http://localhost:8080/v1/forecast",
        "CITYWEATHER_TIMEOUT": "2.5",
        "CITYWEATHER_MAX_RETRIES": "3",
        "CITYWEATHER_USER_AGENT": "ops-probe/2",
    })
    assert s.forecast_url == "http://localhost:8080/v1/forecast"
    assert s.archive_url == ARCHIVE_URL
    assert s.timeout == 2.5
    assert s.max_retries == 3
    assert s.user_agent == "ops-probe/2"


def test_blank_numbers_fall_back():
    s = load_settings(env={"CITYWEATHER_TIMEOUT": " ", "CITYWEATHER_MAX_RETRIES": ""})
    assert s.timeout == DEFAULT_TIMEOUT
    assert s.max_retries == 0


@pytest.mark.parametrize("env", [
    {"CITYWEATHER_TIMEOUT": "soon"},
    {"CITYWEATHER_MAX_RETRIES": "1.5"},
    {"CITYWEATHER_MAX_RETRIES": "-1"},
    {"CITYWEATHER_TIMEOUT": "0"},
    {"CITYWEATHER_TIMEOUT": "-5"},
    {"CITYWEATHER_TIMEOUT": "nan"},
    {"CITYWEATHER_TIMEOUT": "inf"},
])
def test_bad_numbers_raise(env):
    with pytest.raises(ValueError):
        load_settings(env=env)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CITYWEATHER_GEOCODING_URL", "http://geo.test/v1/search")
    s = load_settings(dotenv=False)
    assert s.geocoding_url == "http://geo.test/v1/search"


@pytest.mark.parametrize("kwargs", [{"timeout": 0}, {"timeout": float("nan")}, {"max_retries": -2}])
def test_settings_reject_bad_values_directly(kwargs):
    # constructing Settings by hand gets the same checks as the environment path
    with pytest.raises(ValueError):
        Settings(**kwargs)
