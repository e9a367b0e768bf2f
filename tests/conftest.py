import pytest
from requests_mock import Mocker

from tools.weather.config import Settings
from tools.weather.providers import OpenMeteoProvider, OpenWeatherMapProvider


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def owm_settings():
    return Settings(provider="openweathermap", api_key="test-key")


@pytest.fixture
def open_meteo(settings):
    return OpenMeteoProvider(settings)


@pytest.fixture
def owm(owm_settings):
    return OpenWeatherMapProvider(owm_settings)


@pytest.fixture
def london_address():
    return {
        "place_id": 1,
        "display_name": "London, Greater London, England, United Kingdom",
        "address": {
            "city": "London",
            "state": "England",
            "country": "United Kingdom",
            "country_code": "gb",
        },
    }


@pytest.fixture
def london_current():
    return {
        "latitude": 51.5,
        "longitude": -0.12,
        "current_units": {
            "time": "iso8601",
            "temperature_2m": "°C",
            "relative_humidity_2m": "%",
            "wind_speed_10m": "km/h",
            "weather_code": "wmo code",
        },
        "current": {
            "time": "2024-01-01T12:00",
            "interval": 900,
            "temperature_2m": 15.2,
            "relative_humidity_2m": 70,
            "wind_speed_10m": 12.3,
            "weather_code": 3,
        },
    }


@pytest.fixture
def japan_search():
    return {
        "results": [
            {
                "id": 1861060,
                "name": "Japan",
                "latitude": 35.68536,
                "longitude": 139.75309,
                "country": "Japan",
                "country_code": "JP",
            }
        ],
        "generationtime_ms": 0.7,
    }
