import requests

from tools.weather.context import RequestContext
from tools.weather.get_weather import get_weather
from tools.weather.providers.open_meteo import FORECAST_URL, GEOCODING_SEARCH_URL, NOMINATIM_REVERSE_URL


def test_london_example(requests_mock, open_meteo, london_address, london_current):
    requests_mock.get(NOMINATIM_REVERSE_URL, json=london_address)
    requests_mock.get(FORECAST_URL, json=london_current)

    result = get_weather(latitude=51.5074, longitude=-0.1278, unit="celsius", provider=open_meteo)

    assert result.is_error is False
    assert "Weather in London, United Kingdom" in result.text
    assert "Temperature: 15.2°C" in result.text
    assert "Humidity: 70%" in result.text
    assert "Wind Speed: 12.3 km/h" in result.text
    assert "Conditions: Overcast" in result.text
    assert requests_mock.call_count == 2


def test_defaults_to_fahrenheit(requests_mock, open_meteo, london_address, london_current):
    requests_mock.get(NOMINATIM_REVERSE_URL, json=london_address)
    requests_mock.get(FORECAST_URL, json=london_current)

    result = get_weather(latitude=51.5074, longitude=-0.1278, provider=open_meteo)

    assert "Temperature: 59.4°F" in result.text


def test_country_mode(requests_mock, open_meteo, japan_search, london_current):
    requests_mock.get(GEOCODING_SEARCH_URL, json=japan_search)
    forecast = requests_mock.get(FORECAST_URL, json=london_current)

    result = get_weather(country="Japan", unit="celsius", provider=open_meteo)

    assert result.is_error is False
    assert result.text.startswith("Weather in Japan, Japan:")
    assert forecast.last_request.qs["latitude"] == ["35.68536"]


def test_edge_country_code_header(requests_mock, open_meteo, london_current):
    search = requests_mock.get(GEOCODING_SEARCH_URL, json={
        "results": [{
            "id": 2635167,
            "name": "United Kingdom",
            "latitude": 54.75844,
            "longitude": -2.69531,
            "country": "United Kingdom",
            "country_code": "GB",
        }],
    })
    requests_mock.get(FORECAST_URL, json=london_current)

    result = get_weather(context=RequestContext.from_headers({"cf-ipcountry": "GB"}), unit="celsius", provider=open_meteo)

    assert result.is_error is False
    assert result.text.startswith("Weather in United Kingdom, United Kingdom:")
    assert search.last_request.qs["name"] == ["united kingdom"]
    assert search.last_request.qs["countrycode"] == ["gb"]


def test_missing_coordinates_makes_no_calls(requests_mock, open_meteo):
    result = get_weather(provider=open_meteo, context=RequestContext())

    assert result.is_error is True
    assert "latitude" in result.text
    assert requests_mock.call_count == 0


def test_missing_longitude_makes_no_calls(requests_mock, open_meteo):
    result = get_weather(latitude=12.0, provider=open_meteo)

    assert result.is_error is True
    assert "longitude" in result.text
    assert requests_mock.call_count == 0


def test_unknown_country_never_calls_weather(requests_mock, open_meteo):
    requests_mock.get(GEOCODING_SEARCH_URL, json={})
    forecast = requests_mock.get(FORECAST_URL, json={})

    result = get_weather(country="Atlantis", provider=open_meteo)

    assert result.is_error is True
    assert "not found" in result.text
    assert forecast.called is False


def test_ambient_context_supplies_location(requests_mock, open_meteo, london_address, london_current):
    requests_mock.get(NOMINATIM_REVERSE_URL, json=london_address)
    requests_mock.get(FORECAST_URL, json=london_current)

    result = get_weather(context=RequestContext(latitude=51.5, longitude=-0.12), provider=open_meteo)

    assert result.is_error is False
    assert requests_mock.request_history[0].qs["lat"] == ["51.5"]


def test_schema_error_becomes_tool_error(requests_mock, open_meteo):
    requests_mock.get(NOMINATIM_REVERSE_URL, json={"address": {"country": ["UK"]}})
    forecast = requests_mock.get(FORECAST_URL, json={})

    result = get_weather(latitude=51.5, longitude=-0.12, provider=open_meteo)

    assert result.is_error is True
    assert "address.country" in result.text
    assert forecast.called is False


def test_missing_weather_data(requests_mock, open_meteo, london_address):
    requests_mock.get(NOMINATIM_REVERSE_URL, json=london_address)
    requests_mock.get(FORECAST_URL, json={"reason": "nothing"})

    result = get_weather(latitude=51.5, longitude=-0.12, provider=open_meteo)

    assert result.is_error is True
    assert result.text == "Weather data not available or invalid API response"


def test_http_error_message_is_passed_through(requests_mock, open_meteo, london_address):
    requests_mock.get(NOMINATIM_REVERSE_URL, json=london_address)
    requests_mock.get(FORECAST_URL, status_code=500)

    result = get_weather(latitude=51.5, longitude=-0.12, provider=open_meteo)

    assert result.is_error is True
    assert "500" in result.text


def test_transport_error_message(requests_mock, open_meteo):
    requests_mock.get(NOMINATIM_REVERSE_URL, exc=requests.exceptions.ConnectTimeout("connect timed out"))

    result = get_weather(latitude=51.5, longitude=-0.12, provider=open_meteo)

    assert result.is_error is True
    assert result.text == "connect timed out"


def test_unexpected_failure_is_unknown_error(open_meteo, monkeypatch):
    class Weird(Exception):
        pass

    def explode(coordinates):
        raise Weird(123)

    monkeypatch.setattr(open_meteo, "locate_coordinates", explode)

    result = get_weather(latitude=1, longitude=1, provider=open_meteo)

    assert result.is_error is True
    assert result.text == "Unknown Error"


def test_missing_api_key_is_reported(requests_mock, monkeypatch):
    monkeypatch.setenv("WEATHER_PROVIDER", "openweathermap")
    monkeypatch.delenv("WEATHER_API_KEY", raising=False)

    result = get_weather(latitude=1, longitude=1)

    assert result.is_error is True
    assert "WEATHER_API_KEY" in result.text
    assert requests_mock.call_count == 0
