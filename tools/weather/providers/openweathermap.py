"""
OpenWeatherMap geocoding + current weather.
Requires WEATHER_API_KEY; it is passed through as the `appid` query parameter.
"""
import logging
from typing import Optional

from tools.weather.config import Settings
from tools.weather.errors import DataUnavailableError, NotFoundError, ValidationError
from tools.weather.http_client import get_json
from tools.weather.models import Coordinates, LocationInfo, WeatherObservation, WindSpeed
from tools.weather.providers.base import WeatherProvider
from tools.weather.providers.open_meteo import NO_DATA, UNKNOWN_COUNTRY, UNKNOWN_LOCATION
from tools.weather.schemas import OWM_GEO_LIST, OwmCurrentWeather, parse_response
from tools.weather.units import ms_to_kmh

logger = logging.getLogger(__name__)

GEO_REVERSE_URL = "https://api.openweathermap.org/geo/1.0/reverse"
GEO_DIRECT_URL = "https://api.openweathermap.org/geo/1.0/direct"
CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"


class OpenWeatherMapProvider(WeatherProvider):
    name = "openweathermap"

    def __init__(self, settings: Settings):
        if not settings.api_key:
            raise ValidationError("WEATHER_API_KEY is not set. The 'openweathermap' provider requires an API key.")
        super().__init__(settings)

    def _get(self, url: str, params: dict):
        return get_json(url, {**params, "appid": self.settings.api_key}, self.settings, self.name)

    def locate_coordinates(self, coordinates: Coordinates) -> LocationInfo:
        payload = self._get(GEO_REVERSE_URL, {
            "lat": coordinates.latitude,
            "lon": coordinates.longitude,
            "limit": 1,
        })
        entries = parse_response(OWM_GEO_LIST, payload, self.name)

        if not entries:
            return LocationInfo(UNKNOWN_LOCATION, UNKNOWN_COUNTRY, coordinates=coordinates)

        first = entries[0]
        return LocationInfo(
            display_name=first.name,
            country=first.country or UNKNOWN_COUNTRY,
            coordinates=coordinates,
        )

    def locate_country(self, name: str, country_code: Optional[str] = None) -> LocationInfo:
        query = f"{name},{country_code}" if country_code else name
        payload = self._get(GEO_DIRECT_URL, {"q": query, "limit": 1})
        entries = parse_response(OWM_GEO_LIST, payload, self.name)

        if not entries:
            raise NotFoundError(f"Country not found: {name}")

        first = entries[0]
        logger.info(f"📍 '{name}' resolved to {first.name} ({first.lat}, {first.lon})")
        return LocationInfo(
            display_name=first.name,
            country=first.country or first.name,
            coordinates=Coordinates(first.lat, first.lon),
        )

    def fetch_conditions(self, location: LocationInfo) -> WeatherObservation:
        if location.coordinates is None:
            raise DataUnavailableError(f"No coordinates known for {location.display_name}")

        payload = self._get(CURRENT_URL, {
            "lat": location.coordinates.latitude,
            "lon": location.coordinates.longitude,
            "units": "metric",
        })
        data = parse_response(
            OwmCurrentWeather, payload, self.name,
            missing=DataUnavailableError, missing_message=NO_DATA,
        )

        if data.main is None:
            raise DataUnavailableError(NO_DATA)

        humidity = None
        if data.main.humidity is not None:
            humidity = int(round(data.main.humidity))

        wind = None
        if data.wind is not None and data.wind.speed is not None:
            wind = WindSpeed(value=round(ms_to_kmh(data.wind.speed), 1), unit="km/h")

        condition_text = None
        if data.weather:
            condition_text = data.weather[0].description.capitalize() or None

        return WeatherObservation(
            temperature_celsius=data.main.temp,
            condition_text=condition_text,
            humidity_percent=humidity,
            wind_speed=wind,
        )
