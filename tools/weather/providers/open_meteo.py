"""
Open-Meteo weather with OpenStreetMap Nominatim reverse geocoding.
No API key required.
"""
import logging
from typing import Optional

from tools.weather.errors import DataUnavailableError, NotFoundError
from tools.weather.http_client import get_json
from tools.weather.models import Coordinates, LocationInfo, WeatherObservation, WindSpeed
from tools.weather.providers.base import WeatherProvider
from tools.weather.schemas import GeocodingSearch, NominatimReverse, OpenMeteoForecast, parse_response

logger = logging.getLogger(__name__)

NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"
GEOCODING_SEARCH_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,wind_speed_10m,weather_code"
DEFAULT_WIND_UNIT = "km/h"

UNKNOWN_LOCATION = "Unknown location"
UNKNOWN_COUNTRY = "Unknown country"

NO_DATA = "Weather data not available or invalid API response"


def _key(value):
    return None if value is None else str(value)


class OpenMeteoProvider(WeatherProvider):
    name = "open-meteo"

    def locate_coordinates(self, coordinates: Coordinates) -> LocationInfo:
        payload = get_json(
            NOMINATIM_REVERSE_URL,
            {"lat": coordinates.latitude, "lon": coordinates.longitude, "format": "json"},
            self.settings,
            "nominatim",
        )
        data = parse_response(NominatimReverse, payload, "nominatim")

        address = data.address
        city = None
        country = None
        if address is not None:
            city = address.city or address.town or address.village
            country = address.country

        return LocationInfo(
            display_name=city or UNKNOWN_LOCATION,
            country=country or UNKNOWN_COUNTRY,
            provider_key=_key(data.place_id),
            coordinates=coordinates,
        )

    def locate_country(self, name: str, country_code: Optional[str] = None) -> LocationInfo:
        params = {"name": name, "count": 1, "language": "en", "format": "json"}
        if country_code:
            params["countryCode"] = country_code
        payload = get_json(
            GEOCODING_SEARCH_URL,
            params,
            self.settings,
            "open-meteo geocoding",
        )
        data = parse_response(GeocodingSearch, payload, "open-meteo geocoding")

        if not data.results:
            raise NotFoundError(f"Country not found: {name}")

        first = data.results[0]
        logger.info(f"📍 '{name}' resolved to {first.name} ({first.latitude}, {first.longitude})")
        return LocationInfo(
            display_name=first.name,
            country=first.country or first.name,
            provider_key=_key(first.id),
            coordinates=Coordinates(first.latitude, first.longitude),
        )

    def fetch_conditions(self, location: LocationInfo) -> WeatherObservation:
        if location.coordinates is None:
            raise DataUnavailableError(f"No coordinates known for {location.display_name}")

        payload = get_json(
            FORECAST_URL,
            {
                "latitude": location.coordinates.latitude,
                "longitude": location.coordinates.longitude,
                "current": CURRENT_FIELDS,
            },
            self.settings,
            self.name,
        )
        data = parse_response(
            OpenMeteoForecast, payload, self.name,
            missing=DataUnavailableError, missing_message=NO_DATA,
        )

        current = data.current
        if current is None:
            raise DataUnavailableError(NO_DATA)

        wind = None
        if current.wind_speed_10m is not None:
            unit = DEFAULT_WIND_UNIT
            if data.current_units is not None and data.current_units.wind_speed_10m:
                unit = data.current_units.wind_speed_10m
            wind = WindSpeed(value=current.wind_speed_10m, unit=unit)

        humidity = None
        if current.relative_humidity_2m is not None:
            humidity = int(round(current.relative_humidity_2m))

        return WeatherObservation(
            temperature_celsius=current.temperature_2m,
            condition_code=current.weather_code,
            humidity_percent=humidity,
            wind_speed=wind,
        )
