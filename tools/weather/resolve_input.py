from typing import Optional

import pycountry

from tools.weather.context import RequestContext
from tools.weather.errors import ValidationError
from tools.weather.models import Coordinates, WeatherQuery
from tools.weather.units import DEFAULT_UNIT, UNITS


def _coerce(name: str, value) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {name}: expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}: expected a number, got {value!r}")


def _normalize_unit(unit: Optional[str]) -> str:
    if unit is None or (isinstance(unit, str) and not unit.strip()):
        return DEFAULT_UNIT
    normalized = str(unit).strip().lower()
    if normalized not in UNITS:
        raise ValidationError(f"Invalid unit '{unit}'. Expected one of: {', '.join(UNITS)}")
    return normalized


def _normalize_country(country: Optional[str]) -> Optional[str]:
    if country is None:
        return None
    return str(country).strip() or None


def _country_query(unit: str, country: str) -> WeatherQuery:
    """
    Country mode query. ISO alpha-2 codes ("GB", as sent in edge
    geolocation headers) are expanded to the country name, and the code
    is kept so providers can filter on it.
    """
    if len(country) == 2 and country.isalpha():
        match = pycountry.countries.get(alpha_2=country.upper())
        if match is not None:
            name = getattr(match, "common_name", None) or match.name
            return WeatherQuery(unit=unit, country=name, country_code=match.alpha_2)
    return WeatherQuery(unit=unit, country=country)


def needs_ambient(latitude=None, longitude=None, country: Optional[str] = None) -> bool:
    """True when the explicit arguments alone do not identify a location."""
    has_lat = latitude is not None and latitude != ""
    has_lon = longitude is not None and longitude != ""
    if has_lat and has_lon:
        return False
    if not has_lat and not has_lon and _normalize_country(country):
        return False
    return True


def resolve_query(
    latitude=None,
    longitude=None,
    country: Optional[str] = None,
    unit: Optional[str] = None,
    context: Optional[RequestContext] = None,
) -> WeatherQuery:
    """
    Merge explicit tool arguments with the ambient request context.

    Explicit coordinates win and are completed field by field from the
    context. An explicit country (with no coordinates) selects country
    mode. Otherwise the context's coordinates, then its country, are used.

    Raises ValidationError naming the missing field when no location
    can be determined. Never touches the network.
    """
    context = context or RequestContext()
    unit = _normalize_unit(unit)
    lat = _coerce("latitude", latitude)
    lon = _coerce("longitude", longitude)
    country = _normalize_country(country)

    if lat is None and lon is None:
        if country:
            return _country_query(unit, country)
        if context.has_coordinates:
            return WeatherQuery(unit=unit, coordinates=Coordinates(context.latitude, context.longitude))
        if context.country:
            return _country_query(unit, context.country)
        raise ValidationError("Missing required parameter: latitude (provide latitude and longitude, or a country)")

    if lat is None:
        lat = context.latitude
    if lon is None:
        lon = context.longitude

    if lat is None:
        raise ValidationError("Missing required parameter: latitude")
    if lon is None:
        raise ValidationError("Missing required parameter: longitude")

    return WeatherQuery(unit=unit, coordinates=Coordinates(lat, lon))
