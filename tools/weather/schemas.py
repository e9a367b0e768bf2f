"""
Declarative shapes of the provider responses we rely on.
Only the fields we read are declared; extra fields are ignored.
"""
from typing import Any, List, Optional, Type

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tools.weather.errors import UpstreamSchemaError, WeatherToolError

MAX_INPUT_REPR = 80


# ─────────────────────────────────────────────
# Nominatim (reverse geocoding)
# ─────────────────────────────────────────────
class NominatimAddress(BaseModel):
    city: Optional[str] = None
    town: Optional[str] = None
    village: Optional[str] = None
    country: Optional[str] = None


class NominatimReverse(BaseModel):
    place_id: Optional[int] = None
    address: Optional[NominatimAddress] = None


# ─────────────────────────────────────────────
# Open-Meteo
# ─────────────────────────────────────────────
class GeocodingResult(BaseModel):
    id: Optional[int] = None
    name: str
    latitude: float
    longitude: float
    country: Optional[str] = None


class GeocodingSearch(BaseModel):
    # The key is absent entirely when nothing matches
    results: List[GeocodingResult] = Field(default_factory=list)


class OpenMeteoCurrent(BaseModel):
    temperature_2m: float
    weather_code: int
    relative_humidity_2m: Optional[float] = None
    wind_speed_10m: Optional[float] = None


class OpenMeteoCurrentUnits(BaseModel):
    wind_speed_10m: Optional[str] = None


class OpenMeteoForecast(BaseModel):
    current: Optional[OpenMeteoCurrent] = None
    current_units: Optional[OpenMeteoCurrentUnits] = None


# ─────────────────────────────────────────────
# OpenWeatherMap
# ─────────────────────────────────────────────
class OwmGeoEntry(BaseModel):
    name: str
    lat: float
    lon: float
    country: Optional[str] = None
    state: Optional[str] = None


class OwmCondition(BaseModel):
    id: int
    description: str


class OwmMain(BaseModel):
    temp: float
    humidity: Optional[float] = None


class OwmWind(BaseModel):
    speed: Optional[float] = None


class OwmCurrentWeather(BaseModel):
    main: Optional[OwmMain] = None
    weather: List[OwmCondition] = Field(default_factory=list)
    wind: Optional[OwmWind] = None


OWM_GEO_LIST = TypeAdapter(List[OwmGeoEntry])


def _describe_error(error: dict) -> str:
    path = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
    text = f"{path}: {error.get('msg', 'invalid value')}"
    if error.get("type") != "missing":
        got = repr(error.get("input"))
        if len(got) > MAX_INPUT_REPR:
            got = got[:MAX_INPUT_REPR] + "..."
        text += f" (got {got})"
    return text


def parse_response(
    schema,
    payload: Any,
    provider: str,
    missing: Type[WeatherToolError] = UpstreamSchemaError,
    missing_message: Optional[str] = None,
):
    """
    Validate a provider payload against a model class or TypeAdapter.

    On failure raises UpstreamSchemaError listing every failing field as
    `path: problem (got value)`. When every failure is a missing field,
    `missing` is raised instead, so callers can report absent data
    differently from malformed data.
    """
    try:
        if isinstance(schema, TypeAdapter):
            return schema.validate_python(payload)
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        errors = exc.errors()
        details = "; ".join(_describe_error(err) for err in errors)
        if missing is not UpstreamSchemaError and all(err.get("type") == "missing" for err in errors):
            raise missing(f"{missing_message or 'Missing data'} ({details})") from exc
        raise UpstreamSchemaError(f"Unexpected response from {provider}: {details}") from exc
