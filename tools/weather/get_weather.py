import logging
from typing import Optional

from tools.weather.config import Settings, load_settings
from tools.weather.context import RequestContext
from tools.weather.errors import error_message
from tools.weather.formatting import format_report
from tools.weather.models import ToolResult
from tools.weather.providers import WeatherProvider, build_provider
from tools.weather.resolve_input import resolve_query

logger = logging.getLogger(__name__)


def get_weather(
    latitude=None,
    longitude=None,
    country: Optional[str] = None,
    unit: Optional[str] = None,
    context: Optional[RequestContext] = None,
    provider: Optional[WeatherProvider] = None,
    settings: Optional[Settings] = None,
) -> ToolResult:
    """
    Current weather for a coordinate pair or a country, as a ToolResult.

    validate → locate → fetch conditions → format. The two provider
    calls run one after the other. Any failure along the way becomes
    ToolResult(is_error=True) here and nowhere else.
    """
    try:
        query = resolve_query(latitude, longitude, country, unit, context)

        if provider is None:
            provider = build_provider(settings or load_settings())

        if query.coordinates is not None:
            location = provider.locate_coordinates(query.coordinates)
        else:
            location = provider.locate_country(query.country, query.country_code)
        logger.info(f"📍 Location: {location.display_name}, {location.country}")

        observation = provider.fetch_conditions(location)
        logger.info(f"🌤️  Observation: {observation}")

        return ToolResult.ok(format_report(location, observation, query.unit))

    except Exception as e:
        message = error_message(e)
        logger.warning(f"❌ get_weather failed: {type(e).__name__}: {message}")
        return ToolResult.error(message)
