"""
Weather MCP Server
Runs over stdio by default; sse / streamable-http via WEATHER_MCP_TRANSPORT
"""
import sys
from pathlib import Path
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv
load_dotenv(PROJECT_ROOT / ".env", override=True)

import logging
from typing import Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult

from tools.weather.config import Settings, load_settings
from tools.weather.context import RequestContext, ambient_context
from tools.weather.errors import WeatherToolError
from tools.weather.get_weather import get_weather as get_weather_fn
from tools.weather.providers import WeatherProvider, build_provider
from tools.weather.resolve_input import needs_ambient

LOG_DIR = PROJECT_ROOT / "logs"

logger = logging.getLogger("mcp_weather_server")

INSTRUCTIONS = "Weather is a tool that allows users to get the weather of a given latitude and longitude."

mcp = FastMCP("weather", instructions=INSTRUCTIONS)

# Set by main(); tool calls before that fall back to environment settings
settings: Optional[Settings] = None
provider: Optional[WeatherProvider] = None


def configure_logging(log_dir: Path = LOG_DIR):
    log_dir.mkdir(exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    # Remove any existing handlers (in case something already configured it)
    root_logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = logging.FileHandler(log_dir / "mcp-weather-server.log", encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    # stderr: stdout carries the stdio transport
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger("mcp").setLevel(logging.INFO)
    logger.setLevel(logging.INFO)
    logger.info("🚀 Server logging initialized - writing to logs/mcp-weather-server.log")


def _inbound_request(ctx: Optional[Context]):
    """The HTTP request behind this tool call, or None (stdio, tests)."""
    if ctx is None:
        return None
    try:
        request_context = ctx.request_context
    except ValueError:
        return None
    return getattr(request_context, "request", None)


@mcp.tool(name="getWeather")
def get_weather_tool(
    latitude: float | None = None,
    longitude: float | None = None,
    country: str | None = None,
    unit: str | None = None,
    ctx: Context = None,
) -> CallToolResult:
    """
    Get the weather of a given latitude and longitude.

    Args:
        latitude (float, optional): Latitude in degrees, -90 to 90 (e.g., 51.5074)
        longitude (float, optional): Longitude in degrees, -180 to 180 (e.g., -0.1278)
        country (str, optional): Country or region name, used when no coordinates are given (e.g., "Japan")
        unit (str, optional): "celsius" or "fahrenheit" (default "fahrenheit")

    If neither coordinates nor a country are given, the caller's location is
    inferred from the inbound request when possible.

    Returns:
        Text block with city, country, temperature, humidity, wind speed and conditions.
    """
    logger.info(
        f"🛠 [server] getWeather called with latitude: {latitude}, longitude: {longitude}, "
        f"country: {country}, unit: {unit}"
    )

    context = RequestContext()
    if needs_ambient(latitude, longitude, country):
        context = ambient_context(_inbound_request(ctx), settings or Settings())
        logger.info(f"🌤️  Ambient context: {context}")

    result = get_weather_fn(
        latitude, longitude, country, unit,
        context=context, provider=provider, settings=settings,
    )
    logger.info(f"🌤️  Returning weather result (isError={result.is_error})")
    return result.to_call_tool_result()


def main():
    global settings, provider

    configure_logging()

    try:
        settings = load_settings()
        provider = build_provider(settings)
    except WeatherToolError as e:
        logger.error(f"❌ {e.message}")
        raise SystemExit(1)

    logger.info(f"🛠  Provider: {provider.name}, transport: {settings.transport}")

    if settings.transport != "stdio":
        mcp.settings.host = settings.host
        mcp.settings.port = settings.port
    mcp.run(transport=settings.transport)


if __name__ == "__main__":
    main()
