"""
Process-wide settings for the weather server.
Read once at startup from the environment (.env is loaded by the server first).
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from tools.weather.errors import ValidationError

OPEN_METEO = "open-meteo"
OPENWEATHERMAP = "openweathermap"
PROVIDERS = (OPEN_METEO, OPENWEATHERMAP)

# Providers that refuse unauthenticated calls
KEYED_PROVIDERS = (OPENWEATHERMAP,)

TRANSPORTS = ("stdio", "sse", "streamable-http")

DEFAULT_USER_AGENT = "Weather MCP Tool/1.0"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    provider: str = OPEN_METEO
    api_key: Optional[str] = None
    http_timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    client_ip: Optional[str] = None


def _get(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name, "").strip()
    return value or None


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = _get(env, name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a number, got '{raw}'")
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got '{raw}'")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Raises ValidationError for unknown providers/transports, bad numbers,
    and a missing WEATHER_API_KEY when the provider needs one, so the
    server fails before answering any request.
    """
    env = os.environ if env is None else env

    provider = (_get(env, "WEATHER_PROVIDER") or OPEN_METEO).lower()
    if provider not in PROVIDERS:
        raise ValidationError(
            f"Unknown WEATHER_PROVIDER '{provider}'. Expected one of: {', '.join(PROVIDERS)}"
        )

    api_key = _get(env, "WEATHER_API_KEY")
    if provider in KEYED_PROVIDERS and not api_key:
        raise ValidationError(
            f"WEATHER_API_KEY is not set. The '{provider}' provider requires an API key."
        )

    transport = (_get(env, "WEATHER_MCP_TRANSPORT") or "stdio").lower()
    if transport not in TRANSPORTS:
        raise ValidationError(
            f"Unknown WEATHER_MCP_TRANSPORT '{transport}'. Expected one of: {', '.join(TRANSPORTS)}"
        )

    return Settings(
        provider=provider,
        api_key=api_key,
        http_timeout=_number(env, "WEATHER_HTTP_TIMEOUT", DEFAULT_TIMEOUT, float),
        user_agent=_get(env, "WEATHER_USER_AGENT") or DEFAULT_USER_AGENT,
        transport=transport,
        host=_get(env, "WEATHER_MCP_HOST") or "127.0.0.1",
        port=_number(env, "WEATHER_MCP_PORT", 8000, int),
        client_ip=_get(env, "CLIENT_IP"),
    )
