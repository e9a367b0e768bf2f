from tools.weather.config import OPEN_METEO, OPENWEATHERMAP, Settings
from tools.weather.errors import ValidationError

from .base import WeatherProvider
from .open_meteo import OpenMeteoProvider
from .openweathermap import OpenWeatherMapProvider

PROVIDER_CLASSES = {
    OPEN_METEO: OpenMeteoProvider,
    OPENWEATHERMAP: OpenWeatherMapProvider,
}


def build_provider(settings: Settings) -> WeatherProvider:
    """Instantiate the provider named in settings."""
    try:
        provider_cls = PROVIDER_CLASSES[settings.provider]
    except KeyError:
        raise ValidationError(f"Unknown weather provider '{settings.provider}'")
    return provider_cls(settings)


__all__ = [
    "WeatherProvider",
    "OpenMeteoProvider",
    "OpenWeatherMapProvider",
    "build_provider",
]
