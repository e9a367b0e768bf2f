from abc import ABC, abstractmethod
from typing import Optional

from tools.weather.config import Settings
from tools.weather.models import Coordinates, LocationInfo, WeatherObservation


class WeatherProvider(ABC):
    """
    A geocoder plus a current-conditions source.
    Every method makes exactly one outbound GET.
    """

    name = "base"

    def __init__(self, settings: Settings):
        self.settings = settings

    @abstractmethod
    def locate_coordinates(self, coordinates: Coordinates) -> LocationInfo:
        """Reverse geocode a coordinate pair into a place name."""

    @abstractmethod
    def locate_country(self, name: str, country_code: Optional[str] = None) -> LocationInfo:
        """
        Look up a country/region by name and take the first match.
        country_code (ISO alpha-2), when known, narrows the search.
        """

    @abstractmethod
    def fetch_conditions(self, location: LocationInfo) -> WeatherObservation:
        """Current conditions at a resolved location."""
