"""
Request-scoped value types for the weather tool.
Nothing here outlives a single tool call.
"""
from dataclasses import dataclass
from typing import Optional

from mcp.types import CallToolResult, TextContent

from tools.weather.errors import ValidationError
from tools.weather.units import CELSIUS, celsius_to_fahrenheit


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise ValidationError(f"Invalid latitude {self.latitude}: must be between -90 and 90")
        if not -180 <= self.longitude <= 180:
            raise ValidationError(f"Invalid longitude {self.longitude}: must be between -180 and 180")


@dataclass(frozen=True)
class LocationInfo:
    """A resolved place: what to print, and how to ask the weather provider about it."""

    display_name: str
    country: str
    provider_key: Optional[str] = None
    coordinates: Optional[Coordinates] = None


@dataclass(frozen=True)
class WindSpeed:
    value: float
    unit: str


@dataclass(frozen=True)
class WeatherObservation:
    """
    Current conditions as reported by a provider.

    condition_code is a WMO code; providers that only report text set
    condition_text instead. temperature_fahrenheit is only set when the
    provider reports it directly.
    """

    temperature_celsius: float
    condition_code: Optional[int] = None
    condition_text: Optional[str] = None
    temperature_fahrenheit: Optional[float] = None
    humidity_percent: Optional[int] = None
    wind_speed: Optional[WindSpeed] = None

    def temperature_in(self, unit: str) -> float:
        if unit == CELSIUS:
            return self.temperature_celsius
        if self.temperature_fahrenheit is not None:
            return self.temperature_fahrenheit
        return celsius_to_fahrenheit(self.temperature_celsius)


@dataclass(frozen=True)
class WeatherQuery:
    """Validated tool input. Exactly one of coordinates/country is set."""

    unit: str
    coordinates: Optional[Coordinates] = None
    country: Optional[str] = None
    country_code: Optional[str] = None


@dataclass(frozen=True)
class ToolResult:
    is_error: bool
    text: str

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(is_error=False, text=text)

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(is_error=True, text=text)

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            isError=self.is_error,
            content=[TextContent(type="text", text=self.text)],
        )
