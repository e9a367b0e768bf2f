"""
Turns a location and an observation into the text the tool returns.
Pure functions, no I/O.
"""
from tools.weather.conditions import describe_condition
from tools.weather.models import LocationInfo, WeatherObservation
from tools.weather.units import UNIT_SYMBOLS


def _number(value: float) -> str:
    """Print 12.0 as 12 and 12.3 as 12.3."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def condition_description(observation: WeatherObservation) -> str:
    if observation.condition_text:
        return observation.condition_text
    return describe_condition(observation.condition_code)


def format_report(location: LocationInfo, observation: WeatherObservation, unit: str) -> str:
    """
    Render the weather summary.

    Humidity and wind lines only appear when the provider reported them.
    Temperature is rounded to one decimal for display only.
    """
    temperature = observation.temperature_in(unit)

    lines = [
        f"Weather in {location.display_name}, {location.country}:",
        f"• Temperature: {temperature:.1f}°{UNIT_SYMBOLS[unit]}",
    ]
    if observation.humidity_percent is not None:
        lines.append(f"• Humidity: {observation.humidity_percent}%")
    if observation.wind_speed is not None:
        wind = observation.wind_speed
        lines.append(f"• Wind Speed: {_number(wind.value)} {wind.unit}")
    lines.append(f"• Conditions: {condition_description(observation)}")

    return "\n".join(lines)
