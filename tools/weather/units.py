CELSIUS = "celsius"
FAHRENHEIT = "fahrenheit"
UNITS = (CELSIUS, FAHRENHEIT)
DEFAULT_UNIT = FAHRENHEIT

UNIT_SYMBOLS = {CELSIUS: "C", FAHRENHEIT: "F"}


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def ms_to_kmh(speed: float) -> float:
    return speed * 3.6
