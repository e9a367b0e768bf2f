"""
Error taxonomy for the weather tool.
Every failure raised inside the tool is one of these, except transport
errors from requests, which already carry a usable message.
"""
import logging

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown Error"


class WeatherToolError(Exception):
    """Base class for all weather tool failures"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WeatherToolError):
    """Missing or invalid input (or configuration)"""


class UpstreamSchemaError(WeatherToolError):
    """Provider response does not match the expected shape"""


class NotFoundError(WeatherToolError):
    """No location matched the query"""


class DataUnavailableError(WeatherToolError):
    """Provider answered but without usable weather data"""


def error_message(error) -> str:
    """
    Extract a user-facing message from anything raised inside a tool call.

    Strings are used verbatim, then a string `message` attribute, then a
    string first argument. Anything else is logged and reported as
    "Unknown Error" so internals never leak to the caller.
    """
    if isinstance(error, str):
        return error

    message = getattr(error, "message", None)
    if isinstance(message, str):
        return message

    args = getattr(error, "args", None)
    if isinstance(error, BaseException) and args and isinstance(args[0], str):
        return args[0]

    logger.error(f"❌ Unable to get error message for error: {error!r}")
    return UNKNOWN_ERROR
