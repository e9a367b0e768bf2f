from .get_weather import get_weather
from .context import RequestContext
from .models import ToolResult

__all__ = ["get_weather", "RequestContext", "ToolResult"]
