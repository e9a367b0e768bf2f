"""
Single outbound GET used by every provider.
No retries; the timeout comes from settings.
"""
import logging
from typing import Any, Dict, Optional

import requests

from tools.weather.config import Settings
from tools.weather.errors import UpstreamSchemaError

logger = logging.getLogger(__name__)


def get_json(url: str, params: Optional[Dict[str, Any]], settings: Settings, provider: str) -> Any:
    """
    GET a JSON document.

    HTTP and connection errors propagate as requests exceptions.
    A body that is not JSON raises UpstreamSchemaError.
    """
    logger.info(f"🌐 [{provider}] GET {url}")
    resp = requests.get(
        url,
        params=params,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        timeout=settings.http_timeout,
    )
    resp.raise_for_status()

    try:
        return resp.json()
    except ValueError:
        raise UpstreamSchemaError(f"Invalid response from {provider}: body is not JSON")
