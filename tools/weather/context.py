"""
Ambient per-request location hints.
A RequestContext is built once per tool call and passed down explicitly;
it is only used to fill in parameters the caller left out.
"""
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import requests

from tools.weather.config import Settings

logger = logging.getLogger(__name__)

IP_API_URL = "http://ip-api.com/json/{ip}"

# Edge networks that attach visitor geolocation to inbound requests
LATITUDE_HEADERS = ("cf-iplatitude", "x-vercel-ip-latitude")
LONGITUDE_HEADERS = ("cf-iplongitude", "x-vercel-ip-longitude")
COUNTRY_HEADERS = ("cf-ipcountry", "x-vercel-ip-country")

# Cloudflare: XX = unknown, T1 = Tor
IGNORED_COUNTRIES = ("XX", "T1")


def _first(headers: Mapping[str, str], names) -> Optional[str]:
    for name in names:
        value = headers.get(name)
        if value and value.strip():
            return value.strip()
    return None


def _float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class RequestContext:
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    country: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def is_empty(self) -> bool:
        return self.latitude is None and self.longitude is None and not self.country

    @classmethod
    def from_headers(cls, headers: Optional[Mapping[str, str]]) -> "RequestContext":
        if not headers:
            return cls()
        headers = {str(k).lower(): v for k, v in headers.items()}

        country = _first(headers, COUNTRY_HEADERS)
        if country and country.upper() in IGNORED_COUNTRIES:
            country = None

        return cls(
            latitude=_float(_first(headers, LATITUDE_HEADERS)),
            longitude=_float(_first(headers, LONGITUDE_HEADERS)),
            country=country,
        )

    @classmethod
    def from_ip(cls, ip: Optional[str], settings: Settings) -> "RequestContext":
        """
        Geolocate an IP address with ip-api.com.
        Lookup failures give an empty context; this is only ever a hint.
        """
        if not ip:
            return cls()

        try:
            resp = requests.get(
                IP_API_URL.format(ip=ip),
                headers={"User-Agent": settings.user_agent},
                timeout=settings.http_timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"⚠️  IP geolocation failed for {ip}: {e}")
            return cls()

        if not isinstance(data, dict) or data.get("status") != "success":
            logger.warning(f"⚠️  IP geolocation returned no location for {ip}")
            return cls()

        lat = data.get("lat")
        lon = data.get("lon")
        country = data.get("country")
        return cls(
            latitude=float(lat) if isinstance(lat, (int, float)) else None,
            longitude=float(lon) if isinstance(lon, (int, float)) else None,
            country=country if isinstance(country, str) and country else None,
        )


def _client_ip(headers: Mapping[str, str]) -> Optional[str]:
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return headers.get("x-real-ip")


def ambient_context(request, settings: Settings) -> RequestContext:
    """
    Build the ambient context for one tool call.

    HTTP transports: edge geolocation headers, then the caller's IP.
    Then (and always on stdio) the CLIENT_IP setting, if any.
    """
    headers = getattr(request, "headers", None)
    if headers is not None:
        lowered = {str(k).lower(): v for k, v in headers.items()}
        context = RequestContext.from_headers(lowered)
        if not context.is_empty:
            return context
        ip = _client_ip(lowered)
        if ip:
            context = RequestContext.from_ip(ip, settings)
            if not context.is_empty:
                return context

    if settings.client_ip:
        return RequestContext.from_ip(settings.client_ip, settings)

    return RequestContext()
