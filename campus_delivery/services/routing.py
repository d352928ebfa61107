"""Driving distance between two coordinates.

The public OSRM router is queried first; on any failure the great-circle
distance is used instead.
"""

from __future__ import annotations

import logging
import math

import requests

from campus_delivery.core.config import settings

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


class RouteUnavailableError(Exception):
    """Raised when no distance can be computed for the given coordinates."""


def _validate_coordinate(lat: float, lng: float) -> None:
    try:
        lat_value = float(lat)
        lng_value = float(lng)
    except (TypeError, ValueError) as exc:
        raise RouteUnavailableError(f"Invalid coordinate: {lat!r}, {lng!r}") from exc
    if not (math.isfinite(lat_value) and math.isfinite(lng_value)):
        raise RouteUnavailableError(f"Invalid coordinate: {lat!r}, {lng!r}")
    if not -90 <= lat_value <= 90 or not -180 <= lng_value <= 180:
        raise RouteUnavailableError(f"Coordinate out of range: {lat!r}, {lng!r}")


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in km rounded to one decimal."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 1)


def fetch_route_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Ask the routing service for the driving distance in km (1 decimal)."""
    url = (
        f"{settings.routing_base_url.rstrip('/')}/route/v1/driving/"
        f"{lng1},{lat1};{lng2},{lat2}"
    )
    response = requests.get(url, params={"overview": "false"}, timeout=settings.routing_timeout_seconds)
    response.raise_for_status()
    data = response.json()
    if data.get("code") != "Ok":
        raise ValueError(f"Routing service returned code {data.get('code')!r}")
    meters = float(data["routes"][0]["distance"])
    return round(meters / 1000, 1)


def street_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Driving distance, falling back to the straight-line distance.

    Raises:
        RouteUnavailableError: if either coordinate is malformed.
    """
    _validate_coordinate(lat1, lng1)
    _validate_coordinate(lat2, lng2)
    try:
        return fetch_route_km(lat1, lng1, lat2, lng2)
    except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as exc:
        logger.warning("[ROUTING] Route lookup failed (%s); using straight-line distance.", exc)
        return haversine_km(float(lat1), float(lng1), float(lat2), float(lng2))


def format_distance(distance_km: float) -> str:
    if distance_km < 1:
        return f"{round(distance_km * 1000)}m"
    return f"{distance_km}km"
