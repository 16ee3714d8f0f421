"""
Directions provider client for RouteWise.

Once the optimiser has fixed a visiting order, this module asks the
Mapbox Directions API for the real road path along it. The response
carries total distance (metres), total duration (seconds) and the full
route geometry, which supersede the optimiser's straight‑line estimate.

Example usage:

    route = optimize_route(start, stops)
    best = directions_for_route(route, access_token="pk....")
    best.duration  # seconds
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import requests

from .config import settings
from .exceptions import ConfigurationError, DirectionsError
from .models import DirectionsRoute, OptimizedRoute

logger = logging.getLogger(__name__)


def build_directions_url(
    coordinates: Sequence[Tuple[float, float]],
    profile: Optional[str] = None,
    base_url: Optional[str] = None,
) -> str:
    """Build the directions URL for (lng, lat) pairs joined as ``lng,lat;lng,lat``."""
    profile = profile or settings.directions_profile
    base = (base_url or settings.mapbox_base_url).rstrip("/")
    path = ";".join(f"{lng},{lat}" for lng, lat in coordinates)
    return f"{base}/directions/v5/mapbox/{profile}/{path}"


def parse_directions(data: dict) -> List[DirectionsRoute]:
    """Convert a Directions API payload into ``DirectionsRoute`` objects."""
    if not isinstance(data, dict):
        raise DirectionsError(f"Unexpected directions payload of type {type(data).__name__}")
    code = data.get("code")
    if code != "Ok":
        message = data.get("message", "no message")
        raise DirectionsError(f"Directions request failed with code {code!r}: {message}")
    routes = []
    try:
        for item in data.get("routes", []):
            geometry = item.get("geometry", {}).get("coordinates", [])
            routes.append(
                DirectionsRoute(
                    distance=float(item.get("distance", 0.0)),
                    duration=float(item.get("duration", 0.0)),
                    # points may carry a third elevation value
                    geometry=[(float(point[0]), float(point[1])) for point in geometry],
                )
            )
    except (AttributeError, TypeError, ValueError, IndexError) as exc:
        raise DirectionsError(f"Malformed directions route: {exc}") from exc
    if not routes:
        raise DirectionsError("Directions response contained no routes")
    return routes


def fetch_directions(
    coordinates: Sequence[Tuple[float, float]],
    access_token: Optional[str] = None,
    profile: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> List[DirectionsRoute]:
    """Call the directions service for an ordered list of (lng, lat) pairs.

    Args:
        coordinates: Waypoints in visiting order, (lng, lat).
        access_token: Mapbox token; defaults to ``settings.mapbox_access_token``.
        profile: Routing profile; defaults to ``settings.directions_profile``.
        session: Optional ``requests.Session`` to reuse connections.

    Returns:
        The candidate routes, best first.
    """
    if len(coordinates) < 2:
        raise ValueError("At least two coordinates are required for directions.")
    token = access_token or settings.mapbox_access_token
    if not token:
        raise ConfigurationError("Mapbox access token is not configured.")

    url = build_directions_url(coordinates, profile)
    params = {
        "geometries": "geojson",
        "overview": "full",
        "annotations": "distance,duration,speed,congestion",
        "access_token": token,
    }
    http = session or requests
    logger.debug("Requesting directions for %d coordinates", len(coordinates))
    try:
        resp = http.get(url, params=params, timeout=settings.request_timeout_seconds)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        logger.error("Directions request failed: %s", exc)
        raise DirectionsError(f"Directions request failed: {exc}") from exc
    except ValueError as exc:
        raise DirectionsError("Directions response was not valid JSON") from exc
    return parse_directions(data)


def directions_for_route(
    route: OptimizedRoute,
    access_token: Optional[str] = None,
    profile: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> DirectionsRoute:
    """Fetch directions along an optimised route and return the best candidate."""
    return fetch_directions(route.coordinates, access_token, profile, session)[0]
