"""
Geocoding utilities for RouteWise.

This module provides a thin wrapper around the `geopy` library to turn
free‑form text into candidate places and coordinates back into place
names. Mapbox is used when an access token is configured; otherwise
OpenStreetMap's Nominatim service is used. Suggestions are cached in
memory to avoid repeated queries while the user types.

Example usage:

    from routewise.geocode import suggest_places
    for place in suggest_places("1 Market St, San Francisco"):
        print(place.place_name, place.lat, place.lng)

Provider failures never propagate: suggestions fall back to an empty
tuple and reverse lookups to ``"Unknown location"``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional, Tuple

from geopy.exc import GeopyError
from geopy.geocoders import MapBox, Nominatim
from geopy.geocoders.base import Geocoder

from .config import settings
from .exceptions import InvalidLocation
from .models import Location, PlaceSuggestion, validate_coordinates

MIN_QUERY_LENGTH = 3
UNKNOWN_LOCATION = "Unknown location"

logger = logging.getLogger(__name__)

_geocoder: Optional[Geocoder] = None


def get_geocoder() -> Geocoder:
    """Return a singleton geocoder instance."""
    global _geocoder
    if _geocoder is None:
        timeout = settings.request_timeout_seconds
        if settings.mapbox_access_token:
            _geocoder = MapBox(api_key=settings.mapbox_access_token, timeout=timeout)
        else:
            # Nominatim's usage policy requires a custom user agent.
            _geocoder = Nominatim(user_agent=settings.geocoder_user_agent, timeout=timeout)
    return _geocoder


def reset_geocoder() -> None:
    """Drop the cached geocoder and suggestions, e.g. after settings change."""
    global _geocoder
    _geocoder = None
    suggest_places.cache_clear()


@lru_cache(maxsize=128)
def suggest_places(query: str, limit: int = 5) -> Tuple[PlaceSuggestion, ...]:
    """Return up to ``limit`` candidate places for ``query``.

    Queries shorter than three characters are not sent to the provider.

    Args:
        query: Free form text typed by the user.
        limit: Maximum number of suggestions.

    Returns:
        A tuple of ``PlaceSuggestion``; empty when nothing matched or the
        provider failed.
    """
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return ()
    geocoder = get_geocoder()
    try:
        results = geocoder.geocode(query, exactly_one=False)
    except GeopyError as exc:
        logger.warning("Geocoding %r failed: %s", query, exc)
        return ()
    if not results:
        return ()
    return tuple(
        PlaceSuggestion(place_name=result.address, lat=result.latitude, lng=result.longitude)
        for result in results[:limit]
    )


def geocode_location(address: str) -> Optional[Location]:
    """Geocode an address to a ``Location`` using the best suggestion, or ``None``."""
    suggestions = suggest_places(address, limit=1)
    if not suggestions:
        return None
    return suggestions[0].to_location()


def reverse_geocode(lat: float, lng: float) -> str:
    """Return the place name at (lat, lng), or ``"Unknown location"``.

    Invalid coordinates are not sent to the provider.
    """
    try:
        validate_coordinates(lat, lng)
    except InvalidLocation as exc:
        logger.warning("Not reverse geocoding invalid point: %s", exc)
        return UNKNOWN_LOCATION
    geocoder = get_geocoder()
    try:
        result = geocoder.reverse((lat, lng), exactly_one=True)
    except (GeopyError, ValueError) as exc:
        logger.warning("Reverse geocoding (%s, %s) failed: %s", lat, lng, exc)
        return UNKNOWN_LOCATION
    if result is None or not result.address:
        return UNKNOWN_LOCATION
    return result.address


def parse_latlng(text: str) -> Optional[Tuple[float, float]]:
    """Parse ``"lat, lng"`` typed by the user, or return ``None``."""
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        return None
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return None
