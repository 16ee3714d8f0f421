"""
Cost model for RouteWise.

This module estimates travel between waypoints without any network
calls. Distances come from the Haversine formula in miles; travel times
assume a constant base speed scaled by a time‑of‑day traffic factor.
Both feed the optimisation heuristics in :mod:`routewise.optimisation`.

Example usage:

    coords = [(37.7749, -122.4194), (37.7849, -122.4094)]
    matrix = compute_cost_matrix(coords, hour=8)
    matrix.time[0][1]  # minutes, rush hour applied

The traffic factor is a static heuristic, not live data. Accurate road
distances and durations come from :mod:`routewise.directions` once the
visiting order is known.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from .config import settings
from .models import CostMatrix, Location

EARTH_RADIUS_MILES = 3959.0

RUSH_HOUR_FACTOR = 1.5
NIGHT_FACTOR = 0.8

logger = logging.getLogger(__name__)


def haversine_distance(coord1: Tuple[float, float], coord2: Tuple[float, float]) -> float:
    """Compute the great‑circle distance between two (lat, lng) coordinates in miles."""
    lat1, lon1 = coord1
    lat2, lon2 = coord2
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def traffic_multiplier(hour: int) -> float:
    """Return the travel time factor for a local hour of the day.

    Rush hours (7–10 and 16–19 inclusive) are 50% slower, nights
    (22 onwards and up to 5 inclusive) 20% faster.
    """
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be within 0-23, got {hour}")
    if 7 <= hour <= 10 or 16 <= hour <= 19:
        return RUSH_HOUR_FACTOR
    if hour >= 22 or hour <= 5:
        return NIGHT_FACTOR
    return 1.0


def current_hour(clock: Optional[Callable[[], datetime]] = None) -> int:
    """Read the local hour once from ``clock`` (defaults to ``datetime.now``)."""
    now = (clock or datetime.now)()
    return now.hour


def compute_cost_matrix(
    coords: Sequence[Tuple[float, float]],
    hour: int,
    speed_mph: Optional[float] = None,
) -> CostMatrix:
    """Compute distance and time matrices using the Haversine formula.

    Args:
        coords: List of (lat, lng) tuples.
        hour: Local hour used for the traffic factor. It is read once for the
            whole matrix so every cell sees the same factor.
        speed_mph: Base travel speed; defaults to ``settings.base_speed_mph``.

    Returns:
        A ``CostMatrix`` with distances in miles and times in minutes.
    """
    speed = speed_mph if speed_mph is not None else settings.base_speed_mph
    factor = traffic_multiplier(hour)
    n = len(coords)
    dist_matrix = [[0.0] * n for _ in range(n)]
    time_matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            dist = haversine_distance(coords[i], coords[j])
            dist_matrix[i][j] = dist
            time_matrix[i][j] = dist / speed * 60.0 * factor
    logger.debug("Built %dx%d cost matrix for hour %d (traffic factor %.1f)", n, n, hour, factor)
    return CostMatrix(distance=dist_matrix, time=time_matrix, hour=hour, multiplier=factor)


def build_waypoints(
    start: Location,
    stops: Sequence[Location],
    end: Optional[Location] = None,
) -> List[Location]:
    """Lay out ``[start, *stops, end]``, closing the loop on ``start`` when no end is given."""
    return [start, *stops, end if end is not None else start]
