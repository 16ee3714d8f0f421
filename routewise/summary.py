"""
Route summary formatting for RouteWise.

Turns an optimised route, and optionally the directions provider's
result for it, into short human readable text. Provider figures take
precedence over the optimiser's straight‑line estimate.
"""

from __future__ import annotations

from typing import Optional

from .models import DirectionsRoute, OptimizedRoute

METRES_PER_MILE = 1609.344


def metres_to_miles(metres: float) -> float:
    return metres / METRES_PER_MILE


def format_distance(miles: float) -> str:
    return f"{miles:.1f} miles"


def format_duration(seconds: Optional[float]) -> str:
    """Format a duration in seconds as ``"1h 5m"`` or ``"5m"``."""
    if not seconds:
        return "Calculating..."
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    return f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"


def format_route_summary(route: OptimizedRoute, directions: Optional[DirectionsRoute] = None) -> str:
    """Format the visiting order, total distance and duration as text."""
    lines = ["Route summary:\n"]
    last = len(route.addresses) - 1
    for position, address in enumerate(route.addresses):
        if position == 0:
            label = "Start"
        elif position == last:
            label = "End"
        else:
            label = f"Stop {position}"
        lines.append(f"{label}: {address}")
    if directions is not None:
        distance = metres_to_miles(directions.distance)
        duration = directions.duration
    else:
        distance = route.distance
        duration = route.duration
    lines.append(f"\nTotal distance: {format_distance(distance)}")
    lines.append(f"Estimated time: {format_duration(duration)}")
    return "\n".join(lines)
