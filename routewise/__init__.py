"""
RouteWise package initialization.

This package orders delivery stops between a start and an optional end
location and hands the result to a directions provider for the real
road path.

Modules:
    routing      – Haversine distances and the time‑of‑day cost matrix.
    optimisation – Nearest neighbour and 2‑opt heuristics over the blended cost.
    directions   – Mapbox Directions client for the final road path.
    geocode      – Place suggestions and reverse geocoding via geopy.
    summary      – Text formatting of distances, durations and routes.
    app          – Streamlit user interface.
"""

from .exceptions import (
    ConfigurationError,
    DirectionsError,
    InvalidLocation,
    RouteWiseError,
    TooManyStops,
)
from .models import CostMatrix, DirectionsRoute, Location, OptimizedRoute, PlaceSuggestion
from .optimisation import optimize_route

__all__ = [
    "ConfigurationError",
    "CostMatrix",
    "DirectionsError",
    "DirectionsRoute",
    "InvalidLocation",
    "Location",
    "OptimizedRoute",
    "PlaceSuggestion",
    "RouteWiseError",
    "TooManyStops",
    "optimize_route",
]
