"""
Value types shared across RouteWise.

Locations are validated on construction so that the optimiser never has to
deal with missing or garbage coordinates. Everything else here is a plain
container created fresh for each optimisation call.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from .exceptions import InvalidLocation


def validate_coordinates(lat: float, lng: float) -> None:
    """Raise ``InvalidLocation`` unless (lat, lng) is a finite WGS84 position."""
    try:
        lat_f = float(lat)
        lng_f = float(lng)
    except (TypeError, ValueError) as exc:
        raise InvalidLocation(f"Coordinates must be numeric, got ({lat!r}, {lng!r})") from exc
    if not (math.isfinite(lat_f) and math.isfinite(lng_f)):
        raise InvalidLocation(f"Coordinates must be finite, got ({lat!r}, {lng!r})")
    if not -90.0 <= lat_f <= 90.0:
        raise InvalidLocation(f"Latitude {lat_f} is outside [-90, 90]")
    if not -180.0 <= lng_f <= 180.0:
        raise InvalidLocation(f"Longitude {lng_f} is outside [-180, 180]")


@dataclass(frozen=True)
class Location:
    address: str
    lat: float
    lng: float

    def __post_init__(self) -> None:
        validate_coordinates(self.lat, self.lng)
        object.__setattr__(self, "lat", float(self.lat))
        object.__setattr__(self, "lng", float(self.lng))

    @property
    def coords(self) -> Tuple[float, float]:
        """(lat, lng) pair, the order the distance functions expect."""
        return self.lat, self.lng

    @property
    def lnglat(self) -> Tuple[float, float]:
        """(lng, lat) pair, the order map and directions services expect."""
        return self.lng, self.lat


@dataclass
class CostMatrix:
    """Distance (miles) and time (minutes) matrices over a waypoint set."""

    distance: List[List[float]]
    time: List[List[float]]
    hour: int
    multiplier: float

    @property
    def size(self) -> int:
        return len(self.distance)


@dataclass
class OptimizedRoute:
    coordinates: List[Tuple[float, float]]  # (lng, lat)
    order: List[int]
    distance: float  # miles
    duration: float = 0.0  # filled in from the directions provider, never here
    addresses: List[str] = field(default_factory=list)


@dataclass
class DirectionsRoute:
    distance: float  # metres
    duration: float  # seconds
    geometry: List[Tuple[float, float]]  # (lng, lat)


@dataclass(frozen=True)
class PlaceSuggestion:
    place_name: str
    lat: float
    lng: float

    def to_location(self) -> Location:
        return Location(address=self.place_name, lat=self.lat, lng=self.lng)
