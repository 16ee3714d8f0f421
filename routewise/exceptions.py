"""
Error types raised by RouteWise.

The optimisation core performs no I/O, so its failures are limited to bad
input. Network failures belong to the directions client.
"""


class RouteWiseError(Exception):
    """Base class for all RouteWise errors."""


class InvalidLocation(RouteWiseError, ValueError):
    """A coordinate is not finite or lies outside valid lat/lng ranges."""


class TooManyStops(RouteWiseError, ValueError):
    """More stops were supplied than the optimiser is configured to accept."""


class ConfigurationError(RouteWiseError):
    """A required setting, such as an API token, is missing."""


class DirectionsError(RouteWiseError):
    """The directions provider could not return a route."""
