"""
Streamlit application for RouteWise delivery route planning.

This script defines the user interface and orchestrates the underlying
modules: places are resolved through the geocoding provider, the stops
are ordered by the optimiser, and the ordered route is sent to the
directions provider for real road distance and duration.

To run this app locally for development, install the package and execute:

    streamlit run routewise/app.py

The Mapbox token is read from Streamlit secrets (``MAPBOX_ACCESS_TOKEN``)
or from the ``ROUTEWISE_MAPBOX_ACCESS_TOKEN`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

# Allow `streamlit run routewise/app.py` from a source checkout.
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.append(parent_dir)

from routewise.config import settings
from routewise.directions import directions_for_route
from routewise.exceptions import RouteWiseError
from routewise.geocode import parse_latlng, reverse_geocode, suggest_places
from routewise.models import DirectionsRoute, Location, OptimizedRoute, validate_coordinates
from routewise.optimisation import optimize_route
from routewise.summary import format_distance, format_duration, format_route_summary, metres_to_miles

logger = logging.getLogger(__name__)


def mapbox_token() -> Optional[str]:
    """Return the Mapbox token from secrets, falling back to settings."""
    try:
        token = st.secrets.get("MAPBOX_ACCESS_TOKEN")
    except (FileNotFoundError, StreamlitAPIException):
        token = None
    return token or settings.mapbox_access_token


def location_input(label: str, key: str) -> Optional[Location]:
    """Text input with provider suggestions; returns the chosen ``Location``.

    Typing ``lat, lng`` bypasses forward geocoding and labels the point
    with a reverse lookup instead.
    """
    query = st.text_input(label, key=f"{key}_query")
    if not query.strip():
        return None
    latlng = parse_latlng(query)
    if latlng is not None:
        lat, lng = latlng
        try:
            validate_coordinates(lat, lng)
        except RouteWiseError as exc:
            st.error(str(exc))
            return None
        return Location(address=reverse_geocode(lat, lng), lat=lat, lng=lng)
    suggestions = suggest_places(query)
    if not suggestions:
        st.caption("No matching places found.")
        return None
    names = [s.place_name for s in suggestions]
    choice = st.selectbox("Suggestions", names, key=f"{key}_choice", label_visibility="collapsed")
    return suggestions[names.index(choice)].to_location()


def main():
    logging.basicConfig(level=settings.log_level)
    st.set_page_config(page_title="RouteWise", layout="wide")
    st.title("RouteWise route planner")

    st.subheader("Start")
    start = location_input("Start location", key="start")

    st.subheader("Stops")
    n_stops = st.number_input("Number of stops", min_value=1, max_value=settings.max_stops, value=2, step=1)
    stops: List[Location] = []
    for i in range(int(n_stops)):
        stop = location_input(f"Stop {i + 1}", key=f"stop_{i}")
        # Unresolved stops are skipped rather than optimised as garbage.
        if stop is not None:
            stops.append(stop)

    st.subheader("End")
    round_trip = st.checkbox("Return to start", value=True)
    end = None if round_trip else location_input("End location", key="end")

    if not st.button("Optimise route"):
        return
    if start is None:
        st.error("Please choose a start location.")
        return
    if not stops:
        st.error("Please choose at least one stop.")
        return
    if not round_trip and end is None:
        st.error("Please choose an end location or select a round trip.")
        return

    try:
        with st.spinner("Optimising route…"):
            route = optimize_route(start, stops, end)
    except RouteWiseError as exc:
        logger.error("Route optimisation failed: %s", exc)
        st.error(f"Route optimisation failed: {exc}")
        return

    directions = None
    try:
        with st.spinner("Fetching directions…"):
            directions = directions_for_route(route, access_token=mapbox_token())
    except RouteWiseError as exc:
        logger.warning("Directions unavailable: %s", exc)
        st.warning(f"Directions unavailable ({exc}); showing the straight-line estimate.")
    show_route(route, directions)


def show_route(route: OptimizedRoute, directions: Optional[DirectionsRoute] = None):
    """Render the visiting order, preferring provider figures when available."""
    if directions is not None:
        distance = metres_to_miles(directions.distance)
        duration = directions.duration
    else:
        distance = route.distance
        duration = route.duration
    col_distance, col_duration = st.columns(2)
    col_distance.metric("Total distance", format_distance(distance))
    col_duration.metric("Estimated time", format_duration(duration))
    st.caption(f"Straight-line estimate: {format_distance(route.distance)}")
    st.table([{"Order": pos, "Address": address} for pos, address in enumerate(route.addresses)])
    st.text_area("Summary", format_route_summary(route, directions), height=200)


if __name__ == "__main__":
    main()
