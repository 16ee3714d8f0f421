"""
Route optimisation heuristics for RouteWise.

This module orders a set of delivery stops between a fixed start and a
fixed end so that the blended travel cost is approximately minimal.
It provides:

    - ``nearest_neighbor``: build an initial tour by repeatedly
      visiting the cheapest unvisited stop.
    - ``two_opt``: refine a tour by reversing sub‑sequences of stops.
    - ``optimize_route``: run both over a fresh cost matrix and return
      an ``OptimizedRoute``.

Both heuristics minimise the same objective, the blended score
``0.3 * distance + 0.7 * time``. Index 0 of a tour is always the start
and index n-1 the end; neither is ever moved.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from .config import settings
from .exceptions import TooManyStops
from .models import CostMatrix, Location, OptimizedRoute
from .routing import build_waypoints, compute_cost_matrix, current_hour

DISTANCE_WEIGHT = 0.3
TIME_WEIGHT = 0.7

logger = logging.getLogger(__name__)


def blended_cost(matrix: CostMatrix, i: int, j: int) -> float:
    """Blended cost of travelling from waypoint ``i`` to waypoint ``j``."""
    return matrix.distance[i][j] * DISTANCE_WEIGHT + matrix.time[i][j] * TIME_WEIGHT


def tour_score(route: Sequence[int], matrix: CostMatrix) -> float:
    distance = 0.0
    time = 0.0
    for i in range(len(route) - 1):
        distance += matrix.distance[route[i]][route[i + 1]]
        time += matrix.time[route[i]][route[i + 1]]
    return distance * DISTANCE_WEIGHT + time * TIME_WEIGHT


def route_distance(route: Sequence[int], matrix: CostMatrix) -> float:
    """Sum of the distance matrix along ``route``, ignoring time."""
    return sum(matrix.distance[route[i]][route[i + 1]] for i in range(len(route) - 1))


def nearest_neighbor(matrix: CostMatrix) -> List[int]:
    """Construct an initial tour using the nearest neighbor heuristic.

    Args:
        matrix: Cost matrix over the waypoint set. Waypoint 0 is the
            start and waypoint n-1 the end.

    Returns:
        A list starting with 0, ending with n-1 and visiting every
        intermediate index exactly once. Candidates are scanned in
        ascending order, so ties go to the lowest index.
    """
    n = matrix.size
    if n == 0:
        return []
    if n == 1:
        return [0]
    unvisited = list(range(1, n - 1))
    route = [0]
    while unvisited:
        current = route[-1]
        # choose the cheapest unvisited neighbor
        next_stop = unvisited[0]
        best_cost = blended_cost(matrix, current, next_stop)
        for candidate in unvisited[1:]:
            cost = blended_cost(matrix, current, candidate)
            if cost < best_cost:
                next_stop = candidate
                best_cost = cost
        route.append(next_stop)
        unvisited.remove(next_stop)
    route.append(n - 1)
    logger.debug("Nearest neighbor tour: %s", route)
    return route


def two_opt_swap(route: Sequence[int], i: int, j: int) -> List[int]:
    """Return a copy of ``route`` with positions ``i`` to ``j`` inclusive reversed."""
    return list(route[:i]) + list(route[i : j + 1])[::-1] + list(route[j + 1 :])


def two_opt(route: Sequence[int], matrix: CostMatrix, max_passes: Optional[int] = None) -> List[int]:
    """Perform 2‑opt optimisation on a given tour.

    Every pair of interior positions ``1 <= i < j <= n-2`` is tried in
    each pass. A reversal is kept as soon as it scores strictly lower
    than the current best, and the rest of the pass continues from the
    improved tour. Passes repeat until one makes no improvement.

    Args:
        route: Initial tour as a list of waypoint indices. Not modified.
        matrix: Cost matrix the indices refer to.
        max_passes: Optional upper bound on the number of passes.

    Returns:
        A new tour whose score is never higher than the input's.
    """
    best = list(route)
    n = len(best)
    if n <= 3:
        return best
    best_score = tour_score(best, matrix)
    passes = 0
    improved = True
    while improved:
        improved = False
        passes += 1
        for i in range(1, n - 2):
            for j in range(i + 1, n - 1):
                candidate = two_opt_swap(best, i, j)
                candidate_score = tour_score(candidate, matrix)
                if candidate_score < best_score:
                    best = candidate
                    best_score = candidate_score
                    improved = True
        logger.debug("2-opt pass %d: score %.4f", passes, best_score)
        if max_passes is not None and passes >= max_passes:
            break
    return best


def optimize_route(
    start: Location,
    stops: Sequence[Location],
    end: Optional[Location] = None,
    *,
    hour: Optional[int] = None,
    clock: Optional[Callable[[], datetime]] = None,
    max_stops: Optional[int] = None,
    max_passes: Optional[int] = None,
) -> OptimizedRoute:
    """Order ``stops`` between ``start`` and ``end`` for the lowest blended cost.

    Without an ``end`` the route returns to ``start``. The traffic hour is
    taken from ``hour`` when given, otherwise read once from ``clock``.
    The returned distance is the straight‑line estimate in miles; the
    duration is left at 0 for the directions provider to fill in.
    """
    limit = settings.max_stops if max_stops is None else max_stops
    if len(stops) > limit:
        raise TooManyStops(f"{len(stops)} stops supplied, at most {limit} are supported")

    waypoints = build_waypoints(start, stops, end)
    if hour is None:
        hour = current_hour(clock)
    matrix = compute_cost_matrix([w.coords for w in waypoints], hour)

    route = nearest_neighbor(matrix)
    initial_score = tour_score(route, matrix)
    route = two_opt(route, matrix, max_passes=max_passes)
    logger.info(
        "Optimised %d stops at hour %d: score %.2f -> %.2f",
        len(stops),
        hour,
        initial_score,
        tour_score(route, matrix),
    )

    return OptimizedRoute(
        coordinates=[waypoints[i].lnglat for i in route],
        order=route,
        distance=route_distance(route, matrix),
        duration=0.0,
        addresses=[waypoints[i].address for i in route],
    )
