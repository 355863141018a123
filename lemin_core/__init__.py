"""
lemin_core — route extraction and turn scheduling for the ant farm.

Public API:
    RouteExtractor     — repeated BFS, returns edge-disjoint routes
    extract_routes     — functional wrapper around RouteExtractor
    MovementScheduler  — assigns ants to routes and plays the turns
    assign_routes      — the greedy ant → route assignment on its own
    schedule_moves     — functional wrapper around MovementScheduler
    OccupancyBoard     — per-route position occupancy (numpy)

Usage:
    from lemin_core import extract_routes, schedule_moves

    routes = extract_routes(farm)              # consumes farm.links in place
    schedule = schedule_moves(routes, farm.unit_count)
"""

from lemin_core.extractor import RouteExtractor, extract_routes
from lemin_core.movement import (
    MovementScheduler,
    UnitState,
    assign_routes,
    schedule_moves,
)
from lemin_core.occupancy import OccupancyBoard

__all__ = [
    "RouteExtractor",
    "extract_routes",
    "MovementScheduler",
    "UnitState",
    "assign_routes",
    "schedule_moves",
    "OccupancyBoard",
]
