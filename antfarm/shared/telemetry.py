"""
antfarm/shared/telemetry.py
───────────────────────────
ScheduleMetrics: a statistical summary of one finished schedule.

Why this is a separate file from models.py
------------------------------------------
models.py defines what the solver produces (routes, turns, moves).
telemetry.py defines what we learn by looking at it afterwards: how many
turns it took, how busy the busiest turn was, how the ants were spread
over the routes. The CLI prints it with --stats; tests use it to compare
policies.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from antfarm.shared.models import Schedule


class ScheduleMetrics(BaseModel):
    """
    Fields:
        unit_count          → Ants moved from start to end.
        route_count         → Routes the extractor found.
        turn_count          → Lines in the move log.
        move_count          → Total L<id>-<room> tokens.
        max_moves_per_turn  → Size of the busiest turn.
        units_per_route     → Ants assigned to each route, by route index.
        route_hop_lengths   → Hop length of each route, by route index.
    """
    unit_count: int = Field(..., ge=0)
    route_count: int = Field(..., ge=0)
    turn_count: int = Field(..., ge=0)
    move_count: int = Field(..., ge=0)
    max_moves_per_turn: int = Field(0, ge=0)
    units_per_route: List[int] = Field(default_factory=list)
    route_hop_lengths: List[int] = Field(default_factory=list)

    @property
    def unused_routes(self) -> int:
        """Routes that ended up with no ant at all."""
        return sum(1 for count in self.units_per_route if count == 0)


def summarise_schedule(schedule: Schedule) -> ScheduleMetrics:
    """Build ScheduleMetrics from a finished Schedule."""
    units_per_route = [0] * len(schedule.routes)
    for route_idx in schedule.assignment.values():
        units_per_route[route_idx] += 1

    return ScheduleMetrics(
        unit_count=schedule.unit_count,
        route_count=len(schedule.routes),
        turn_count=schedule.turn_count,
        move_count=schedule.move_count,
        max_moves_per_turn=max((len(t.moves) for t in schedule.turns), default=0),
        units_per_route=units_per_route,
        route_hop_lengths=[route.hop_length for route in schedule.routes],
    )
