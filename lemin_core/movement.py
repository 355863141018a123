"""
lemin_core/movement.py
──────────────────────
The movement scheduler: spreads ants over routes and plays the turns.

Phase 1 — route assignment
───────────────────────────
Each ant, in increasing id order, picks the route with the lowest

    cost(route) = hop_length(route) + ants already assigned to route

Ties go to the lowest route index (linear scan, strict < to replace the
current best). A long route therefore receives ants only once the short
ones are queued up deep enough that waiting would cost more than walking.
Greedy, not optimal, but deterministic.

The assignment is built once, before turn 1, and never changes.

Phase 2 — turn simulation
──────────────────────────
Every turn runs two steps, in this order:

  1. Advancement. Every ant admitted in an earlier turn and not yet
     finished tries to step one position forward, in increasing id order.
     It moves only if the target position on ITS OWN route is free.
     State is live: an ant that stepped off a position frees it for the
     next ant in the same turn. Reaching the last position (the end room)
     finishes the ant in that same turn.

  2. Admission. The next not-yet-started ant is placed on position 1 of
     its route if that position is free. This repeats with the following
     ant until one is blocked or the per-turn admission limit is hit.
     Admission is strictly in id order: a blocked ant holds back every
     later ant for that turn, even one bound for an empty route.

A turn that moved at least one ant becomes a Turn in the schedule. The
loop ends when every ant has finished.

A freshly admitted ant does not advance in its admission turn, so an
ant on a route of h hops needs exactly h turns from admission to finish,
and a single route carrying N ants finishes in h + N - 1 turns.

Occupancy scope
────────────────
By default occupancy is checked only among ants sharing a route. Two
routes that pass through the same room (without sharing a link) can both
have an ant in that room during the same turn. That is a known limitation
of the model, kept on purpose. room_exclusive=True switches to the
collision-aware variant; only that variant can deadlock, and a turn with
no moves raises SchedulingStalledError instead of looping forever.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from antfarm.shared.errors import (
    InvalidUnitCountError,
    NoRouteFoundError,
    SchedulingStalledError,
)
from antfarm.shared.models import Move, Route, Schedule, Turn
from lemin_core.occupancy import OccupancyBoard

logger = logging.getLogger(__name__)


@dataclass
class UnitState:
    """
    Where one placed ant currently is.

    position 0 is the start room and is never held by a UnitState: an ant
    gets a state when it is admitted at position 1. finished flips when the
    ant reaches the last position of its route.
    """
    unit_id: int
    route_idx: int
    position: int = 1
    finished: bool = False


def assign_routes(routes: List[Route], unit_count: int) -> Dict[int, int]:
    """
    Phase 1: map every ant id (1..unit_count) to a route index.

    Args:
        routes:     Non-empty list of routes in extraction order.
        unit_count: Number of ants.

    Returns:
        Dict[int, int] ant id → route index, in increasing ant id order.

    Raises:
        NoRouteFoundError: if routes is empty and unit_count > 0.
    """
    if unit_count > 0 and not routes:
        raise NoRouteFoundError(message="cannot assign ants: no routes available")

    queued = [0] * len(routes)
    assignment: Dict[int, int] = {}
    for unit_id in range(1, unit_count + 1):
        best_idx = 0
        best_cost = routes[0].hop_length + queued[0]
        for idx in range(1, len(routes)):
            cost = routes[idx].hop_length + queued[idx]
            if cost < best_cost:
                best_idx = idx
                best_cost = cost
        assignment[unit_id] = best_idx
        queued[best_idx] += 1
    return assignment


class MovementScheduler:
    """
    Plays the turn-based simulation for one (routes, unit_count) pair.

    Usage:
        scheduler = MovementScheduler(routes, unit_count=10)
        schedule = scheduler.run()          # Schedule

    Options:
        room_exclusive:          Block a move if ANY route has an ant in the
                                 target room, not just the ant's own route.
        max_admissions_per_turn: Cap on ants entering the farm per turn.
                                 None means occupancy is the only limit.

    One scheduler instance may be run() more than once; every run starts
    from a fresh board and yields an identical schedule.
    """

    def __init__(
        self,
        routes: List[Route],
        unit_count: int,
        room_exclusive: bool = False,
        max_admissions_per_turn: Optional[int] = None,
    ) -> None:
        if unit_count <= 0:
            raise InvalidUnitCountError(unit_count)
        if not routes:
            raise NoRouteFoundError(
                message=f"cannot schedule {unit_count} ant(s): no routes available"
            )
        if max_admissions_per_turn is not None and max_admissions_per_turn < 1:
            raise ValueError(
                f"max_admissions_per_turn must be ≥ 1 or None, "
                f"got {max_admissions_per_turn}"
            )
        self._routes = list(routes)
        self._unit_count = unit_count
        self._room_exclusive = room_exclusive
        self._max_admissions = max_admissions_per_turn

    def run(self) -> Schedule:
        """
        Assign ants to routes, then simulate turns until every ant finished.

        Returns:
            Schedule with the routes, the assignment and every non-empty turn.

        Raises:
            SchedulingStalledError: if a turn moves nobody while ants remain
                                    (room-exclusive mode only).
        """
        assignment = assign_routes(self._routes, self._unit_count)
        board = OccupancyBoard(self._routes, room_exclusive=self._room_exclusive)

        active: List[UnitState] = []    # admitted, not finished, id order
        next_unit = 1
        finished = 0
        turns: List[Turn] = []

        while finished < self._unit_count:
            turn_number = len(turns) + 1
            moves: List[Move] = []

            # ── Step 1: advancement ──────────────────────────────────────────
            for state in active:
                target = state.position + 1
                if not board.is_free(state.route_idx, target):
                    continue
                board.advance(state.unit_id, state.route_idx, state.position)
                state.position = target
                moves.append(self._move(state))
                if self._at_end(state):
                    state.finished = True
                    finished += 1

            active = [state for state in active if not state.finished]

            # ── Step 2: admission ────────────────────────────────────────────
            admitted = 0
            while next_unit <= self._unit_count:
                if self._max_admissions is not None and admitted >= self._max_admissions:
                    break
                route_idx = assignment[next_unit]
                if not board.is_free(route_idx, 1):
                    break
                state = UnitState(unit_id=next_unit, route_idx=route_idx)
                board.place(state.unit_id, route_idx, 1)
                moves.append(self._move(state))
                if self._at_end(state):
                    state.finished = True
                    finished += 1
                else:
                    active.append(state)
                next_unit += 1
                admitted += 1

            if not moves:
                raise SchedulingStalledError(
                    turn_number, self._unit_count - finished
                )

            logger.debug(
                "MovementScheduler: turn %d, %d move(s), %d ant(s) en route.",
                turn_number, len(moves), len(active),
            )
            turns.append(Turn(number=turn_number, moves=moves))

        logger.info(
            "MovementScheduler: %d ant(s) over %d route(s) in %d turn(s).",
            self._unit_count, len(self._routes), len(turns),
        )
        return Schedule(routes=self._routes, assignment=assignment, turns=turns)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _move(self, state: UnitState) -> Move:
        room = self._routes[state.route_idx].rooms[state.position]
        return Move(unit_id=state.unit_id, room=room)

    def _at_end(self, state: UnitState) -> bool:
        return state.position == len(self._routes[state.route_idx]) - 1

    def __repr__(self) -> str:
        return (
            f"MovementScheduler(routes={len(self._routes)}, "
            f"units={self._unit_count}, room_exclusive={self._room_exclusive})"
        )


def schedule_moves(
    routes: List[Route],
    unit_count: int,
    room_exclusive: bool = False,
    max_admissions_per_turn: Optional[int] = None,
) -> Schedule:
    """Functional wrapper: MovementScheduler(...).run()."""
    return MovementScheduler(
        routes,
        unit_count,
        room_exclusive=room_exclusive,
        max_admissions_per_turn=max_admissions_per_turn,
    ).run()
