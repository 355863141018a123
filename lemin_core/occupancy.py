"""
lemin_core/occupancy.py
───────────────────────
The occupancy board: who stands where, on every route, right now.

Why a board and not a scan?
────────────────────────────
The naive way to ask "is position p on route r free?" is to scan every
active ant. That is O(active ants) per question and the scheduler asks it
once per ant per turn. The board answers in O(1) by keeping one cell per
(route, position) and updating it incrementally as ants move. Observable
behaviour is identical to the scan.

Board layout
────────────
  Shape : (n_routes, max_route_rooms)
  cell[r][p] : id of the ant standing at position p of route r, 0 if empty.
  Cells past the end of a shorter route are never touched.

Terminal positions are never occupied. Position 0 is the start room and
the last position of each route is the end room; both hold any number of
ants, so the board does not record them.

Room-exclusive mode
────────────────────
By default routes are independent: two ants on different routes may stand
in the same room if both routes pass through it. With room_exclusive=True
the board also keeps a room → ant map, and a position counts as free only
if its ROOM is free across all routes. This is the opt-in collision-aware
variant; the scheduler's default stays collision-unaware.

NumPy design choices
────────────────────
  • int64 cells, 0 as the empty marker (ant ids start at 1).
  • Scalar indexing on the hot path; no per-turn allocation.
  • .copy() only in snapshot().
"""

from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np
from numpy.typing import NDArray

from antfarm.shared.models import Route

EMPTY: int = 0
"""Cell value for an unoccupied position. Ant ids are 1-based."""


class OccupancyBoard:
    """
    Per-route position occupancy, optionally with cross-route room exclusion.

    Used by:
        MovementScheduler.run() → is_free() before every admission and
                                  advancement, then place()/advance().
        Tests                   → snapshot() and occupant() to inspect state.

    Not thread-safe. One board belongs to one simulation run.
    """

    def __init__(self, routes: List[Route], room_exclusive: bool = False) -> None:
        """
        Build an empty board sized for the given routes.

        Raises:
            ValueError: if routes is empty.
        """
        if not routes:
            raise ValueError("OccupancyBoard requires at least one route")
        self._routes = routes
        self._room_exclusive = room_exclusive
        self._lengths = [len(route) for route in routes]
        width = max(self._lengths)
        self._cells: NDArray[np.int64] = np.full(
            (len(routes), width), EMPTY, dtype=np.int64
        )
        self._room_owner: Dict[str, int] = {}

    # ── Queries ───────────────────────────────────────────────────────────────

    def is_terminal(self, route_idx: int, position: int) -> bool:
        return position == 0 or position == self._lengths[route_idx] - 1

    def is_free(self, route_idx: int, position: int) -> bool:
        """
        Can an ant step onto `position` of route `route_idx`?

        Terminal positions are always free. Otherwise the cell must be empty
        and, in room-exclusive mode, the room must be empty on every route.
        """
        if self.is_terminal(route_idx, position):
            return True
        if self._cells[route_idx, position] != EMPTY:
            return False
        if self._room_exclusive:
            room = self._routes[route_idx].rooms[position]
            return room not in self._room_owner
        return True

    def occupant(self, route_idx: int, position: int) -> Optional[int]:
        """Ant id at that position, or None if empty or terminal."""
        unit_id = int(self._cells[route_idx, position])
        return None if unit_id == EMPTY else unit_id

    def room_occupant(self, room: str) -> Optional[int]:
        """Ant holding `room` in room-exclusive mode, else None."""
        return self._room_owner.get(room)

    @property
    def active_count(self) -> int:
        """Ants currently standing on a non-terminal position."""
        return int(np.count_nonzero(self._cells))

    # ── Mutations ─────────────────────────────────────────────────────────────

    def place(self, unit_id: int, route_idx: int, position: int) -> None:
        """Record that `unit_id` now stands at `position` of route `route_idx`."""
        if self.is_terminal(route_idx, position):
            return
        self._cells[route_idx, position] = unit_id
        if self._room_exclusive:
            self._room_owner[self._routes[route_idx].rooms[position]] = unit_id

    def release(self, unit_id: int, route_idx: int, position: int) -> None:
        """Clear the cell `unit_id` was standing on."""
        if self.is_terminal(route_idx, position):
            return
        if self._cells[route_idx, position] == unit_id:
            self._cells[route_idx, position] = EMPTY
        if self._room_exclusive:
            room = self._routes[route_idx].rooms[position]
            if self._room_owner.get(room) == unit_id:
                del self._room_owner[room]

    def advance(self, unit_id: int, route_idx: int, position: int) -> None:
        """Move `unit_id` from `position` to `position + 1` on its route."""
        self.release(unit_id, route_idx, position)
        self.place(unit_id, route_idx, position + 1)

    # ── Inspection & testing ──────────────────────────────────────────────────

    def snapshot(self) -> NDArray[np.int64]:
        """Deep copy of the board. Mutating it does not affect the board."""
        return self._cells.copy()

    @property
    def shape(self) -> tuple[int, int]:
        return self._cells.shape

    def __repr__(self) -> str:
        return (
            f"OccupancyBoard(routes={len(self._routes)}, "
            f"active={self.active_count}, room_exclusive={self._room_exclusive})"
        )
