"""
antfarm/shared/models.py
────────────────────────
The single source of truth for every data structure in the solver.

Reading guide
-------------
Read top-to-bottom. Each model builds on the ones above it.

  Section 1 — enumerations      (RoomRole)
  Section 2 — the farm graph    (Room, Link, Farm)
  Section 3 — routes            (Route)
  Section 4 — the move log      (Move, Turn, Schedule)

Ownership
---------
A Farm owns its Link instances. The route extractor flips Link.available
in place while it commits edges to routes; that is the only mutation any
model sees after construction. Route is frozen. Schedule is built once by
the movement scheduler and only read afterwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 1: ENUMERATIONS
# ─────────────────────────────────────────────────────────────────────────────

class RoomRole(str, Enum):
    """
    What part a room plays in the farm.

    NORMAL → An ordinary room. Holds at most one ant per route at a time.
    START  → Where every ant begins. Unlimited capacity.
    END    → Where every ant must arrive. Unlimited capacity.
    """
    NORMAL = "normal"
    START = "start"
    END = "end"


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 2: THE FARM GRAPH
# ─────────────────────────────────────────────────────────────────────────────

class Room(BaseModel):
    """
    A vertex of the farm.

    Fields:
        name → Unique identifier, used in links and in the move log.
        x, y → Coordinates from the input. The solver never reads them;
               they are only echoed back by the formatter.
        role → NORMAL, START or END.
    """
    name: str = Field(..., min_length=1, description="Unique room identifier")
    x: int = Field(0, description="Horizontal coordinate (echoed only)")
    y: int = Field(0, description="Vertical coordinate (echoed only)")
    role: RoomRole = Field(RoomRole.NORMAL, description="normal, start or end")


class Link(BaseModel):
    """
    An undirected edge between two rooms with a one-shot availability flag.

    `available` starts True. The route extractor clears it when it commits
    the link to a route and never sets it back, which is how later searches
    avoid edges an earlier route already owns.
    """
    from_room: str = Field(..., description="One end of the link")
    to_room: str = Field(..., description="The other end of the link")
    available: bool = Field(True, description="False once a route has claimed it")

    @property
    def label(self) -> str:
        return f"{self.from_room}-{self.to_room}"


class Farm(BaseModel):
    """
    The parsed input: how many ants, which rooms, which links.

    Order matters for both lists. Room order is preserved for the echo,
    link order decides which shortest route the extractor finds first.

    unit_count is deliberately not range-checked here. The admission
    controller rejects non-positive counts with InvalidUnitCountError, so
    the caller gets a solver error rather than a pydantic ValidationError.
    """
    unit_count: int = Field(..., description="Number of ants to move from start to end")
    rooms: List[Room] = Field(default_factory=list)
    links: List[Link] = Field(default_factory=list)

    # ── Derived properties ────────────────────────────────────────────────────

    @property
    def start(self) -> Optional[str]:
        """Name of the start room. If several rooms claim it, the last wins."""
        return self._last_with_role(RoomRole.START)

    @property
    def end(self) -> Optional[str]:
        """Name of the end room. If several rooms claim it, the last wins."""
        return self._last_with_role(RoomRole.END)

    @property
    def room_names(self) -> List[str]:
        return [room.name for room in self.rooms]

    def room(self, name: str) -> Optional[Room]:
        for room in self.rooms:
            if room.name == name:
                return room
        return None

    def has_room(self, name: Optional[str]) -> bool:
        return name is not None and self.room(name) is not None

    def _last_with_role(self, role: RoomRole) -> Optional[str]:
        found: Optional[str] = None
        for room in self.rooms:
            if room.role == role:
                found = room.name
        return found


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 3: ROUTES
# ─────────────────────────────────────────────────────────────────────────────

class Route(BaseModel):
    """
    One start → end path produced by the extractor.

    rooms[0] is the start room, rooms[-1] the end room. Consecutive rooms
    are joined by a link that no other route uses. Frozen: a route never
    changes after extraction.
    """
    model_config = ConfigDict(frozen=True)

    rooms: Tuple[str, ...] = Field(..., min_length=1)

    @property
    def hop_length(self) -> int:
        """Number of links walked, i.e. turns one ant needs on an empty route."""
        return len(self.rooms) - 1

    @property
    def first(self) -> str:
        return self.rooms[0]

    @property
    def last(self) -> str:
        return self.rooms[-1]

    def edges(self) -> Iterator[Tuple[str, str]]:
        """Consecutive (room, next_room) pairs along the route."""
        for i in range(len(self.rooms) - 1):
            yield self.rooms[i], self.rooms[i + 1]

    def __len__(self) -> int:
        return len(self.rooms)

    def __str__(self) -> str:
        return " -> ".join(self.rooms)


# ─────────────────────────────────────────────────────────────────────────────
# SECTION 4: THE MOVE LOG
# ─────────────────────────────────────────────────────────────────────────────

class Move(BaseModel):
    """One ant entering one room during one turn."""
    unit_id: int = Field(..., ge=1)
    room: str

    @property
    def token(self) -> str:
        """Rendered form used in the output, e.g. 'L3-kitchen'."""
        return f"L{self.unit_id}-{self.room}"


class Turn(BaseModel):
    """All moves made during one discrete turn, in increasing ant id order."""
    number: int = Field(..., ge=1)
    moves: List[Move] = Field(default_factory=list)

    @property
    def line(self) -> str:
        return " ".join(move.token for move in self.moves)


class Schedule(BaseModel):
    """
    The complete output of the movement scheduler.

    Fields:
        routes     → The routes the ants were spread over, in extraction order.
        assignment → ant id (1..N) → index into routes. Fixed before turn 1.
        turns      → Every turn that moved at least one ant, in order.
    """
    routes: List[Route] = Field(default_factory=list)
    assignment: Dict[int, int] = Field(default_factory=dict)
    turns: List[Turn] = Field(default_factory=list)

    @property
    def unit_count(self) -> int:
        return len(self.assignment)

    @property
    def turn_count(self) -> int:
        return len(self.turns)

    @property
    def move_count(self) -> int:
        return sum(len(turn.moves) for turn in self.turns)

    def lines(self) -> List[str]:
        return [turn.line for turn in self.turns]

    def moves_of(self, unit_id: int) -> List[Tuple[int, str]]:
        """(turn number, room) for every move of one ant, in turn order."""
        return [
            (turn.number, move.room)
            for turn in self.turns
            for move in turn.moves
            if move.unit_id == unit_id
        ]
