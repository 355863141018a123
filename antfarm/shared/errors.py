"""
antfarm/shared/errors.py
────────────────────────
Every failure the solver can report, in one place.

Error taxonomy
──────────────
  LeminError               — common base. The CLI catches this one type and
                             prints "ERROR: <message>".
  InvalidUnitCountError    — ant count ≤ 0. Rejected before any graph work.
  NoRouteFoundError        — route extraction returned nothing while ants
                             still have to cross. The scheduler is never run.
  MalformedRouteError      — a route hop that is not a real link. Means the
                             extractor is broken; never recoverable.
  SchedulingStalledError   — a turn produced no move while ants remain.
                             Only reachable under the room-exclusive policy.
  FarmParseError           — the input text does not follow the farm grammar.

There are no retries anywhere: every operation is pure computation over
finite data, so all of these are terminal. The caller either receives a
complete schedule or one of these exceptions.
"""

from __future__ import annotations

from typing import Optional, Sequence


class LeminError(Exception):
    """Base class for every error raised by the solver."""


class InvalidUnitCountError(LeminError):
    """
    Raised when the number of ants is not a positive integer.

    Attributes:
        unit_count: The rejected value.
    """

    def __init__(self, unit_count: int) -> None:
        self.unit_count = unit_count
        super().__init__(
            f"invalid number of ants: {unit_count} (must be a positive integer)"
        )


class NoRouteFoundError(LeminError):
    """
    Raised when start and end are not connected by any available link.

    Also covers a missing start or end room, and start == end: in all of
    these cases the extractor yields an empty route list.

    Attributes:
        start: Start room name, or None when no room is marked ##start.
        end:   End room name, or None when no room is marked ##end.
    """

    def __init__(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
        message: str = "",
    ) -> None:
        self.start = start
        self.end = end
        if not message:
            if start is None or end is None:
                missing = "start" if start is None else "end"
                message = f"no route found: farm has no {missing} room"
            else:
                message = f"no route found from {start!r} to {end!r}"
        super().__init__(message)


class MalformedRouteError(LeminError):
    """
    Raised when a route contains a hop that does not correspond to a link,
    or does not run from start to end.

    Attributes:
        rooms:  The offending route.
        reason: What exactly is wrong with it.
    """

    def __init__(self, rooms: Sequence[str], reason: str) -> None:
        self.rooms = tuple(rooms)
        self.reason = reason
        super().__init__(f"malformed route {'-'.join(self.rooms)}: {reason}")


class SchedulingStalledError(LeminError):
    """
    Raised when a simulated turn moves nobody although ants are still en route.

    Attributes:
        turn:      1-based number of the turn that stalled.
        remaining: Number of ants that had not finished.
    """

    def __init__(self, turn: int, remaining: int) -> None:
        self.turn = turn
        self.remaining = remaining
        super().__init__(
            f"scheduling stalled at turn {turn} with {remaining} ant(s) "
            f"still en route"
        )


class FarmParseError(LeminError):
    """
    Raised by the parser for input that does not follow the farm grammar.

    Attributes:
        line_no: 1-based line number, or None for whole-file problems.
        reason:  Human-readable explanation.
    """

    def __init__(self, reason: str, line_no: Optional[int] = None) -> None:
        self.reason = reason
        self.line_no = line_no
        prefix = f"line {line_no}: " if line_no is not None else ""
        super().__init__(prefix + reason)
