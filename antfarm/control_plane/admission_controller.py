"""
antfarm/control_plane/admission_controller.py
─────────────────────────────────────────────
Admission control: sanity checks on a farm before any graph work.

The admission controller is the first gate of the solve pipeline. It runs
AFTER pydantic validation (which handles field types) and BEFORE route
extraction.

What it rejects
────────────────
  1. Ant count ≤ 0 → InvalidUnitCountError. There is nothing sensible to
     schedule, and the scheduler refuses to start without ants anyway.

What it only warns about
─────────────────────────
  • No room marked ##start, or no room marked ##end.
  • Start and end being the same room.
  • Links that name a room the farm never declared.

None of these are admission errors. A farm without a start still goes
through extraction, the extractor yields no routes, and the orchestration
service raises NoRouteFoundError. That keeps one error for "these ants
can't get there", whatever the reason.
"""

from __future__ import annotations

import logging

from antfarm.shared.errors import InvalidUnitCountError
from antfarm.shared.models import Farm

logger = logging.getLogger(__name__)


def check_unit_count(unit_count: int) -> None:
    """
    Raise InvalidUnitCountError unless unit_count is a positive integer.

    Shared by admit_farm() and the parser, so both reject the same values
    with the same error.
    """
    if isinstance(unit_count, bool) or not isinstance(unit_count, int) or unit_count <= 0:
        raise InvalidUnitCountError(unit_count)


def admit_farm(farm: Farm) -> None:
    """
    Run all admission checks on a Farm.

    Returns None on success (caller proceeds to route extraction).

    Raises:
        InvalidUnitCountError: if farm.unit_count ≤ 0.
    """
    check_unit_count(farm.unit_count)
    _warn_missing_endpoints(farm)
    _warn_dangling_links(farm)


# ── Individual checks ─────────────────────────────────────────────────────────

def _warn_missing_endpoints(farm: Farm) -> None:
    start, end = farm.start, farm.end
    if start is None:
        logger.warning("admit_farm: no room is marked ##start.")
    if end is None:
        logger.warning("admit_farm: no room is marked ##end.")
    if start is not None and start == end:
        logger.warning("admit_farm: start and end are the same room %r.", start)


def _warn_dangling_links(farm: Farm) -> None:
    known = set(farm.room_names)
    for link in farm.links:
        for name in (link.from_room, link.to_room):
            if name not in known:
                logger.warning(
                    "admit_farm: link %s refers to undeclared room %r.",
                    link.label, name,
                )
