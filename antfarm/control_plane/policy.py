"""
antfarm/control_plane/policy.py
───────────────────────────────
SchedulingPolicy: named presets for how the movement scheduler behaves.

What this is
─────────────
The scheduler has two knobs (room_exclusive, max_admissions_per_turn).
Rather than passing loose flags around, callers pick a named policy and the
orchestration service forwards its fields. The CLI exposes the names.

Policies
─────────
  per-route         Default. Occupancy is checked per route only, as many
                    ants enter per turn as position 1 of their routes
                    allows. Ants on different routes may share a room.

  room-exclusive    Opt-in collision-aware mode. A non-terminal room holds
                    at most one ant across ALL routes. Can stall on
                    pathological farms (SchedulingStalledError).

  single-admission  Per-route occupancy, but at most one ant enters the
                    farm per turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

DEFAULT_POLICY_NAME: str = "per-route"


@dataclass(frozen=True)
class SchedulingPolicy:
    """
    Configuration forwarded to MovementScheduler.

    Fields:
        name                     — identifier used on the command line.
        room_exclusive           — cross-route room exclusion on/off.
        max_admissions_per_turn  — admission cap per turn, None = uncapped.
        description              — one line for --help output.
    """
    name: str
    room_exclusive: bool = False
    max_admissions_per_turn: Optional[int] = None
    description: str = ""


PER_ROUTE = SchedulingPolicy(
    name="per-route",
    description="per-route occupancy; ants on different routes may share a room",
)

ROOM_EXCLUSIVE = SchedulingPolicy(
    name="room-exclusive",
    room_exclusive=True,
    description="one ant per room across all routes (may stall)",
)

SINGLE_ADMISSION = SchedulingPolicy(
    name="single-admission",
    max_admissions_per_turn=1,
    description="per-route occupancy, at most one new ant per turn",
)

_POLICIES: Dict[str, SchedulingPolicy] = {
    policy.name: policy for policy in (PER_ROUTE, ROOM_EXCLUSIVE, SINGLE_ADMISSION)
}


def policy_names() -> List[str]:
    """Known policy names, default first."""
    return list(_POLICIES)


def resolve_policy(name: Optional[str] = None) -> SchedulingPolicy:
    """
    Look a policy up by name. None selects the default.

    Raises:
        ValueError: for an unknown name.
    """
    key = DEFAULT_POLICY_NAME if name is None else name
    try:
        return _POLICIES[key]
    except KeyError:
        raise ValueError(
            f"unknown scheduling policy {name!r}; "
            f"expected one of {', '.join(policy_names())}"
        ) from None
