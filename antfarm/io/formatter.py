"""
antfarm/io/formatter.py
───────────────────────
Renders a farm and its move log back to text.

Output layout (what the lem-in checkers expect):

    <ant count>
    ##start
    <name> <x> <y>
    ...
    <from>-<to>
    ...
    <blank line>
    L1-a L2-b
    L1-c L2-d
"""

from __future__ import annotations

from typing import List

from antfarm.shared.models import Farm, RoomRole, Schedule

_ROLE_MARKERS = {
    RoomRole.START: "##start",
    RoomRole.END: "##end",
}


def format_farm(farm: Farm) -> List[str]:
    """Echo of the parsed input: ant count, rooms with markers, links."""
    lines = [str(farm.unit_count)]
    for room in farm.rooms:
        marker = _ROLE_MARKERS.get(room.role)
        if marker is not None:
            lines.append(marker)
        lines.append(f"{room.name} {room.x} {room.y}")
    lines.extend(link.label for link in farm.links)
    return lines


def format_moves(schedule: Schedule) -> List[str]:
    """One line per turn, 'L<id>-<room>' tokens separated by single spaces."""
    return schedule.lines()


def render_solution(farm: Farm, schedule: Schedule) -> str:
    """Farm echo, one blank line, then the move log. Ends with a newline."""
    lines = format_farm(farm) + [""] + format_moves(schedule)
    return "\n".join(lines) + "\n"
