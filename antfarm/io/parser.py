"""
antfarm/io/parser.py
────────────────────
Reads the farm text format into a Farm.

Grammar
───────
    <ant count>
    ##start
    <name> <x> <y>
    ##end
    <name> <x> <y>
    <name> <x> <y>
    <name>-<name>
    # any other line starting with '#' is a comment

Line rules, in the order they are applied:
  • Blank lines are skipped.
  • "##start" / "##end" mark the NEXT room line. A second marker before
    that room replaces the first.
  • Other lines starting with '#' are comments.
  • The first remaining line is the ant count.
  • A line containing '-' is a link. Room names and coordinates therefore
    cannot contain '-', so negative coordinates are not expressible.
  • Anything else is a room line. Lines without exactly three fields are
    ignored; non-integer coordinates are an error.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from antfarm.control_plane.admission_controller import check_unit_count
from antfarm.shared.errors import FarmParseError
from antfarm.shared.models import Farm, Link, Room, RoomRole

logger = logging.getLogger(__name__)

START_MARKER = "##start"
END_MARKER = "##end"
COMMENT_PREFIX = "#"
LINK_SEPARATOR = "-"

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)


def parse_farm_lines(lines: Iterable[str]) -> Farm:
    """
    Parse an iterable of lines (trailing newlines allowed) into a Farm.

    Raises:
        FarmParseError:        malformed ant count, link or coordinates,
                               or no ant count at all.
        InvalidUnitCountError: ant count ≤ 0.
    """
    unit_count: Optional[int] = None
    rooms: List[Room] = []
    links: List[Link] = []
    pending_role = RoomRole.NORMAL

    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if line == START_MARKER:
            pending_role = RoomRole.START
            continue
        if line == END_MARKER:
            pending_role = RoomRole.END
            continue
        if line.startswith(COMMENT_PREFIX):
            continue

        if unit_count is None:
            unit_count = _parse_unit_count(line, line_no)
            continue

        if LINK_SEPARATOR in line:
            links.append(_parse_link(line, line_no))
            continue

        room = _parse_room(line, line_no, pending_role)
        if room is None:
            continue
        rooms.append(room)
        pending_role = RoomRole.NORMAL

    if unit_count is None:
        raise FarmParseError("missing number of ants")

    logger.debug(
        "parse_farm: %d ant(s), %d room(s), %d link(s).",
        unit_count, len(rooms), len(links),
    )
    return Farm(unit_count=unit_count, rooms=rooms, links=links)


def parse_farm(text: str) -> Farm:
    """Parse the whole farm description from a string."""
    return parse_farm_lines(text.splitlines())


def load_farm(path: Union[str, Path]) -> Farm:
    """
    Read and parse a farm file.

    Raises:
        FarmParseError: the file cannot be read or is not valid UTF-8,
                        plus everything parse_farm_lines raises.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            farm = parse_farm_lines(handle)
    except UnicodeDecodeError as exc:
        raise FarmParseError(f"{path} is not valid UTF-8") from exc
    except OSError as exc:
        raise FarmParseError(f"cannot read {path}: {exc.strerror or exc}") from exc
    logger.info("load_farm: read %s (%d rooms, %d links).",
                path, len(farm.rooms), len(farm.links))
    return farm


# ── Line parsers ──────────────────────────────────────────────────────────────

def _parse_unit_count(line: str, line_no: int) -> int:
    try:
        unit_count = _parse_int(line.strip())
    except ValueError:
        raise FarmParseError(
            f"invalid number of ants: {line.strip()!r}", line_no
        ) from None
    check_unit_count(unit_count)
    return unit_count


def _parse_link(line: str, line_no: int) -> Link:
    parts = line.strip().split(LINK_SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise FarmParseError(f"malformed link {line.strip()!r}", line_no)
    return Link(from_room=parts[0], to_room=parts[1])


def _parse_room(line: str, line_no: int, role: RoomRole) -> Optional[Room]:
    parts = line.split()
    if len(parts) != 3:
        logger.debug("parse_farm: line %d ignored: %r", line_no, line)
        return None
    name, x, y = parts
    try:
        coords = _parse_int(x), _parse_int(y)
    except ValueError:
        raise FarmParseError(
            f"invalid coordinates for room {name!r}: {x!r} {y!r}", line_no
        ) from None
    return Room(name=name, x=coords[0], y=coords[1], role=role)


def _parse_int(text: str) -> int:
    # int() alone also takes "1_0" and non-ASCII digits.
    if not _INTEGER.fullmatch(text):
        raise ValueError(text)
    return int(text)
