"""
tests/test_io.py
────────────────
Parser and formatter tests.

Test groups:
    Group 1 — Parsing the farm grammar
    Group 2 — Parse errors
    Group 3 — Formatting and round-trip echo
"""

from __future__ import annotations

from pathlib import Path

import pytest

from antfarm.control_plane import solve_farm
from antfarm.io import format_farm, format_moves, load_farm, parse_farm, render_solution
from antfarm.shared.errors import FarmParseError, InvalidUnitCountError
from antfarm.shared.models import RoomRole

SAMPLE = """\
# a small farm
3
##start
start 0 0
##end
end 9 9
a 2 1
# comment between rooms
b 2 3

start-a
a-end
start-b
b-end
"""


# ─────────────────────────────────────────────────────────────────────────────
# Group 1 — Parsing
# ─────────────────────────────────────────────────────────────────────────────

class TestParse:

    def test_unit_count(self):
        assert parse_farm(SAMPLE).unit_count == 3

    def test_rooms_in_order_with_roles(self):
        farm = parse_farm(SAMPLE)
        assert farm.room_names == ["start", "end", "a", "b"]
        assert farm.start == "start"
        assert farm.end == "end"
        assert farm.room("a").role == RoomRole.NORMAL

    def test_coordinates(self):
        farm = parse_farm(SAMPLE)
        assert (farm.room("end").x, farm.room("end").y) == (9, 9)
        assert farm.room("b").y == 3

    def test_links_in_order(self):
        farm = parse_farm(SAMPLE)
        assert [link.label for link in farm.links] == [
            "start-a", "a-end", "start-b", "b-end",
        ]
        assert all(link.available for link in farm.links)

    def test_marker_applies_to_next_room_only(self):
        farm = parse_farm("1\n##start\nx 0 0\ny 1 1\n##end\nz 2 2\n")
        roles = [room.role for room in farm.rooms]
        assert roles == [RoomRole.START, RoomRole.NORMAL, RoomRole.END]

    def test_later_marker_replaces_pending_one(self):
        farm = parse_farm("1\n##start\n##end\nx 0 0\n")
        assert farm.start is None
        assert farm.end == "x"

    def test_room_lines_with_wrong_field_count_ignored(self):
        farm = parse_farm("1\nalone\nx 0 0\ntoo many fields 1 2\n")
        assert farm.room_names == ["x"]

    def test_crlf_and_blank_lines(self):
        farm = parse_farm("2\r\n\r\n##start\r\ns 0 0\r\n")
        assert farm.unit_count == 2
        assert farm.start == "s"

    def test_load_farm(self, tmp_path: Path):
        path = tmp_path / "farm.txt"
        path.write_text(SAMPLE, encoding="utf-8")
        assert load_farm(path) == parse_farm(SAMPLE)


# ─────────────────────────────────────────────────────────────────────────────
# Group 2 — Parse errors
# ─────────────────────────────────────────────────────────────────────────────

class TestParseErrors:

    def test_non_integer_unit_count(self):
        with pytest.raises(FarmParseError) as exc_info:
            parse_farm("lots\n")
        assert exc_info.value.line_no == 1

    @pytest.mark.parametrize("text", ["0\n", "-3\n"])
    def test_non_positive_unit_count(self, text: str):
        with pytest.raises(InvalidUnitCountError):
            parse_farm(text)

    def test_missing_unit_count(self):
        with pytest.raises(FarmParseError):
            parse_farm("# only a comment\n\n")

    @pytest.mark.parametrize("link", ["a-", "-b", "a-b-c"])
    def test_malformed_link(self, link: str):
        with pytest.raises(FarmParseError) as exc_info:
            parse_farm(f"1\na 0 0\nb 1 1\n{link}\n")
        assert exc_info.value.line_no == 4

    def test_bad_coordinates(self):
        with pytest.raises(FarmParseError) as exc_info:
            parse_farm("1\nroom x y\n")
        assert "room" in str(exc_info.value)
        assert exc_info.value.line_no == 2

    @pytest.mark.parametrize("count", ["1_0", "\u0663", "3.0", "0x3"])
    def test_unit_count_must_be_plain_digits(self, count: str):
        with pytest.raises(FarmParseError) as exc_info:
            parse_farm(f"{count}\n##start\nS 0 0\n##end\nE 1 1\nS-E\n")
        assert exc_info.value.line_no == 1

    def test_coordinates_must_be_plain_digits(self):
        with pytest.raises(FarmParseError):
            parse_farm("1\nroom 1_0 2\n")

    def test_explicit_plus_sign_accepted(self):
        farm = parse_farm("+3\nroom +1 2\n")
        assert farm.unit_count == 3
        assert farm.room("room").x == 1

    def test_unreadable_path(self, tmp_path: Path):
        with pytest.raises(FarmParseError) as exc_info:
            load_farm(tmp_path)
        assert "cannot read" in str(exc_info.value)

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "farm.txt"
        path.write_bytes(b"1\n##start\nS 0 0\n\xff\xfe 2 2\n")
        with pytest.raises(FarmParseError) as exc_info:
            load_farm(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


# ─────────────────────────────────────────────────────────────────────────────
# Group 3 — Formatting
# ─────────────────────────────────────────────────────────────────────────────

class TestFormat:

    def test_echo(self):
        assert format_farm(parse_farm(SAMPLE)) == [
            "3",
            "##start",
            "start 0 0",
            "##end",
            "end 9 9",
            "a 2 1",
            "b 2 3",
            "start-a",
            "a-end",
            "start-b",
            "b-end",
        ]

    def test_echo_of_echo_is_stable(self):
        once = "\n".join(format_farm(parse_farm(SAMPLE)))
        twice = "\n".join(format_farm(parse_farm(once)))
        assert once == twice

    def test_moves(self):
        solution = solve_farm(parse_farm(SAMPLE))
        assert format_moves(solution.schedule) == [
            "L1-a L2-b",
            "L1-end L2-end L3-a",
            "L3-end",
        ]

    def test_render_solution(self):
        text = "1\n##start\nS 0 0\nA 1 0\n##end\nE 2 0\nS-A\nA-E\n"
        solution = solve_farm(parse_farm(text))
        assert render_solution(solution.farm, solution.schedule) == (
            "1\n##start\nS 0 0\nA 1 0\n##end\nE 2 0\nS-A\nA-E\n\nL1-A\nL1-E\n"
        )
