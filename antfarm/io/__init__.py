"""
antfarm/io — the text collaborators around the solver.

Public API:
    parse_farm / parse_farm_lines / load_farm  — text → Farm
    format_farm / format_moves / render_solution — Farm + Schedule → text
"""

from antfarm.io.parser import load_farm, parse_farm, parse_farm_lines
from antfarm.io.formatter import format_farm, format_moves, render_solution

__all__ = [
    "load_farm",
    "parse_farm",
    "parse_farm_lines",
    "format_farm",
    "format_moves",
    "render_solution",
]
