# src/app/render.py
"""
Plain-text view of a PenaltyGrid, optionally with a path and a marker.

Glyphs:
    #  unwalkable
    .  walkable, no penalty
    ~  walkable, penalty > 0
    *  path cell
    @  marker (e.g. the agent's current node)

The top line is the highest y row so the picture matches a text map.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from nav.grid import PenaltyGrid
from nav.node import GridCoord, Node

UNWALKABLE = "#"
OPEN = "."
PENALISED = "~"
PATH = "*"
MARKER = "@"


def render_grid(
    grid: PenaltyGrid,
    path: Optional[Iterable[Node]] = None,
    marker: Optional[Node] = None,
) -> str:
    path_coords: Set[GridCoord] = {node.coord for node in path or ()}
    lines: List[str] = []

    for y in reversed(range(grid.size_y)):
        chars: List[str] = []
        for node in grid.row(y):
            if marker is not None and node == marker:
                chars.append(MARKER)
            elif node.coord in path_coords:
                chars.append(PATH)
            elif not node.walkable:
                chars.append(UNWALKABLE)
            elif node.movement_penalty > 0:
                chars.append(PENALISED)
            else:
                chars.append(OPEN)
        lines.append("".join(chars))

    return "\n".join(lines)


def render_penalties(grid: PenaltyGrid, width: int = 3) -> str:
    """Numeric penalty map, unwalkable cells shown as '#'."""
    lines: List[str] = []
    for y in reversed(range(grid.size_y)):
        cells: List[str] = []
        for node in grid.row(y):
            text = str(node.movement_penalty) if node.walkable else UNWALKABLE
            cells.append(text.rjust(width))
        lines.append(" ".join(cells))
    return "\n".join(lines)
