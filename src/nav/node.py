# grid cell record
# src/nav/node.py
"""
Node: a single cell of a PenaltyGrid.

A Node only carries what is fixed once the grid is built:
- grid coordinates (grid_x, grid_y)
- world position of the cell centre
- walkability
- movement penalty (written during sampling and the blur pass only)

Per-search costs (g/h/f, parent) are NOT stored here; they live in
nav.pathfinder.SearchRecord so that one grid can serve many searches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# (x, y) in world units
WorldPoint = Tuple[float, float]

# (grid_x, grid_y)
GridCoord = Tuple[int, int]


@dataclass(eq=False)
class Node:
    """One grid cell. Identity is the (grid_x, grid_y) pair."""

    grid_x: int
    grid_y: int
    world_position: WorldPoint
    walkable: bool
    movement_penalty: int = 0

    # Flat id inside the owning grid; assigned by PenaltyGrid.
    index: int = -1

    @property
    def coord(self) -> GridCoord:
        return (self.grid_x, self.grid_y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.coord == other.coord

    def __hash__(self) -> int:
        return hash(self.coord)
