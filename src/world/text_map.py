# src/world/text_map.py
"""
Build a Scene from a hand-written character map.

Each character is one square cell of `cell_size` world units. The first
line of the map is the TOP row (highest y). The map is centred on
`origin`, matching PenaltyGrid's convention.

    #  -> obstacle (layer "unwalkable")
    .  -> open ground, no terrain shape
    other characters -> terrain layer from the legend

Example:

    ..mm..
    ..##..
    gg....
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .scene import Rect, Scene

log = logging.getLogger(__name__)

OBSTACLE_CHAR = "#"
OPEN_CHAR = "."
OBSTACLE_LAYER = "unwalkable"

DEFAULT_LEGEND: Dict[str, str] = {
    "r": "road",
    "g": "grass",
    "m": "mud",
    "w": "shallow_water",
}


@dataclass
class TextMap:
    """A parsed character map and the Scene built from it."""

    rows: List[str]
    cell_size: float
    origin: tuple[float, float]
    scene: Scene = field(default_factory=Scene)

    @property
    def columns(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def world_size(self) -> tuple[float, float]:
        return (self.columns * self.cell_size, len(self.rows) * self.cell_size)

    def cell_center(self, column: int, row_from_bottom: int) -> tuple[float, float]:
        """World centre of a map cell, counted from the bottom-left."""
        width, height = self.world_size
        return (
            self.origin[0] - width / 2 + (column + 0.5) * self.cell_size,
            self.origin[1] - height / 2 + (row_from_bottom + 0.5) * self.cell_size,
        )


def parse_text_map(
    text: str,
    *,
    cell_size: float = 1.0,
    legend: Optional[Mapping[str, str]] = None,
    origin: Sequence[float] = (0.0, 0.0),
) -> TextMap:
    """Parse map text into a TextMap. Rows must all be the same width."""
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size!r}")

    rows = [line.rstrip() for line in text.splitlines() if line.strip()]
    if not rows:
        raise ValueError("text map is empty")

    width = len(rows[0])
    for number, row in enumerate(rows, start=1):
        if len(row) != width:
            raise ValueError(f"text map row {number} has width {len(row)}, expected {width}")

    legend = dict(DEFAULT_LEGEND if legend is None else legend)
    text_map = TextMap(rows=rows, cell_size=float(cell_size), origin=(float(origin[0]), float(origin[1])))

    unknown: set[str] = set()
    for row_index, row in enumerate(rows):
        row_from_bottom = len(rows) - 1 - row_index
        for column, char in enumerate(row):
            if char == OPEN_CHAR:
                continue

            if char == OBSTACLE_CHAR:
                layer = OBSTACLE_LAYER
            elif char in legend:
                layer = legend[char]
            else:
                unknown.add(char)
                continue

            cx, cy = text_map.cell_center(column, row_from_bottom)
            half = text_map.cell_size / 2
            text_map.scene.add(Rect(cx - half, cy - half, cx + half, cy + half, layer))

    if unknown:
        log.warning("text map has characters with no legend entry, treated as open: %s", sorted(unknown))

    return text_map


def load_text_map(
    source: Union[str, Path],
    *,
    cell_size: float = 1.0,
    legend: Optional[Mapping[str, str]] = None,
    origin: Sequence[float] = (0.0, 0.0),
) -> TextMap:
    """Load a map file from disk and parse it."""
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Missing map file: {path}")
    with path.open("r", encoding="utf-8") as f:
        text = f.read()
    return parse_text_map(text, cell_size=cell_size, legend=legend, origin=origin)
