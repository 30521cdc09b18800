# 2D scene geometry and the samplers built on it
# src/world/scene.py
"""
Minimal 2D scene used to back the grid samplers.

A Scene is an ordered list of shapes (circles and axis-aligned
rectangles), each tagged with a layer name. Later shapes sit on top of
earlier ones.

Two samplers read it:

- SceneObstacleSampler: a cell is blocked when a disc of the cell's
  radius overlaps any shape on an unwalkable layer.
- SceneTerrainSampler: probes straight down at a point and reports the
  top-most shape whose layer is priced in the TerrainPenaltyTable.

This module does NOT know about grids or searches.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from .sampling import TerrainHit, TerrainPenaltyTable, WorldPoint

DEFAULT_UNWALKABLE_LAYERS = ("unwalkable",)

# Shape edges and grid cell centres come from different float expressions.
# Gaps smaller than this count as touching.
OVERLAP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    layer: str

    def contains(self, point: WorldPoint) -> bool:
        return math.hypot(point[0] - self.x, point[1] - self.y) <= self.radius

    def overlaps_disc(self, center: WorldPoint, radius: float) -> bool:
        # Touching edges do not count as overlap.
        distance = math.hypot(center[0] - self.x, center[1] - self.y)
        return distance < self.radius + radius - OVERLAP_TOLERANCE


@dataclass(frozen=True)
class Rect:
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    layer: str

    def __post_init__(self) -> None:
        if self.max_x < self.min_x or self.max_y < self.min_y:
            raise ValueError(f"Rect has negative extent: {self!r}")

    def contains(self, point: WorldPoint) -> bool:
        return self.min_x <= point[0] <= self.max_x and self.min_y <= point[1] <= self.max_y

    def overlaps_disc(self, center: WorldPoint, radius: float) -> bool:
        nearest_x = min(max(center[0], self.min_x), self.max_x)
        nearest_y = min(max(center[1], self.min_y), self.max_y)
        return math.hypot(center[0] - nearest_x, center[1] - nearest_y) < radius - OVERLAP_TOLERANCE


Shape = Union[Circle, Rect]


@dataclass
class Scene:
    shapes: List[Shape] = field(default_factory=list)

    def add(self, shape: Shape) -> None:
        self.shapes.append(shape)

    def extend(self, shapes: Iterable[Shape]) -> None:
        self.shapes.extend(shapes)

    def layers(self) -> List[str]:
        seen: List[str] = []
        for shape in self.shapes:
            if shape.layer not in seen:
                seen.append(shape.layer)
        return seen

    def on_layers(self, layers: Sequence[str]) -> Iterator[Shape]:
        wanted = set(layers)
        for shape in self.shapes:
            if shape.layer in wanted:
                yield shape

    def __len__(self) -> int:
        return len(self.shapes)


@dataclass
class SceneObstacleSampler:
    """ObstacleSampler over a Scene."""

    scene: Scene
    unwalkable_layers: Sequence[str] = DEFAULT_UNWALKABLE_LAYERS

    def is_blocked(self, center: WorldPoint, radius: float) -> bool:
        return any(
            shape.overlaps_disc(center, radius)
            for shape in self.scene.on_layers(self.unwalkable_layers)
        )


@dataclass
class SceneTerrainSampler:
    """
    TerrainSampler over a Scene.

    Only layers present in `table` are probed; everything else is
    transparent to the downward probe.
    """

    scene: Scene
    table: TerrainPenaltyTable

    def penalty_at(self, point: WorldPoint) -> Optional[TerrainHit]:
        for shape in reversed(self.scene.shapes):
            if shape.layer in self.table and shape.contains(point):
                return TerrainHit(layer=shape.layer, penalty=self.table.penalty_for(shape.layer))
        return None
