# penalty grid built from world samplers
# src/nav/grid.py
"""
PenaltyGrid: fixed-size 2D grid of Nodes over a rectangular world region.

Responsibilities:
- Derive grid dimensions from world size and node radius.
- Sample walkability (ObstacleSampler) and terrain penalty
  (TerrainSampler) at each cell centre.
- Smooth penalties with a separable box blur, exactly once per build.
- Answer neighbour and world-point -> node queries.

It does NOT:
- Run searches or hold per-search state (see nav.pathfinder).
- Know what the samplers are backed by.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from world.sampling import ObstacleSampler, TerrainSampler

from .node import Node, WorldPoint

log = logging.getLogger(__name__)

WorldSize = Tuple[float, float]

# Neighbour offsets, dx outer / dy inner. Search tie-breaking depends on this order.
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    if not (dx == 0 and dy == 0)
)


class GridConfigError(ValueError):
    """Grid parameters that cannot produce a usable grid."""


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class PenaltyGrid:
    """
    Grid of Nodes centred on `origin`.

    Use PenaltyGrid.build(...) to get a sampled, blurred grid. The plain
    constructor only validates parameters and computes dimensions.
    """

    def __init__(
        self,
        world_size: Sequence[float],
        node_radius: float,
        obstacle_sampler: ObstacleSampler,
        terrain_sampler: TerrainSampler,
        *,
        blur_size: int = 4,
        origin: Sequence[float] = (0.0, 0.0),
    ) -> None:
        if len(world_size) != 2:
            raise GridConfigError(f"world_size must have 2 components, got {world_size!r}")
        if world_size[0] <= 0 or world_size[1] <= 0:
            raise GridConfigError(f"world_size must be positive, got {tuple(world_size)!r}")
        if node_radius <= 0:
            raise GridConfigError(f"node_radius must be positive, got {node_radius!r}")
        if blur_size < 0:
            raise GridConfigError(f"blur_size must be >= 0, got {blur_size!r}")

        self.world_size: WorldSize = (float(world_size[0]), float(world_size[1]))
        self.node_radius = float(node_radius)
        self.node_diameter = self.node_radius * 2
        self.origin: WorldPoint = (float(origin[0]), float(origin[1]))
        self.blur_size = int(blur_size)

        self.size_x = int(round(self.world_size[0] / self.node_diameter))
        self.size_y = int(round(self.world_size[1] / self.node_diameter))
        if self.size_x <= 0 or self.size_y <= 0:
            raise GridConfigError(
                f"grid dimensions must be positive, got {self.size_x}x{self.size_y} "
                f"(world_size={self.world_size}, node_diameter={self.node_diameter})"
            )

        self._obstacles = obstacle_sampler
        self._terrain = terrain_sampler

        # grid[x][y]
        self._grid: List[List[Node]] = []
        self._blurred = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        world_size: Sequence[float],
        node_radius: float,
        obstacle_sampler: ObstacleSampler,
        terrain_sampler: TerrainSampler,
        *,
        blur_size: int = 4,
        origin: Sequence[float] = (0.0, 0.0),
    ) -> "PenaltyGrid":
        """Validate, sample every cell, then blur penalties once."""
        grid = cls(
            world_size,
            node_radius,
            obstacle_sampler,
            terrain_sampler,
            blur_size=blur_size,
            origin=origin,
        )
        grid.create_grid()
        grid.blur_penalties(grid.blur_size)
        return grid

    def rebuild(self) -> None:
        """Re-sample the world and blur again with the configured blur_size."""
        self.create_grid()
        self.blur_penalties(self.blur_size)

    @property
    def world_bottom_left(self) -> WorldPoint:
        return (
            self.origin[0] - self.world_size[0] / 2,
            self.origin[1] - self.world_size[1] / 2,
        )

    def create_grid(self) -> None:
        """
        Sample walkability and raw penalty for every cell.

        Sampler exceptions propagate; a half-built grid is discarded.
        """
        left, bottom = self.world_bottom_left
        radius = self.node_radius
        diameter = self.node_diameter

        grid: List[List[Node]] = []
        for x in range(self.size_x):
            column: List[Node] = []
            for y in range(self.size_y):
                center = (
                    left + x * diameter + radius,
                    bottom + y * diameter + radius,
                )
                walkable = not self._obstacles.is_blocked(center, radius)

                penalty = 0
                if walkable:
                    hit = self._terrain.penalty_at(center)
                    if hit is not None:
                        penalty = int(hit.penalty)

                column.append(
                    Node(
                        grid_x=x,
                        grid_y=y,
                        world_position=center,
                        walkable=walkable,
                        movement_penalty=penalty,
                        index=x * self.size_y + y,
                    )
                )
            grid.append(column)

        self._grid = grid
        self._blurred = False

        log.debug(
            "PenaltyGrid sampled %dx%d cells (%d walkable)",
            self.size_x,
            self.size_y,
            self.walkable_count(),
        )

    def blur_penalties(self, blur_size: int) -> None:
        """
        Separable box blur of movement penalties (rows, then columns).

        Each axis keeps a running window sum: add the entering cell,
        subtract the leaving one. Out-of-range samples clamp to the edge
        cell. Result per cell: round(window_sum / kernel_size**2).
        """
        if not self._grid:
            raise RuntimeError("blur_penalties() called before create_grid()")
        if self._blurred:
            raise RuntimeError("penalties already blurred for this build; call rebuild()")
        if blur_size < 0:
            raise GridConfigError(f"blur_size must be >= 0, got {blur_size!r}")

        kernel_size = blur_size * 2 + 1
        extents = blur_size
        size_x, size_y = self.size_x, self.size_y
        last_x, last_y = size_x - 1, size_y - 1
        grid = self._grid

        horizontal = [[0] * size_y for _ in range(size_x)]
        vertical = [[0] * size_y for _ in range(size_x)]

        for y in range(size_y):
            total = 0
            for x in range(-extents, extents + 1):
                total += grid[_clamp(x, 0, last_x)][y].movement_penalty
            horizontal[0][y] = total

            for x in range(1, size_x):
                remove_index = _clamp(x - extents - 1, 0, last_x)
                add_index = _clamp(x + extents, 0, last_x)
                total = (
                    total
                    - grid[remove_index][y].movement_penalty
                    + grid[add_index][y].movement_penalty
                )
                horizontal[x][y] = total

        for x in range(size_x):
            total = 0
            for y in range(-extents, extents + 1):
                total += horizontal[x][_clamp(y, 0, last_y)]
            vertical[x][0] = total

            for y in range(1, size_y):
                remove_index = _clamp(y - extents - 1, 0, last_y)
                add_index = _clamp(y + extents, 0, last_y)
                total = total - horizontal[x][remove_index] + horizontal[x][add_index]
                vertical[x][y] = total

        area = kernel_size * kernel_size
        for x in range(size_x):
            for y in range(size_y):
                grid[x][y].movement_penalty = int(round(vertical[x][y] / area))

        self._blurred = True
        log.debug("PenaltyGrid blurred with kernel %d, penalty range %s", kernel_size, self.penalty_range())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        """True once the grid has been sampled and blurred."""
        return bool(self._grid) and self._blurred

    @property
    def max_size(self) -> int:
        return self.size_x * self.size_y

    def get_node(self, x: int, y: int) -> Optional[Node]:
        if 0 <= x < self.size_x and 0 <= y < self.size_y and self._grid:
            return self._grid[x][y]
        return None

    def node_at_index(self, index: int) -> Node:
        x, y = divmod(index, self.size_y)
        node = self.get_node(x, y)
        if node is None:
            raise IndexError(f"node index out of range: {index}")
        return node

    def row(self, y: int) -> List[Node]:
        """Nodes with grid_y == y, ordered by x."""
        if not self._grid:
            raise RuntimeError("row() called before create_grid()")
        if not 0 <= y < self.size_y:
            raise IndexError(f"row out of range: {y}")
        return [column[y] for column in self._grid]

    def nodes(self) -> Iterator[Node]:
        """All nodes, row-major (y outer, x inner) from the bottom row."""
        if not self._grid:
            return
        for y in range(self.size_y):
            for x in range(self.size_x):
                yield self._grid[x][y]

    def get_neighbours(self, node: Node) -> List[Node]:
        """
        In-bounds 8-neighbourhood of `node`.

        No walkability filtering; the search decides what to skip.
        """
        neighbours: List[Node] = []
        for dx, dy in NEIGHBOUR_OFFSETS:
            check_x = node.grid_x + dx
            check_y = node.grid_y + dy
            if 0 <= check_x < self.size_x and 0 <= check_y < self.size_y:
                neighbours.append(self._grid[check_x][check_y])
        return neighbours

    def node_from_world_point(self, point: Sequence[float]) -> Node:
        """
        Nearest cell to a world point.

        Points outside the grid extent clamp to the closest edge cell.
        """
        if not self._grid:
            raise RuntimeError("node_from_world_point() called before create_grid()")

        width, height = self.world_size
        percent_x = (point[0] - self.origin[0] + width / 2) / width
        percent_y = (point[1] - self.origin[1] + height / 2) / height
        percent_x = min(max(percent_x, 0.0), 1.0)
        percent_y = min(max(percent_y, 0.0), 1.0)

        x = int(round((self.size_x - 1) * percent_x))
        y = int(round((self.size_y - 1) * percent_y))
        return self._grid[x][y]

    def penalty_range(self) -> Tuple[int, int]:
        penalties = [node.movement_penalty for node in self.nodes()]
        if not penalties:
            return (0, 0)
        return (min(penalties), max(penalties))

    def walkable_count(self) -> int:
        return sum(1 for node in self.nodes() if node.walkable)
