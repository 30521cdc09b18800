# A* search over PenaltyGrid
# src/nav/pathfinder.py
"""
A* pathfinding over a PenaltyGrid.

- 8-directional movement, octile distance (10 orthogonal / 14 diagonal).
- Each step also pays the movement penalty of the cell being entered.
- Open set is an indexed BinaryHeap keyed by (f_cost, h_cost).
- All per-search state (costs, parents, closed set) lives in a
  SearchState created per call, so the grid itself is never mutated
  and several searches may share one grid.

"No path" is a normal outcome reported through PathfindingResult,
never an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .grid import PenaltyGrid
from .heap import BinaryHeap
from .node import GridCoord, Node, WorldPoint
from .tracing import PathTracer

log = logging.getLogger(__name__)

ORTHOGONAL_COST = 10
DIAGONAL_COST = 14

REASON_NO_PATH = "no_path_found"
REASON_MAX_STEPS = "max_steps_exhausted"
REASON_TARGET_UNWALKABLE = "target_unwalkable"


def octile_distance(node_a: Node, node_b: Node) -> int:
    """Integer octile distance between two cells."""
    dist_x = abs(node_a.grid_x - node_b.grid_x)
    dist_y = abs(node_a.grid_y - node_b.grid_y)

    if dist_x > dist_y:
        return DIAGONAL_COST * dist_y + ORTHOGONAL_COST * (dist_x - dist_y)
    return DIAGONAL_COST * dist_x + ORTHOGONAL_COST * (dist_y - dist_x)


@dataclass
class SearchRecord:
    """Scratch costs for one node during one search."""

    g_cost: int
    h_cost: int
    parent: Optional[int] = None  # node index of the predecessor

    @property
    def f_cost(self) -> int:
        return self.g_cost + self.h_cost


@dataclass
class SearchState:
    """Everything one find_path call mutates, keyed by node index."""

    records: Dict[int, SearchRecord] = field(default_factory=dict)
    closed: Set[int] = field(default_factory=set)

    def priority(self, index: int) -> Tuple[int, int]:
        record = self.records[index]
        return (record.f_cost, record.h_cost)


@dataclass
class PathfindingResult:
    """Structured result for a pathfinding attempt."""

    path: List[Node]
    success: bool
    reason: str | None = None
    cost: int | None = None
    expanded: int = 0
    elapsed_ms: float = 0.0

    def coords(self) -> List[GridCoord]:
        return [node.coord for node in self.path]

    def world_points(self) -> List[WorldPoint]:
        return [node.world_position for node in self.path]


class Pathfinder:
    """
    Runs A* searches against one grid.

    The grid must be built (sampled + blurred) before the first search.
    """

    def __init__(self, grid: PenaltyGrid, tracer: Optional[PathTracer] = None) -> None:
        self.grid = grid
        self.tracer = tracer

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_path(
        self,
        start_pos: Sequence[float],
        target_pos: Sequence[float],
        max_steps: Optional[int] = None,
    ) -> PathfindingResult:
        """Search between two world points (resolved to their nearest cells)."""
        start_node = self.grid.node_from_world_point(start_pos)
        target_node = self.grid.node_from_world_point(target_pos)
        return self.find_path_between(start_node, target_node, max_steps=max_steps)

    def find_path_between(
        self,
        start: Node,
        target: Node,
        max_steps: Optional[int] = None,
    ) -> PathfindingResult:
        """
        Search between two nodes of this grid.

        Returns a PathfindingResult with:
          - path: nodes from the first step after `start` up to `target`
            ([target] when start == target), empty when no path exists
          - success / reason
          - cost: accumulated cost at the target
          - expanded: number of nodes taken off the open set
        """
        if not self.grid.is_ready:
            raise RuntimeError("grid must be built and blurred before searching")
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {max_steps}")

        started = perf_counter()
        result = self._search(start, target, max_steps)
        duration_s = perf_counter() - started
        result.elapsed_ms = duration_s * 1000.0

        if self.tracer is not None:
            self.tracer.record(start=start, target=target, result=result, duration_s=duration_s)
        elif result.success:
            log.debug("Path found: %.3f ms (%d nodes)", result.elapsed_ms, len(result.path))

        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _search(
        self,
        start: Node,
        target: Node,
        max_steps: Optional[int],
    ) -> PathfindingResult:
        if start == target:
            return PathfindingResult(path=[target], success=True, cost=0)

        if not target.walkable:
            return PathfindingResult(path=[], success=False, reason=REASON_TARGET_UNWALKABLE)

        if not start.walkable:
            log.warning("Search starts on unwalkable node %s", start.coord)

        grid = self.grid
        state = SearchState()
        open_set: BinaryHeap[int] = BinaryHeap(key=state.priority, capacity=grid.max_size)

        state.records[start.index] = SearchRecord(g_cost=0, h_cost=octile_distance(start, target))
        open_set.add(start.index)

        expanded = 0
        while len(open_set) > 0:
            if max_steps is not None and expanded >= max_steps:
                return PathfindingResult(
                    path=[], success=False, reason=REASON_MAX_STEPS, expanded=expanded
                )

            current_index = open_set.remove_first()
            state.closed.add(current_index)
            expanded += 1

            if current_index == target.index:
                return PathfindingResult(
                    path=retrace_path(grid, state, start, target),
                    success=True,
                    cost=state.records[current_index].g_cost,
                    expanded=expanded,
                )

            current = grid.node_at_index(current_index)
            current_g = state.records[current_index].g_cost

            for neighbour in grid.get_neighbours(current):
                if not neighbour.walkable or neighbour.index in state.closed:
                    continue

                new_cost = (
                    current_g
                    + octile_distance(current, neighbour)
                    + neighbour.movement_penalty
                )
                in_open = neighbour.index in open_set

                if not in_open or new_cost < state.records[neighbour.index].g_cost:
                    state.records[neighbour.index] = SearchRecord(
                        g_cost=new_cost,
                        h_cost=octile_distance(neighbour, target),
                        parent=current_index,
                    )
                    if not in_open:
                        open_set.add(neighbour.index)
                    else:
                        open_set.update_item(neighbour.index)

        return PathfindingResult(path=[], success=False, reason=REASON_NO_PATH, expanded=expanded)


def retrace_path(
    grid: PenaltyGrid,
    state: SearchState,
    start: Node,
    target: Node,
) -> List[Node]:
    """
    Follow parent links from target back to start (start excluded).

    The walk can take at most one step per search record; anything
    longer means the parent links loop.
    """
    path: List[Node] = []
    index = target.index
    limit = len(state.records)

    while index != start.index:
        if len(path) >= limit:
            raise RuntimeError(f"parent links form a cycle near node index {index}")
        path.append(grid.node_at_index(index))

        parent = state.records[index].parent
        if parent is None:
            raise RuntimeError(f"node index {index} has no parent but is not the start")
        index = parent

    path.reverse()
    return path


def find_path(
    grid: PenaltyGrid,
    start_pos: Sequence[float],
    target_pos: Sequence[float],
    max_steps: Optional[int] = None,
) -> PathfindingResult:
    """One-shot search without tracing."""
    return Pathfinder(grid).find_path(start_pos, target_pos, max_steps=max_steps)
