# src/nav/__init__.py
"""
Navigation core: terrain-weighted grid + A*.

Provides:
- Node: grid cell record
- BinaryHeap: indexed min-heap used as the open set
- PenaltyGrid: grid construction, penalty blur, neighbour/world queries
- Pathfinder / find_path: A* search returning a PathfindingResult
- PathTracer: per-search timing and logging
"""

from __future__ import annotations

from .node import Node, GridCoord, WorldPoint
from .heap import BinaryHeap
from .grid import PenaltyGrid, GridConfigError
from .pathfinder import (
    Pathfinder,
    PathfindingResult,
    SearchRecord,
    SearchState,
    find_path,
    octile_distance,
)
from .tracing import PathTracer, PathTraceRecord

__all__ = [
    "Node",
    "GridCoord",
    "WorldPoint",
    "BinaryHeap",
    "PenaltyGrid",
    "GridConfigError",
    "Pathfinder",
    "PathfindingResult",
    "SearchRecord",
    "SearchState",
    "find_path",
    "octile_distance",
    "PathTracer",
    "PathTraceRecord",
]
