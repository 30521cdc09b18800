# src/app/runtime.py
"""
NavRuntime: wires settings, samplers, grid and pathfinder together.

Typical use:

    settings = load_grid_settings()
    text_map = load_text_map("config/maps/demo.txt", cell_size=1.0)
    runtime = NavRuntime.from_scene(settings, text_map.scene)
    result = runtime.request_path((-3.0, -3.0), (4.0, 2.5))

The grid is built once at construction; call rebuild() after the world
changes.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from env.schema import GridSettings
from nav.grid import GridConfigError, PenaltyGrid
from nav.node import Node
from nav.pathfinder import Pathfinder, PathfindingResult
from nav.tracing import PathTracer
from world.sampling import ObstacleSampler, TerrainPenaltyTable, TerrainSampler
from world.scene import Scene, SceneObstacleSampler, SceneTerrainSampler

from .render import render_grid

log = logging.getLogger(__name__)


class NavRuntime:
    """Owns one PenaltyGrid and serves path requests against it."""

    def __init__(
        self,
        settings: GridSettings,
        obstacle_sampler: ObstacleSampler,
        terrain_sampler: TerrainSampler,
        *,
        tracer: Optional[PathTracer] = None,
    ) -> None:
        if settings.require_terrain and not settings.terrain_penalties:
            raise GridConfigError("require_terrain is set but terrain_penalties is empty.")

        self.settings = settings
        self.grid = PenaltyGrid.build(
            settings.world_size,
            settings.node_radius,
            obstacle_sampler,
            terrain_sampler,
            blur_size=settings.blur_size,
            origin=settings.origin,
        )
        self.tracer = tracer or PathTracer()
        self.pathfinder = Pathfinder(self.grid, tracer=self.tracer)
        self.last_path: List[Node] = []

        log.info(
            "NavRuntime ready: grid %dx%d, %d walkable, penalty range %s",
            self.grid.size_x,
            self.grid.size_y,
            self.grid.walkable_count(),
            self.grid.penalty_range(),
        )

    @classmethod
    def from_scene(
        cls,
        settings: GridSettings,
        scene: Scene,
        *,
        tracer: Optional[PathTracer] = None,
    ) -> "NavRuntime":
        table = TerrainPenaltyTable.from_mapping(settings.terrain_penalties)
        return cls(
            settings,
            SceneObstacleSampler(scene, unwalkable_layers=tuple(settings.unwalkable_layers)),
            SceneTerrainSampler(scene, table),
            tracer=tracer,
        )

    def request_path(
        self,
        start: Sequence[float],
        target: Sequence[float],
        max_steps: Optional[int] = None,
    ) -> PathfindingResult:
        """Find a path between two world points and remember it for rendering."""
        result = self.pathfinder.find_path(start, target, max_steps=max_steps)
        self.last_path = list(result.path)
        return result

    def rebuild(self) -> None:
        """Re-sample the world; previous paths are dropped."""
        self.grid.rebuild()
        self.last_path = []

    def render(self, marker: Optional[Sequence[float]] = None) -> str:
        marker_node = self.grid.node_from_world_point(marker) if marker is not None else None
        return render_grid(self.grid, path=self.last_path, marker=marker_node)
