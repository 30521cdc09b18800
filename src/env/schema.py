# GridSettings dataclasses
# src/env/schema.py

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass
class GridSettings:
    """Resolved grid configuration (config/grid.yaml)."""
    world_size: Tuple[float, float]              # world extent (x, y)
    node_radius: float                           # cell half-size
    blur_size: int = 4                           # box blur kernel radius
    origin: Tuple[float, float] = (0.0, 0.0)     # world centre of the grid
    unwalkable_layers: List[str] = field(default_factory=lambda: ["unwalkable"])
    terrain_penalties: Dict[str, int] = field(default_factory=dict)  # layer -> penalty
    require_terrain: bool = False                # empty terrain table is an error

    @property
    def node_diameter(self) -> float:
        return self.node_radius * 2
