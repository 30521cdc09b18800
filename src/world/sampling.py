# sampler interfaces consumed by nav.grid
# src/world/sampling.py
"""
World sampling interfaces for grid construction.

The grid never looks at geometry itself. It asks two collaborators:

- ObstacleSampler.is_blocked(center, radius) -> bool
    "Is there anything unwalkable within `radius` of `center`?"

- TerrainSampler.penalty_at(point) -> TerrainHit | None
    "Which terrain layer lies under `point`, and what does it cost?"
    None means the downward probe hit nothing; the cell costs 0.

Both must be deterministic for a fixed world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol, Tuple

WorldPoint = Tuple[float, float]


@dataclass(frozen=True)
class TerrainHit:
    """Result of a terrain probe."""

    layer: str
    penalty: int


class ObstacleSampler(Protocol):
    def is_blocked(self, center: WorldPoint, radius: float) -> bool:
        ...


class TerrainSampler(Protocol):
    def penalty_at(self, point: WorldPoint) -> Optional[TerrainHit]:
        ...


@dataclass
class TerrainPenaltyTable:
    """
    Mapping from terrain layer name to integer movement penalty.

    Layers missing from the table cost 0, so a terrain region that is
    probed but not priced behaves like plain ground.
    """

    penalties: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, int]) -> "TerrainPenaltyTable":
        return cls(penalties={str(k): int(v) for k, v in raw.items()})

    def penalty_for(self, layer: str) -> int:
        return self.penalties.get(layer, 0)

    def layers(self) -> list[str]:
        return list(self.penalties)

    def __contains__(self, layer: object) -> bool:
        return layer in self.penalties

    def __len__(self) -> int:
        return len(self.penalties)


class OpenGround:
    """Sampler that reports no obstacles and no terrain anywhere."""

    def is_blocked(self, center: WorldPoint, radius: float) -> bool:
        return False

    def penalty_at(self, point: WorldPoint) -> Optional[TerrainHit]:
        return None
