# src/world/__init__.py
"""
World sampling for grid construction.

Provides:
- ObstacleSampler / TerrainSampler protocols and TerrainHit
- TerrainPenaltyTable: terrain layer -> movement penalty
- Scene + SceneObstacleSampler / SceneTerrainSampler
- parse_text_map / load_text_map: character maps -> Scene
"""

from __future__ import annotations

from .sampling import (
    ObstacleSampler,
    OpenGround,
    TerrainHit,
    TerrainPenaltyTable,
    TerrainSampler,
)
from .scene import Circle, Rect, Scene, SceneObstacleSampler, SceneTerrainSampler
from .text_map import TextMap, load_text_map, parse_text_map

__all__ = [
    "ObstacleSampler",
    "OpenGround",
    "TerrainHit",
    "TerrainPenaltyTable",
    "TerrainSampler",
    "Circle",
    "Rect",
    "Scene",
    "SceneObstacleSampler",
    "SceneTerrainSampler",
    "TextMap",
    "load_text_map",
    "parse_text_map",
]
