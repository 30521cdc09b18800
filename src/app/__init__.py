# src/app/__init__.py
"""
Application wiring for terrain_nav.

Exposes:
- NavRuntime: settings + samplers -> grid -> pathfinder
- configure_logging: stdout logging for entry points
- render_grid / render_penalties: text views of a grid
"""

from __future__ import annotations

from .logging_config import configure_logging
from .render import render_grid, render_penalties
from .runtime import NavRuntime

__all__ = [
    "NavRuntime",
    "configure_logging",
    "render_grid",
    "render_penalties",
]
