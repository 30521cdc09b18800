# src/env/__init__.py
"""Grid configuration loading."""

from __future__ import annotations

from .loader import load_grid_settings, settings_from_mapping
from .schema import GridSettings

__all__ = ["GridSettings", "load_grid_settings", "settings_from_mapping"]
