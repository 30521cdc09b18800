# src/world/testing/__init__.py
"""Test doubles for world samplers."""

from __future__ import annotations

from .fakes import CellFieldSampler, FailingSampler, grid_from_rows

__all__ = ["CellFieldSampler", "FailingSampler", "grid_from_rows"]
