# src/env/loader.py

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from nav.grid import GridConfigError

from .schema import GridSettings


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"

# Environment override for the settings file location.
CONFIG_ENV_VAR = "TERRAIN_NAV_CONFIG"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML config file and require a mapping at the top."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _pair(value: Any, name: str) -> Tuple[float, float]:
    """Accept a scalar (square extent) or a 2-item sequence."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (float(value), float(value))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            return (float(value[0]), float(value[1]))
        except (TypeError, ValueError) as exc:
            raise GridConfigError(f"{name} must be numeric, got {value!r}") from exc
    raise GridConfigError(f"{name} must be a number or [x, y], got {value!r}")


def default_config_path() -> Path:
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return CONFIG_ROOT / "grid.yaml"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def settings_from_mapping(raw: Dict[str, Any]) -> GridSettings:
    """Build and validate GridSettings from an already-parsed mapping."""
    grid_raw = raw.get("grid")
    if not isinstance(grid_raw, dict):
        raise GridConfigError("grid config must define a 'grid' mapping.")

    if "world_size" not in grid_raw:
        raise GridConfigError("grid.world_size is required.")
    if "node_radius" not in grid_raw:
        raise GridConfigError("grid.node_radius is required.")

    penalties_raw = raw.get("terrain_penalties") or {}
    if not isinstance(penalties_raw, dict):
        raise GridConfigError("terrain_penalties must be a mapping of layer -> penalty.")

    try:
        terrain_penalties = {str(layer): int(value) for layer, value in penalties_raw.items()}
        node_radius = float(grid_raw["node_radius"])
        blur_size = int(grid_raw.get("blur_size", 4))
    except (TypeError, ValueError) as exc:
        raise GridConfigError(f"invalid grid config value: {exc}") from exc

    unwalkable = grid_raw.get("unwalkable_layers", ["unwalkable"])
    if isinstance(unwalkable, str):
        unwalkable = [unwalkable]

    settings = GridSettings(
        world_size=_pair(grid_raw["world_size"], "grid.world_size"),
        node_radius=node_radius,
        blur_size=blur_size,
        origin=_pair(grid_raw.get("origin", [0.0, 0.0]), "grid.origin"),
        unwalkable_layers=[str(layer) for layer in unwalkable],
        terrain_penalties=terrain_penalties,
        require_terrain=bool(raw.get("require_terrain", False)),
    )

    _validate_settings(settings)
    return settings


def load_grid_settings(path: Optional[Union[str, Path]] = None) -> GridSettings:
    """Main entry point: returns validated GridSettings."""
    config_path = Path(path) if path is not None else default_config_path()
    return settings_from_mapping(_load_yaml(config_path))


def _validate_settings(settings: GridSettings) -> None:
    """Reject settings that cannot produce a usable grid."""
    width, height = settings.world_size
    if width <= 0 or height <= 0:
        raise GridConfigError(f"world_size must be positive, got {settings.world_size}")
    if settings.node_radius <= 0:
        raise GridConfigError(f"node_radius must be positive, got {settings.node_radius}")
    if settings.blur_size < 0:
        raise GridConfigError(f"blur_size must be >= 0, got {settings.blur_size}")

    # Same rounding PenaltyGrid uses; catch a zero-sized grid before sampling.
    size_x = int(round(width / settings.node_diameter))
    size_y = int(round(height / settings.node_diameter))
    if size_x <= 0 or size_y <= 0:
        raise GridConfigError(
            f"world_size {settings.world_size} with node_radius {settings.node_radius} "
            f"gives an empty {size_x}x{size_y} grid"
        )

    for layer, penalty in settings.terrain_penalties.items():
        if penalty < 0:
            raise GridConfigError(f"terrain penalty for {layer!r} must be >= 0, got {penalty}")

    if settings.require_terrain and not settings.terrain_penalties:
        raise GridConfigError("require_terrain is set but terrain_penalties is empty.")

    overlap = set(settings.unwalkable_layers) & set(settings.terrain_penalties)
    if overlap:
        raise GridConfigError(f"layers cannot be both unwalkable and priced terrain: {sorted(overlap)}")
