# src/cli/find_path.py

import argparse
import json
import sys
from typing import List, Optional, Sequence

from app.logging_config import configure_logging
from app.runtime import NavRuntime
from env.loader import load_grid_settings
from nav.grid import GridConfigError
from nav.node import WorldPoint
from world.text_map import load_text_map

EXIT_FOUND = 0
EXIT_CONFIG_ERROR = 1
EXIT_NO_PATH = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Terrain-weighted A* over a text map."
    )
    parser.add_argument("--map", required=True, help="Path to a character map file")
    parser.add_argument(
        "--config",
        default=None,
        help="Grid settings YAML (default: config/grid.yaml or $TERRAIN_NAV_CONFIG)",
    )
    parser.add_argument("--start", nargs=2, type=float, required=True, metavar=("X", "Y"))
    parser.add_argument("--target", nargs=2, type=float, required=True, metavar=("X", "Y"))
    parser.add_argument(
        "--cells",
        action="store_true",
        help="Interpret --start/--target as grid cell indices instead of world points",
    )
    parser.add_argument("--max-steps", type=int, default=None, help="Node expansion cutoff")
    parser.add_argument("--render", action="store_true", help="Include a text rendering")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g. INFO, DEBUG)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = load_grid_settings(args.config)
        # One map character per grid cell.
        text_map = load_text_map(args.map, cell_size=settings.node_diameter, origin=settings.origin)
        settings.world_size = text_map.world_size
        runtime = NavRuntime.from_scene(settings, text_map.scene)
    except (GridConfigError, FileNotFoundError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    start = tuple(args.start)
    target = tuple(args.target)
    if args.cells:
        start = _cell_to_world(runtime, start)
        target = _cell_to_world(runtime, target)

    result = runtime.request_path(start, target, max_steps=args.max_steps)

    output = {
        "success": result.success,
        "reason": result.reason,
        "cost": result.cost,
        "expanded": result.expanded,
        "elapsed_ms": round(result.elapsed_ms, 3),
        "path": [list(coord) for coord in result.coords()],
    }
    if args.render:
        output["render"] = runtime.render(marker=start)

    print(json.dumps(output, indent=2, sort_keys=True))
    return EXIT_FOUND if result.success else EXIT_NO_PATH


def _cell_to_world(runtime: NavRuntime, cell: Sequence[float]) -> WorldPoint:
    x, y = int(cell[0]), int(cell[1])
    node = runtime.grid.get_node(x, y)
    if node is None:
        # Out-of-range cells clamp like world points do.
        x = min(max(x, 0), runtime.grid.size_x - 1)
        y = min(max(y, 0), runtime.grid.size_y - 1)
        node = runtime.grid.get_node(x, y)
    return node.world_position


if __name__ == "__main__":
    sys.exit(main())
