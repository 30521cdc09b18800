# tools/validate_grid_config.py

import sys           # for exit codes
from pprint import pprint  # for structured printing

# make src discoverable if running as a script
from pathlib import Path
# __file__ is .../tools/validate_grid_config.py
# parents[1] is the project root; append ROOT/src
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT / "src"))

from env.loader import load_grid_settings  # import our loader


def main() -> None:
    """Load and print the resolved grid settings, failing fast on errors."""
    path = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        settings = load_grid_settings(path)
    except Exception as e:                   # catch *any* error for debugging
        print("Grid config validation FAILED:", file=sys.stderr)
        print(repr(e), file=sys.stderr)
        sys.exit(1)                          # non-zero exit: CI will mark as failed

    size_x = int(round(settings.world_size[0] / settings.node_diameter))
    size_y = int(round(settings.world_size[1] / settings.node_diameter))

    print("Grid config validation OK.")
    print("\nGrid:", f"{size_x}x{size_y} cells, blur_size={settings.blur_size}")
    print("\nSettings:")
    pprint(settings)


if __name__ == "__main__":
    main()  # run main() only when script is executed directly
