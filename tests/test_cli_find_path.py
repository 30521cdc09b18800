# tests/test_cli_find_path.py
"""
End-to-end tests for the find_path command line entry point.
"""

from __future__ import annotations

import json
from pathlib import Path

from cli.find_path import EXIT_CONFIG_ERROR, EXIT_FOUND, EXIT_NO_PATH, main

PROJECT_ROOT = Path(__file__).resolve().parents[1]
CONFIG = PROJECT_ROOT / "config" / "grid.yaml"
MAPS = PROJECT_ROOT / "config" / "maps"


def run(capsys, *argv: str):
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


def test_demo_map_path_found(capsys) -> None:
    code, out, _ = run(
        capsys,
        "--map", str(MAPS / "demo.txt"),
        "--config", str(CONFIG),
        "--cells",
        "--start", "0", "0",
        "--target", "19", "11",
        "--render",
    )

    assert code == EXIT_FOUND
    payload = json.loads(out)
    assert payload["success"] is True
    assert payload["reason"] is None
    assert payload["path"][-1] == [19, 11]
    assert payload["cost"] > 0
    assert "*" in payload["render"]
    assert payload["render"].splitlines()[-1].startswith("@")


def test_walled_target_reports_no_path(capsys) -> None:
    code, out, _ = run(
        capsys,
        "--map", str(MAPS / "walled.txt"),
        "--config", str(CONFIG),
        "--cells",
        "--start", "0", "0",
        "--target", "4", "3",
    )

    assert code == EXIT_NO_PATH
    payload = json.loads(out)
    assert payload["success"] is False
    assert payload["reason"] == "no_path_found"
    assert payload["path"] == []


def test_world_point_inputs(capsys, tmp_path) -> None:
    map_path = tmp_path / "strip.txt"
    map_path.write_text("....\n", encoding="utf-8")

    code, out, _ = run(
        capsys,
        "--map", str(map_path),
        "--config", str(CONFIG),
        "--start", "-1.5", "0",
        "--target", "1.5", "0",
    )

    assert code == EXIT_FOUND
    payload = json.loads(out)
    assert payload["path"] == [[1, 0], [2, 0], [3, 0]]
    assert payload["cost"] == 30


def test_max_steps_cutoff(capsys) -> None:
    code, out, _ = run(
        capsys,
        "--map", str(MAPS / "demo.txt"),
        "--config", str(CONFIG),
        "--cells",
        "--start", "0", "0",
        "--target", "19", "11",
        "--max-steps", "3",
    )

    assert code == EXIT_NO_PATH
    assert json.loads(out)["reason"] == "max_steps_exhausted"


def test_missing_map_is_config_error(capsys, tmp_path) -> None:
    code, out, err = run(
        capsys,
        "--map", str(tmp_path / "nope.txt"),
        "--config", str(CONFIG),
        "--start", "0", "0",
        "--target", "1", "1",
    )

    assert code == EXIT_CONFIG_ERROR
    assert out == ""
    assert "Configuration error" in err


def test_invalid_config_is_config_error(capsys, tmp_path) -> None:
    config = tmp_path / "grid.yaml"
    config.write_text("grid:\n  world_size: 10\n  node_radius: -1\n", encoding="utf-8")

    code, _, err = run(
        capsys,
        "--map", str(MAPS / "demo.txt"),
        "--config", str(config),
        "--start", "0", "0",
        "--target", "1", "1",
    )

    assert code == EXIT_CONFIG_ERROR
    assert "node_radius" in err


def test_out_of_range_cells_clamp_to_edge(capsys) -> None:
    code, out, _ = run(
        capsys,
        "--map", str(MAPS / "demo.txt"),
        "--config", str(CONFIG),
        "--cells",
        "--start", "-5", "0",
        "--target", "99", "99",
    )

    assert code == EXIT_FOUND
    assert json.loads(out)["path"][-1] == [19, 11]
