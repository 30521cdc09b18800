# tests/test_nav_tracing.py
"""
Tests for PathTracer: buffering, log lines and summaries.
"""

from __future__ import annotations

import logging
from types import SimpleNamespace

from nav.pathfinder import Pathfinder
from nav.tracing import PathTracer
from world.testing.fakes import grid_from_rows


def test_tracer_records_each_search(caplog) -> None:
    grid = grid_from_rows(["....", ".##.", "...."])
    tracer = PathTracer()
    pathfinder = Pathfinder(grid, tracer=tracer)

    with caplog.at_level(logging.INFO, logger="nav.search"):
        found = pathfinder.find_path_between(grid.get_node(0, 0), grid.get_node(3, 2))
        missing = pathfinder.find_path_between(grid.get_node(0, 0), grid.get_node(1, 1))

    assert found.success and not missing.success

    records = tracer.get_records()
    assert len(records) == 2
    assert records[0].start == (0, 0)
    assert records[0].target == (3, 2)
    assert records[0].success
    assert records[0].cost == found.cost
    assert records[0].path_length == len(found.path)
    assert records[1].reason == "target_unwalkable"

    lines = [r.getMessage() for r in caplog.records if r.name == "nav.search"]
    assert len(lines) == 2
    assert lines[0].startswith("path_search start=(0, 0) target=(3, 2) success=True")


def test_summary_counts_outcomes() -> None:
    grid = grid_from_rows(["..#", "..#", "..."])
    tracer = PathTracer()
    pathfinder = Pathfinder(grid, tracer=tracer)

    pathfinder.find_path_between(grid.get_node(0, 0), grid.get_node(1, 1))
    pathfinder.find_path_between(grid.get_node(0, 0), grid.get_node(2, 2))

    summary = tracer.summary()
    assert summary["searches"] == 2
    assert summary["found"] == 1
    assert summary["not_found"] == 1
    assert summary["success_rate"] == 0.5
    assert summary["mean_duration_ms"] >= 0.0


def test_empty_summary() -> None:
    assert PathTracer().summary() == {
        "searches": 0,
        "found": 0,
        "not_found": 0,
        "success_rate": 0.0,
        "mean_duration_ms": 0.0,
    }


def test_buffer_is_bounded() -> None:
    grid = grid_from_rows(["...."])
    tracer = PathTracer(max_records=3)
    pathfinder = Pathfinder(grid, tracer=tracer)

    for _ in range(5):
        pathfinder.find_path_between(grid.get_node(0, 0), grid.get_node(3, 0))

    assert len(tracer.get_records()) == 3
    tracer.clear()
    assert tracer.get_records() == []


def test_broken_result_does_not_raise(caplog) -> None:
    grid = grid_from_rows([".."])
    tracer = PathTracer()

    # path=None makes len() fail while the record is built
    broken = SimpleNamespace(success=True, reason=None, path=None, cost=None, expanded=0)
    with caplog.at_level(logging.ERROR, logger="nav.search"):
        tracer.record(start=grid.get_node(0, 0), target=grid.get_node(1, 0), result=broken, duration_s=0.0)

    assert tracer.get_records() == []
    assert any("Failed to build PathTraceRecord" in r.getMessage() for r in caplog.records)
