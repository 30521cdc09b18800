# tests/test_nav_blur.py
"""
Tests for the separable box blur applied to movement penalties.

Expected values come from a direct 2D clamp-to-edge window sum, which the
sliding-window implementation must reproduce exactly.
"""

from __future__ import annotations

import random
from typing import List

import pytest

from nav.grid import PenaltyGrid
from world.testing.fakes import CellFieldSampler, grid_from_rows


def penalties(grid: PenaltyGrid) -> List[List[int]]:
    """Penalty field as field[x][y]."""
    return [
        [grid.get_node(x, y).movement_penalty for y in range(grid.size_y)]
        for x in range(grid.size_x)
    ]


def brute_force_blur(field: List[List[int]], blur_size: int) -> List[List[int]]:
    size_x = len(field)
    size_y = len(field[0])
    kernel = blur_size * 2 + 1
    out = [[0] * size_y for _ in range(size_x)]
    for x in range(size_x):
        for y in range(size_y):
            total = 0
            for i in range(-blur_size, blur_size + 1):
                for j in range(-blur_size, blur_size + 1):
                    sx = min(max(x + i, 0), size_x - 1)
                    sy = min(max(y + j, 0), size_y - 1)
                    total += field[sx][sy]
            out[x][y] = int(round(total / (kernel * kernel)))
    return out


def random_field_sampler(seed: int, size_x: int, size_y: int) -> CellFieldSampler:
    rng = random.Random(seed)
    sampler = CellFieldSampler(world_size=(float(size_x), float(size_y)), node_radius=0.5)
    for x in range(size_x):
        for y in range(size_y):
            sampler.penalties[(x, y)] = rng.randint(0, 40)
    return sampler


def test_uniform_field_is_unchanged() -> None:
    grid = grid_from_rows(["555555"] * 4, blur_size=2)
    assert all(v == 5 for column in penalties(grid) for v in column)


def test_zero_field_stays_zero() -> None:
    grid = grid_from_rows(["......"] * 5, blur_size=3)
    assert all(v == 0 for column in penalties(grid) for v in column)


def test_blur_size_zero_is_identity() -> None:
    rows = ["1234", "5678", "9012"]
    raw = grid_from_rows(rows, blur_size=0)
    assert penalties(raw)[0] == [9, 5, 1]
    assert penalties(raw)[3] == [2, 8, 4]


def test_spike_spreads_to_its_neighbourhood() -> None:
    grid = grid_from_rows(
        [
            ".....",
            ".....",
            "..9..",
            ".....",
            ".....",
        ],
        blur_size=1,
    )
    field = penalties(grid)

    for x in range(5):
        for y in range(5):
            expected = 1 if max(abs(x - 2), abs(y - 2)) <= 1 else 0
            assert field[x][y] == expected, (x, y)


def test_bottom_row_is_blurred_too() -> None:
    grid = grid_from_rows(
        [
            ".....",
            ".....",
            ".9...",
        ],
        blur_size=1,
    )
    # The spike is counted twice by the clamped window: 18 / 9.
    assert grid.get_node(1, 0).movement_penalty == 2
    assert grid.get_node(1, 1).movement_penalty == 1
    assert grid.get_node(4, 0).movement_penalty == 0


def test_upper_edge_clamps_to_last_cell() -> None:
    grid = grid_from_rows(["....9"], blur_size=1)
    field = penalties(grid)
    assert [column[0] for column in field] == [0, 0, 0, 3, 6]


@pytest.mark.parametrize(
    "seed, size_x, size_y, blur_size",
    [
        (1, 7, 5, 1),
        (2, 7, 5, 2),
        (3, 4, 3, 4),   # kernel wider than the grid
        (4, 12, 9, 3),
        (5, 1, 6, 2),
    ],
)
def test_matches_direct_window_sum(seed, size_x, size_y, blur_size) -> None:
    sampler = random_field_sampler(seed, size_x, size_y)
    raw = [
        [sampler.penalties[(x, y)] for y in range(size_y)]
        for x in range(size_x)
    ]

    grid = PenaltyGrid.build(sampler.world_size, 0.5, sampler, sampler, blur_size=blur_size)

    assert penalties(grid) == brute_force_blur(raw, blur_size)


def test_blocked_cells_contribute_zero_penalty() -> None:
    grid = grid_from_rows(["9#9"], blur_size=1)
    # window for x=1: 9 + 0 + 9 = 18, times 3 rows of the single clamped row
    assert grid.get_node(1, 0).movement_penalty == 6
    assert not grid.get_node(1, 0).walkable
