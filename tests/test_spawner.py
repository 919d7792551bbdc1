from __future__ import annotations

import random

from engine2048 import empties, empty_grid
from spawner import LARGE_TILE, SMALL_TILE, TileSpawner


def test_spawn_places_one_tile(spawner: TileSpawner):
    grid = empty_grid()
    pos = spawner.spawn(grid)

    assert pos is not None
    r, c = pos
    assert grid[r][c] in (SMALL_TILE, LARGE_TILE)
    assert len(empties(grid)) == 15


def test_spawn_only_uses_empty_cells(spawner: TileSpawner):
    grid = [[2] * 4 for _ in range(4)]
    grid[2][1] = None

    assert spawner.spawn(grid) == (2, 1)
    assert grid[2][1] in (SMALL_TILE, LARGE_TILE)
    assert empties(grid) == []


def test_spawn_on_full_grid_returns_none(spawner: TileSpawner):
    grid = [[2, 4], [8, 16]]
    assert spawner.spawn(grid) is None
    assert grid == [[2, 4], [8, 16]]


def test_spawn_respects_large_chance():
    grid = empty_grid()
    TileSpawner(rng=random.Random(1), large_chance=0.0).spawn(grid)
    assert [v for row in grid for v in row if v is not None] == [SMALL_TILE]

    grid = empty_grid()
    TileSpawner(rng=random.Random(1), large_chance=1.0).spawn(grid)
    assert [v for row in grid for v in row if v is not None] == [LARGE_TILE]


def test_spawn_distribution_is_mostly_twos():
    spawner = TileSpawner(rng=random.Random(1234))
    values = []
    for _ in range(2000):
        grid = empty_grid()
        r, c = spawner.spawn(grid)
        values.append(grid[r][c])

    assert set(values) == {SMALL_TILE, LARGE_TILE}
    fours = values.count(LARGE_TILE) / len(values)
    assert 0.07 < fours < 0.13


def test_start_grid_has_two_tiles(spawner: TileSpawner):
    grid = spawner.start_grid(3, 5)
    assert len(grid) == 3
    assert all(len(row) == 5 for row in grid)
    assert len(empties(grid)) == 13


def test_same_seed_same_start():
    a = TileSpawner(rng=random.Random(99)).start_grid()
    b = TileSpawner(rng=random.Random(99)).start_grid()
    assert a == b
