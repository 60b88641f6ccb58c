"""Tests for GrowthPolicy direction choice and path validation."""
from __future__ import annotations

import random

import pytest
from tick_pipes import DIRECTIONS, ConfigError, GridBounds, GrowthPolicy, OccupancyGrid
from tick_pipes.policy import is_path_valid, path_cells


class ScriptedRandom:
    """Keeps shuffle order and replays a fixed list of randint results."""

    def __init__(self, lengths: list[int]) -> None:
        self.lengths = list(lengths)
        self.randint_calls: list[tuple[int, int]] = []
        self.shuffled: list[list] = []

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        return self.lengths.pop(0)

    def shuffle(self, x: list) -> None:
        self.shuffled.append(list(x))


BOUNDS = GridBounds.cube(10)


# --- Helpers ---


def test_path_cells_excludes_start_and_ends_at_endpoint():
    cells = path_cells((0, 0, 0), (0, -1, 0), 3)
    assert cells == ((0, -1, 0), (0, -2, 0), (0, -3, 0))


def test_path_valid_in_empty_grid():
    grid = OccupancyGrid()
    assert is_path_valid(path_cells((0, 0, 0), (1, 0, 0), 10), BOUNDS, grid)


def test_path_invalid_when_any_cell_occupied():
    grid = OccupancyGrid()
    grid.set_occupied((0, 0, 4))
    assert not is_path_valid(path_cells((0, 0, 0), (0, 0, 1), 5), BOUNDS, grid)
    assert is_path_valid(path_cells((0, 0, 0), (0, 0, 1), 3), BOUNDS, grid)


def test_path_invalid_when_leaving_bounds():
    grid = OccupancyGrid()
    assert is_path_valid(path_cells((8, 0, 0), (1, 0, 0), 2), BOUNDS, grid)
    assert not is_path_valid(path_cells((8, 0, 0), (1, 0, 0), 3), BOUNDS, grid)


# --- Construction ---


def test_default_length_range():
    policy = GrowthPolicy()
    assert policy.min_length == 1
    assert policy.max_length == 10


@pytest.mark.parametrize("lo, hi", [(0, 5), (3, 2), (-1, -1)])
def test_invalid_length_range_raises(lo, hi):
    with pytest.raises(ConfigError):
        GrowthPolicy(lo, hi)


# --- Candidates ---


def test_all_six_candidates_without_last_direction():
    assert GrowthPolicy().candidates(None) == list(DIRECTIONS)


def test_only_exact_last_direction_is_excluded():
    candidates = GrowthPolicy().candidates((1, 0, 0))
    assert len(candidates) == 5
    assert (1, 0, 0) not in candidates
    assert (-1, 0, 0) in candidates


# --- choose() ---


def test_choose_takes_first_valid_candidate():
    rng = ScriptedRandom([4])
    step = GrowthPolicy().choose((0, 0, 0), None, BOUNDS, OccupancyGrid(), rng)
    assert step is not None
    assert step.direction == (1, 0, 0)
    assert step.length == 4
    assert step.start == (0, 0, 0)
    assert step.end == (4, 0, 0)
    assert step.cells[-1] == step.end
    assert len(step.cells) == 4


def test_choose_draws_length_per_candidate():
    # +X for 5 cells from x=6 leaves the box; -X then draws length 2.
    rng = ScriptedRandom([5, 2])
    step = GrowthPolicy().choose((6, 0, 0), None, BOUNDS, OccupancyGrid(), rng)
    assert step is not None
    assert step.direction == (-1, 0, 0)
    assert step.end == (4, 0, 0)
    assert rng.randint_calls == [(1, 10), (1, 10)]


def test_choose_skips_last_direction():
    rng = ScriptedRandom([1])
    step = GrowthPolicy().choose((0, 0, 0), (1, 0, 0), BOUNDS, OccupancyGrid(), rng)
    assert step is not None
    assert step.direction == (-1, 0, 0)
    assert rng.shuffled == [list(DIRECTIONS[1:])]


def test_choose_skips_occupied_path():
    grid = OccupancyGrid()
    grid.set_occupied((2, 0, 0))
    rng = ScriptedRandom([3, 3])
    step = GrowthPolicy().choose((0, 0, 0), None, BOUNDS, grid, rng)
    assert step is not None
    assert step.direction == (-1, 0, 0)


def test_choose_returns_none_when_boxed_in():
    grid = OccupancyGrid()
    for d in DIRECTIONS:
        grid.set_occupied(d)
    rng = ScriptedRandom([1] * 6)
    assert GrowthPolicy().choose((0, 0, 0), None, BOUNDS, grid, rng) is None
    assert len(rng.randint_calls) == 6


def test_choose_never_mutates_occupancy():
    grid = OccupancyGrid()
    grid.set_occupied((0, 0, 0))
    GrowthPolicy().choose((0, 0, 0), None, BOUNDS, grid, random.Random(3))
    assert grid.cells() == frozenset({(0, 0, 0)})


def test_single_cell_bounds_never_grows():
    bounds = GridBounds((0, 0, 0), (0, 0, 0))
    step = GrowthPolicy().choose(
        (0, 0, 0), None, bounds, OccupancyGrid(), random.Random(1),
    )
    assert step is None


def test_reserve_claims_every_cell_including_endpoint():
    grid = OccupancyGrid()
    policy = GrowthPolicy()
    step = policy.choose((0, 0, 0), None, BOUNDS, grid, ScriptedRandom([3]))
    policy.reserve(step, grid)
    assert grid.cells() == frozenset({(1, 0, 0), (2, 0, 0), (3, 0, 0)})


def test_lengths_stay_in_configured_range():
    policy = GrowthPolicy(2, 3)
    rng = random.Random(11)
    for _ in range(50):
        step = policy.choose((0, 0, 0), None, BOUNDS, OccupancyGrid(), rng)
        assert step is not None
        assert 2 <= step.length <= 3


def test_every_direction_gets_chosen_eventually():
    rng = random.Random(5)
    seen = set()
    for _ in range(200):
        step = GrowthPolicy().choose((0, 0, 0), None, BOUNDS, OccupancyGrid(), rng)
        seen.add(step.direction)
    assert seen == set(DIRECTIONS)
