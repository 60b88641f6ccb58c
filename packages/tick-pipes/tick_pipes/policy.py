"""GrowthPolicy - picks a pipe's next straight run through free cells."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from tick_pipes import vec
from tick_pipes.types import (
    DIRECTIONS,
    ConfigError,
    Coord,
    Direction,
    GridBounds,
    Occupancy,
    RandomSource,
)

logger = logging.getLogger(__name__)

MIN_SEGMENT_LENGTH = 1
MAX_SEGMENT_LENGTH = 10


@dataclass(frozen=True)
class GrowthStep:
    """A validated straight run: ``cells`` excludes ``start`` and ends at ``end``."""

    start: Coord
    end: Coord
    direction: Direction
    length: int
    cells: tuple[Coord, ...]


def path_cells(start: Coord, direction: Direction, length: int) -> tuple[Coord, ...]:
    return tuple(vec.add(start, vec.scale(direction, i)) for i in range(1, length + 1))


def is_path_valid(
    cells: tuple[Coord, ...], bounds: GridBounds, occupancy: Occupancy,
) -> bool:
    for cell in cells:
        if not bounds.contains(cell) or occupancy.is_occupied(cell):
            return False
    return True


class GrowthPolicy:
    """Random straight-segment growth with no-repeat and no-collision rules.

    Each call shuffles the six axis directions (minus the exact direction
    used last, so a pipe never extends the run it just made) and, for each
    candidate in turn, draws a fresh segment length. The first candidate
    whose cells are all in bounds and unclaimed wins.
    """

    def __init__(
        self,
        min_length: int = MIN_SEGMENT_LENGTH,
        max_length: int = MAX_SEGMENT_LENGTH,
    ) -> None:
        if min_length < 1:
            raise ConfigError(f"min_length must be >= 1, got {min_length}")
        if max_length < min_length:
            raise ConfigError(
                f"max_length {max_length} is below min_length {min_length}"
            )
        self._min_length = min_length
        self._max_length = max_length

    @property
    def min_length(self) -> int:
        return self._min_length

    @property
    def max_length(self) -> int:
        return self._max_length

    def candidates(self, last_direction: Direction | None) -> list[Direction]:
        return [d for d in DIRECTIONS if d != last_direction]

    def choose(
        self,
        position: Coord,
        last_direction: Direction | None,
        bounds: GridBounds,
        occupancy: Occupancy,
        rng: RandomSource,
    ) -> GrowthStep | None:
        """Return the first valid step in shuffled order, or None.

        Does not claim anything; see ``reserve``.
        """
        directions = self.candidates(last_direction)
        rng.shuffle(directions)
        for direction in directions:
            length = rng.randint(self._min_length, self._max_length)
            cells = path_cells(position, direction, length)
            if not is_path_valid(cells, bounds, occupancy):
                continue
            return GrowthStep(
                start=position,
                end=cells[-1],
                direction=direction,
                length=length,
                cells=cells,
            )
        logger.debug("No valid direction from %s", position)
        return None

    def reserve(self, step: GrowthStep, occupancy: Occupancy) -> None:
        for cell in step.cells:
            occupancy.set_occupied(cell)
