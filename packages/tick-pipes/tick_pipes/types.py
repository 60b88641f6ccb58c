"""Shared types and protocols for tick-pipes."""
from __future__ import annotations

import math
from collections.abc import MutableSequence
from dataclasses import dataclass
from typing import Any, Protocol

Coord = tuple[int, int, int]
Direction = Coord

# Fixed order: +X, -X, +Y, -Y, +Z, -Z
DIRECTIONS: tuple[Direction, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)


class ConfigError(ValueError):
    """Raised when a simulation is constructed with invalid parameters."""


def cell_key(pos: tuple[float, ...]) -> Coord:
    """Map a position to its grid cell, rounding half up on every axis."""
    if len(pos) != 3:
        raise ValueError(f"Expected a 3D position, got {pos!r}")
    x, y, z = pos
    return (math.floor(x + 0.5), math.floor(y + 0.5), math.floor(z + 0.5))


class Occupancy(Protocol):
    def is_occupied(self, pos: tuple[float, ...]) -> bool: ...
    def set_occupied(self, pos: tuple[float, ...]) -> None: ...


class RandomSource(Protocol):
    """The slice of ``random.Random`` the simulation draws from."""

    def randint(self, a: int, b: int) -> int: ...
    def shuffle(self, x: MutableSequence[Any]) -> None: ...


@dataclass(frozen=True)
class GridBounds:
    """Axis-aligned box of cells, inclusive on both ends of every axis."""

    minimum: Coord
    maximum: Coord

    def __post_init__(self) -> None:
        if len(self.minimum) != 3 or len(self.maximum) != 3:
            raise ConfigError(
                f"Bounds must be 3D, got {self.minimum!r}..{self.maximum!r}"
            )
        for c in (*self.minimum, *self.maximum):
            if not isinstance(c, int) or isinstance(c, bool):
                raise ConfigError(
                    f"Bounds must be integer cells, got "
                    f"{self.minimum!r}..{self.maximum!r}"
                )
        for lo, hi in zip(self.minimum, self.maximum):
            if lo > hi:
                raise ConfigError(
                    f"Inverted bounds: {self.minimum!r} > {self.maximum!r}"
                )

    @classmethod
    def cube(cls, half_extent: int) -> GridBounds:
        return cls((-half_extent,) * 3, (half_extent,) * 3)

    @property
    def volume(self) -> int:
        return math.prod(hi - lo + 1 for lo, hi in zip(self.minimum, self.maximum))

    def contains(self, cell: tuple[float, ...]) -> bool:
        return all(
            lo <= c <= hi for c, lo, hi in zip(cell, self.minimum, self.maximum)
        )

    def random_cell(self, rng: RandomSource) -> Coord:
        x0, y0, z0 = self.minimum
        x1, y1, z1 = self.maximum
        return (rng.randint(x0, x1), rng.randint(y0, y1), rng.randint(z0, z1))
