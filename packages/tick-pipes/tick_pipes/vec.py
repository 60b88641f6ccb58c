"""Integer 3-vector helpers operating on Coord tuples."""
from __future__ import annotations

from tick_pipes.types import Coord


def add(a: Coord, b: Coord) -> Coord:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Coord, b: Coord) -> Coord:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Coord, s: int) -> Coord:
    return (v[0] * s, v[1] * s, v[2] * s)


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) + abs(a[2] - b[2])
