"""OccupancyGrid - set of integer cells claimed by any pipe."""
from __future__ import annotations

from collections.abc import Iterator

from tick_pipes.types import Coord, cell_key


class OccupancyGrid:
    """Claimed-cell store shared by every pipe of one generation.

    Positions are rounded half up to their cell before lookup, so float
    coordinates that land on a lattice point map to the same key as the
    integer triple. A claimed cell stays claimed until ``clear()``.
    """

    def __init__(self) -> None:
        self._cells: set[Coord] = set()

    def is_occupied(self, pos: tuple[float, ...]) -> bool:
        return cell_key(pos) in self._cells

    def set_occupied(self, pos: tuple[float, ...]) -> None:
        self._cells.add(cell_key(pos))

    def clear(self) -> None:
        self._cells.clear()

    def cells(self) -> frozenset[Coord]:
        return frozenset(self._cells)

    def __contains__(self, pos: object) -> bool:
        if not isinstance(pos, tuple):
            return False
        return self.is_occupied(pos)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Coord]:
        return iter(sorted(self._cells))
