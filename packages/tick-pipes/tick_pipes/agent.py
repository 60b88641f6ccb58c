"""PipeAgent - growth state and emitted geometry of a single pipe."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from tick_pipes import vec
from tick_pipes.config import SpawnPolicy
from tick_pipes.events import JOINT_CREATED, SEGMENT_CREATED, PipeEventBus
from tick_pipes.policy import GrowthPolicy
from tick_pipes.types import (
    ConfigError,
    Coord,
    Direction,
    GridBounds,
    Occupancy,
    RandomSource,
)

logger = logging.getLogger(__name__)

_MAX_SPAWN_DRAWS_PER_CELL = 16


def _first_free_cell(bounds: GridBounds, occupancy: Occupancy) -> Coord:
    (x0, y0, z0), (x1, y1, z1) = bounds.minimum, bounds.maximum
    for x in range(x0, x1 + 1):
        for y in range(y0, y1 + 1):
            for z in range(z0, z1 + 1):
                if not occupancy.is_occupied((x, y, z)):
                    return (x, y, z)
    raise ConfigError(f"No free start cell left in {bounds}")


@dataclass(frozen=True)
class Segment:
    start: Coord
    end: Coord
    direction: Direction

    @property
    def length(self) -> int:
        return vec.manhattan(self.start, self.end)


class PipeAgent:
    """One pipe: current head cell, last direction, and its geometry so far.

    The head cell is always claimed in the occupancy it was created against.
    Joints and segments only ever grow; nothing already emitted is changed.
    """

    def __init__(
        self,
        pipe_id: int,
        start: Coord,
        occupancy: Occupancy,
        rng: RandomSource,
        policy: GrowthPolicy | None = None,
        bus: PipeEventBus | None = None,
    ) -> None:
        self._pipe_id = pipe_id
        self._rng = rng
        self._policy = policy if policy is not None else GrowthPolicy()
        self._bus = bus
        self._position = start
        self._last_direction: Direction | None = None
        self._joints: list[Coord] = []
        self._segments: list[Segment] = []

        occupancy.set_occupied(start)
        self._add_joint(start)

    @classmethod
    def spawn(
        cls,
        pipe_id: int,
        bounds: GridBounds,
        occupancy: Occupancy,
        rng: RandomSource,
        policy: GrowthPolicy | None = None,
        bus: PipeEventBus | None = None,
        spawn_policy: SpawnPolicy = SpawnPolicy.RETRY,
    ) -> PipeAgent:
        """Create a pipe at a uniformly random cell inside ``bounds``."""
        start = bounds.random_cell(rng)
        if spawn_policy is SpawnPolicy.RETRY:
            attempts = 1
            while occupancy.is_occupied(start):
                if attempts >= _MAX_SPAWN_DRAWS_PER_CELL * bounds.volume:
                    start = _first_free_cell(bounds, occupancy)
                    break
                start = bounds.random_cell(rng)
                attempts += 1
        elif occupancy.is_occupied(start):
            logger.debug("Pipe %d shares start cell %s", pipe_id, start)
        logger.debug("Spawned pipe %d at %s", pipe_id, start)
        return cls(pipe_id, start, occupancy, rng, policy=policy, bus=bus)

    @property
    def pipe_id(self) -> int:
        return self._pipe_id

    @property
    def position(self) -> Coord:
        return self._position

    @property
    def last_direction(self) -> Direction | None:
        return self._last_direction

    @property
    def joints(self) -> tuple[Coord, ...]:
        return tuple(self._joints)

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def growth_count(self) -> int:
        return len(self._segments)

    @property
    def cell_length(self) -> int:
        return sum(seg.length for seg in self._segments)

    def path(self) -> list[Coord]:
        return list(self._joints)

    def tick(self, bounds: GridBounds, occupancy: Occupancy) -> bool:
        """Try to grow one straight segment. Returns True if the pipe grew."""
        step = self._policy.choose(
            self._position, self._last_direction, bounds, occupancy, self._rng,
        )
        if step is None:
            return False

        self._policy.reserve(step, occupancy)
        segment = Segment(step.start, step.end, step.direction)
        self._segments.append(segment)
        if self._bus is not None:
            self._bus.publish(
                SEGMENT_CREATED, self._pipe_id, start=step.start, end=step.end,
            )
        self._add_joint(step.end)
        self._position = step.end
        self._last_direction = step.direction
        return True

    def _add_joint(self, position: Coord) -> None:
        self._joints.append(position)
        if self._bus is not None:
            self._bus.publish(JOINT_CREATED, self._pipe_id, position=position)

    def __repr__(self) -> str:
        return (
            f"PipeAgent(pipe_id={self._pipe_id}, position={self._position}, "
            f"segments={len(self._segments)})"
        )
