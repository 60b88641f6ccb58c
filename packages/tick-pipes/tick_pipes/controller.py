"""SimulationController - ticks every pipe and restarts stalled generations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from tick_pipes.agent import PipeAgent
from tick_pipes.config import SimulationConfig
from tick_pipes.events import GENERATION_STARTED, PIPE_REMOVED, PipeEventBus
from tick_pipes.grid import OccupancyGrid
from tick_pipes.policy import GrowthPolicy
from tick_pipes.types import GridBounds, RandomSource

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    GROWING = "growing"
    RESETTING = "resetting"


@dataclass
class GenerationStats:
    """Counters for one generation, from spawn to reset."""

    generation: int
    ticks: int = 0
    growth_steps: int = 0
    cells_claimed: int = 0


class SimulationController:
    """Owns the pipes and the occupancy grid of a run.

    ``tick(dt)`` grows every pipe once, in spawn order, so two pipes can
    never claim the same cell within a tick. When no pipe has grown for
    longer than ``config.idle_reset_threshold`` seconds of accumulated
    ``dt``, the generation is torn down and a fresh one is spawned before
    ``tick`` returns.

    Events go to ``bus`` and are flushed at the end of every tick and of
    every explicit ``reset()``. Spawn
    events of the first generation are delivered on the first tick, so
    subscribers added right after construction still see them.
    """

    def __init__(
        self,
        rng: RandomSource,
        config: SimulationConfig | None = None,
        bus: PipeEventBus | None = None,
    ) -> None:
        self._config = config if config is not None else SimulationConfig()
        self._rng = rng
        self._bus = bus if bus is not None else PipeEventBus()
        self._policy = GrowthPolicy(
            self._config.min_segment_length, self._config.max_segment_length,
        )
        self._grid = OccupancyGrid()
        self._agents: list[PipeAgent] = []
        self._next_pipe_id = 0
        self._idle_time = 0.0
        self._tick_count = 0
        self._generation = 0
        self._state = SimulationState.GROWING
        self._stats = GenerationStats(generation=0)
        self._spawn_generation()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def bounds(self) -> GridBounds:
        return self._config.bounds

    @property
    def grid(self) -> OccupancyGrid:
        return self._grid

    @property
    def bus(self) -> PipeEventBus:
        return self._bus

    @property
    def agents(self) -> tuple[PipeAgent, ...]:
        return tuple(self._agents)

    @property
    def idle_time(self) -> float:
        return self._idle_time

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def stats(self) -> GenerationStats:
        return self._stats

    def tick(self, dt: float) -> bool:
        """Advance every pipe once. Returns True if any pipe grew."""
        self._tick_count += 1
        self._stats.ticks += 1
        cells_before = len(self._grid)
        grew = False
        for agent in self._agents:
            if agent.tick(self.bounds, self._grid):
                grew = True
                self._stats.growth_steps += 1
        self._stats.cells_claimed += len(self._grid) - cells_before

        if grew:
            self._idle_time = 0.0
        else:
            self._idle_time += dt
            if self._idle_time > self._config.idle_reset_threshold:
                logger.debug(
                    "Idle for %.3fs at tick %d", self._idle_time, self._tick_count,
                )
                self._reset()

        self._bus.flush()
        return grew

    def reset(self) -> GenerationStats:
        """Discard every pipe, clear the grid and spawn a new generation.

        The removal and spawn events are delivered before this returns.
        Returns the stats of the generation that was discarded.
        """
        finished = self._reset()
        self._bus.flush()
        return finished

    def _reset(self) -> GenerationStats:
        self._state = SimulationState.RESETTING
        finished = self._stats
        for agent in self._agents:
            self._bus.publish(PIPE_REMOVED, agent.pipe_id)
        self._agents.clear()
        self._grid.clear()
        self._idle_time = 0.0
        self._generation += 1
        logger.info(
            "Simulation reset: generation %d ended after %d ticks "
            "(%d growth steps, %d cells)",
            finished.generation, finished.ticks,
            finished.growth_steps, finished.cells_claimed,
        )
        self._spawn_generation()
        self._state = SimulationState.GROWING
        return finished

    def _spawn_generation(self) -> None:
        self._stats = GenerationStats(generation=self._generation)
        self._bus.publish(GENERATION_STARTED, generation=self._generation)
        for _ in range(self._config.num_pipes):
            agent = PipeAgent.spawn(
                self._next_pipe_id,
                self.bounds,
                self._grid,
                self._rng,
                policy=self._policy,
                bus=self._bus,
                spawn_policy=self._config.spawn_policy,
            )
            self._next_pipe_id += 1
            self._agents.append(agent)
        self._stats.cells_claimed = len(self._grid)
