"""tick-pipes - Self-avoiding pipe growth in a bounded 3D grid."""
from __future__ import annotations

from tick_pipes.agent import PipeAgent, Segment
from tick_pipes.config import SimulationConfig, SpawnPolicy
from tick_pipes.controller import GenerationStats, SimulationController, SimulationState
from tick_pipes.engine import Engine
from tick_pipes.events import (
    GENERATION_STARTED,
    JOINT_CREATED,
    PIPE_REMOVED,
    SEGMENT_CREATED,
    PipeEvent,
    PipeEventBus,
)
from tick_pipes.grid import OccupancyGrid
from tick_pipes.policy import GrowthPolicy, GrowthStep
from tick_pipes.systems import TickContext, make_pipes_system
from tick_pipes.types import (
    DIRECTIONS,
    ConfigError,
    Coord,
    Direction,
    GridBounds,
    Occupancy,
    RandomSource,
    cell_key,
)

__all__ = [
    "Coord",
    "Direction",
    "DIRECTIONS",
    "GridBounds",
    "Occupancy",
    "RandomSource",
    "ConfigError",
    "cell_key",
    "OccupancyGrid",
    "GrowthPolicy",
    "GrowthStep",
    "PipeAgent",
    "Segment",
    "PipeEvent",
    "PipeEventBus",
    "JOINT_CREATED",
    "SEGMENT_CREATED",
    "PIPE_REMOVED",
    "GENERATION_STARTED",
    "SimulationConfig",
    "SpawnPolicy",
    "SimulationController",
    "SimulationState",
    "GenerationStats",
    "TickContext",
    "Engine",
    "make_pipes_system",
]
