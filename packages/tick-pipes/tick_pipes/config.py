"""Simulation configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tick_pipes.policy import MAX_SEGMENT_LENGTH, MIN_SEGMENT_LENGTH
from tick_pipes.types import ConfigError, GridBounds

DEFAULT_HALF_EXTENT = 10


class SpawnPolicy(Enum):
    """How a new pipe's random start cell treats cells already claimed."""

    RETRY = "retry"  # redraw until the cell is free
    PERMISSIVE = "permissive"  # accept shared start cells


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration shared by every generation of a run.

    Attributes:
        num_pipes: Pipes spawned per generation.
        bounds: Inclusive cell box the pipes grow in.
        idle_reset_threshold: Seconds of zero growth before a reset.
        min_segment_length: Shortest straight run drawn per attempt.
        max_segment_length: Longest straight run drawn per attempt.
        spawn_policy: Handling of start cells that are already claimed.
    """

    num_pipes: int = 5
    bounds: GridBounds = field(
        default_factory=lambda: GridBounds.cube(DEFAULT_HALF_EXTENT)
    )
    idle_reset_threshold: float = 3.0
    min_segment_length: int = MIN_SEGMENT_LENGTH
    max_segment_length: int = MAX_SEGMENT_LENGTH
    spawn_policy: SpawnPolicy = SpawnPolicy.RETRY

    def __post_init__(self) -> None:
        if self.num_pipes <= 0:
            raise ConfigError(f"num_pipes must be positive, got {self.num_pipes}")
        if self.idle_reset_threshold < 0:
            raise ConfigError("idle_reset_threshold must be >= 0")
        if self.min_segment_length < 1:
            raise ConfigError("min_segment_length must be >= 1")
        if self.max_segment_length < self.min_segment_length:
            raise ConfigError("max_segment_length must be >= min_segment_length")
        if (
            self.spawn_policy is SpawnPolicy.RETRY
            and self.num_pipes > self.bounds.volume
        ):
            raise ConfigError(
                f"{self.num_pipes} pipes cannot get distinct start cells "
                f"in {self.bounds.volume} cells"
            )
