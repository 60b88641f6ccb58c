"""Engine - frame loop that feeds a SimulationController its dt."""
from __future__ import annotations

import itertools
import logging
import os
import random
import time
from typing import Iterable, Iterator

from tick_pipes.config import SimulationConfig
from tick_pipes.controller import SimulationController
from tick_pipes.events import PipeEventBus
from tick_pipes.systems import System, TickContext, make_pipes_system
from tick_pipes.types import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_FRAME_RATE = 60
MAX_FRAME_DT = 0.25

Hook = System


class Engine:
    """Seeds a run, owns its controller and calls it once per frame.

    The controller is registered as the first system; systems added later
    run after it within the same frame and see that frame's geometry.

    Idle time only advances by the dt each frame reports, so ``run(n)``
    covers exactly ``n / frame_rate`` simulated seconds. ``run_forever``
    reports wall time instead, capped at ``max_frame_dt`` per frame.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        frame_rate: int = DEFAULT_FRAME_RATE,
        seed: int | None = None,
        bus: PipeEventBus | None = None,
        max_frame_dt: float = MAX_FRAME_DT,
    ) -> None:
        if frame_rate <= 0:
            raise ConfigError(f"frame_rate must be positive, got {frame_rate}")
        if max_frame_dt <= 0:
            raise ConfigError(f"max_frame_dt must be positive, got {max_frame_dt}")
        self._frame_rate = frame_rate
        self._frame_dt = 1.0 / frame_rate
        self._max_frame_dt = max_frame_dt
        self._frame = 0
        self._elapsed = 0.0
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        self._seed = seed
        self._controller = SimulationController(
            random.Random(seed), config=config, bus=bus,
        )
        self._systems: list[System] = [make_pipes_system(self._controller)]
        logger.debug("Engine seeded with %d at %d frames/s", seed, frame_rate)

    @property
    def controller(self) -> SimulationController:
        return self._controller

    @property
    def bus(self) -> PipeEventBus:
        return self._controller.bus

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def frame_rate(self) -> int:
        return self._frame_rate

    @property
    def frame_dt(self) -> float:
        """Nominal seconds per frame."""
        return self._frame_dt

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def step(self, dt: float | None = None) -> None:
        """Run a single frame, by default of nominal length."""
        self._stop_requested = False
        self._frame_with(self._frame_dt if dt is None else dt)

    def run(self, frames: int) -> None:
        """Run ``frames`` nominal frames back to back, without sleeping."""
        self._session(itertools.repeat(self._frame_dt, frames))

    def run_forever(self) -> None:
        """Run in real time until a system calls ``ctx.request_stop()``."""
        self._session(self._wall_clock())

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self, dt: float) -> TickContext:
        return TickContext(self._frame, dt, self._elapsed, self._request_stop)

    def _frame_with(self, dt: float) -> None:
        self._frame += 1
        self._elapsed += dt
        ctx = self._context(dt)
        for system in self._systems:
            system(self._controller, ctx)
            if self._stop_requested:
                break

    def _session(self, dts: Iterable[float]) -> None:
        self._stop_requested = False
        start = self._context(0.0)
        for hook in self._start_hooks:
            hook(self._controller, start)

        for dt in dts:
            self._frame_with(dt)
            if self._stop_requested:
                break

        stop = self._context(0.0)
        for hook in self._stop_hooks:
            hook(self._controller, stop)

    def _wall_clock(self) -> Iterator[float]:
        """Yield each frame's dt, sleeping off whatever the frame left over.

        The first frame has nothing to measure against and gets the nominal dt.
        """
        last = time.monotonic()
        yield self._frame_dt
        while True:
            spare = self._frame_dt - (time.monotonic() - last)
            if spare > 0:
                time.sleep(spare)
            now = time.monotonic()
            dt = now - last
            if dt > self._max_frame_dt:
                logger.debug("Frame %d took %.3fs, capped", self._frame + 1, dt)
                dt = self._max_frame_dt
            last = now
            yield dt
