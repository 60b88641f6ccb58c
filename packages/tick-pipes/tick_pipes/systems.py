"""Frame context and system factories for the pipes host loop."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tick_pipes.controller import SimulationController


@dataclass(frozen=True)
class TickContext:
    """What a system sees of the current frame.

    ``dt`` is the time the frame covers: the nominal frame time for
    ``Engine.run`` and ``Engine.step``, measured wall time for
    ``Engine.run_forever``. ``elapsed`` is the sum of every frame's dt.
    """

    frame: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]


System = Callable[["SimulationController", TickContext], None]


def make_pipes_system(controller: SimulationController) -> System:
    """Return a system that advances ``controller`` by the frame's dt."""

    def pipes_system(_: SimulationController, ctx: TickContext) -> None:
        controller.tick(ctx.dt)

    return pipes_system
