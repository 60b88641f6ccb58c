"""Headless run -- grow pipes without a renderer and report each generation.

Demonstrates:
- Building an Engine with a custom SimulationConfig
- Subscribing to geometry events the way a renderer would
- Watching generations reset once growth stalls

Run: python -m examples.headless
"""

import logging

from tick_pipes import (
    GENERATION_STARTED,
    PIPE_REMOVED,
    SEGMENT_CREATED,
    Engine,
    GridBounds,
    PipeEvent,
    SimulationConfig,
)


class SegmentCounter:
    """Stands in for a renderer: tracks live segments per pipe."""

    def __init__(self) -> None:
        self.live: dict[int, int] = {}

    def on_segment(self, event: PipeEvent) -> None:
        self.live[event.pipe_id] = self.live.get(event.pipe_id, 0) + 1

    def on_removed(self, event: PipeEvent) -> None:
        self.live.pop(event.pipe_id, None)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    print("=== Headless pipes ===\n")

    config = SimulationConfig(num_pipes=3, bounds=GridBounds.cube(4))
    engine = Engine(config=config, frame_rate=60, seed=7)

    counter = SegmentCounter()
    engine.bus.subscribe(SEGMENT_CREATED, counter.on_segment)
    engine.bus.subscribe(PIPE_REMOVED, counter.on_removed)
    engine.bus.subscribe(
        GENERATION_STARTED,
        lambda e: print(f"  generation {e.data['generation']} started"),
    )

    # Ten simulated seconds at 60 frames per second.
    engine.run(600)

    controller = engine.controller
    print(f"\nDone after {controller.tick_count} ticks, generation {controller.generation}.")
    for agent in controller.agents:
        print(
            f"  pipe {agent.pipe_id}: {counter.live.get(agent.pipe_id, 0)} segments, "
            f"{agent.cell_length} cells, head at {agent.position}"
        )
    print(f"  occupied cells: {len(controller.grid)} / {config.bounds.volume}")


if __name__ == "__main__":
    main()
