"""Deterministic growth -- same seed, same pipes.

Demonstrates:
- All randomness flowing through the injected random source
- Recording the event stream a renderer would receive
- Comparing two runs with the same seed and one with another seed

Run: python -m examples.determinism
"""

import random

from tick_pipes import JOINT_CREATED, SEGMENT_CREATED, PipeEvent, SimulationController


def record(seed: int, ticks: int = 120) -> list[tuple[str, int | None, tuple]]:
    controller = SimulationController(random.Random(seed))
    events: list[tuple[str, int | None, tuple]] = []

    def collect(event: PipeEvent) -> None:
        events.append((event.name, event.pipe_id, tuple(sorted(event.data.items()))))

    controller.bus.subscribe(JOINT_CREATED, collect)
    controller.bus.subscribe(SEGMENT_CREATED, collect)
    for _ in range(ticks):
        controller.tick(1 / 60)
    return events


def main() -> None:
    print("=== Deterministic Growth ===\n")

    run_a = record(seed=42)
    run_b = record(seed=42)
    run_c = record(seed=99)

    print(f"  Run A (seed=42): {len(run_a)} events")
    print(f"  Run B (seed=42): {len(run_b)} events")
    print(f"  Run C (seed=99): {len(run_c)} events")
    print()
    if run_a == run_b:
        print("  Same seed -> IDENTICAL geometry")
    else:
        print("  ERROR: geometry differs despite same seed!")
    if run_a != run_c:
        print("  Different seed -> DIFFERENT geometry (as expected)")
    else:
        print("  WARNING: different seeds produced identical geometry (unlikely)")


if __name__ == "__main__":
    main()
