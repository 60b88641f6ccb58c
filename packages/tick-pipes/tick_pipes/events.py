"""PipeEventBus - queued geometry notifications with per-tick flush."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

JOINT_CREATED = "joint_created"
SEGMENT_CREATED = "segment_created"
PIPE_REMOVED = "pipe_removed"
GENERATION_STARTED = "generation_started"


@dataclass(frozen=True)
class PipeEvent:
    name: str
    pipe_id: int | None
    data: dict[str, Any] = field(default_factory=dict)


Handler = Callable[[PipeEvent], None]


class PipeEventBus:
    """Collects events during a tick and hands them to subscribers on flush.

    Events are delivered in publish order. Geometry events are append-only:
    a renderer never receives an update to a joint or segment it already saw,
    only ``pipe_removed`` when the whole pipe goes away.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {}
        self._queue: list[PipeEvent] = []

    @property
    def pending(self) -> int:
        return len(self._queue)

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, pipe_id: int | None = None, **data: Any) -> None:
        self._queue.append(PipeEvent(name, pipe_id, data))

    def flush(self) -> list[PipeEvent]:
        """Deliver queued events and return them.

        Events published by a handler during delivery wait for the next flush.
        If a handler raises, the events behind the failing one go back to the
        front of the queue before the error propagates.
        """
        delivered, self._queue = self._queue, []
        for index, event in enumerate(delivered):
            try:
                for handler in list(self._subscribers.get(event.name, ())):
                    handler(event)
            except Exception:
                self._queue[:0] = delivered[index + 1:]
                raise
        return delivered

    def clear(self) -> None:
        self._queue.clear()
