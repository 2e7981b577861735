from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .bus import EVENT_TICK, EventBus

logger = logging.getLogger(__name__)


@dataclass(order=True)
class _Pending:
    due: float
    seq: int
    name: str = field(compare=False)
    payload: Dict[str, Any] = field(compare=False, default_factory=dict)


class NotificationScheduler:
    """Emits bus events after a fixed delay, driven by ``tick`` events.

    Due notifications fire in (due time, insertion order) order. Scheduling
    never blocks the caller; a zero delay emits straight away.
    """

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self.clock = 0.0
        self._queue: List[_Pending] = []
        self._seq = itertools.count()
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def schedule(self, delay: float, name: str, **payload) -> None:
        if delay <= 0.0:
            self.event_bus.emit(name, **payload)
            return
        heapq.heappush(self._queue, _Pending(self.clock + delay, next(self._seq), name, payload))
        logger.debug("scheduled %s in %.3fs", name, delay)

    def on_tick(self, sender, **kwargs):
        dt = float(kwargs.get('dt', 0.0))
        if dt < 0.0:
            return
        self.clock += dt
        self._fire_due()

    def flush(self) -> None:
        """Fire everything still pending, in order, regardless of delay."""
        while self._queue:
            item = heapq.heappop(self._queue)
            self.clock = max(self.clock, item.due)
            self.event_bus.emit(item.name, **item.payload)

    def clear(self) -> None:
        if self._queue:
            logger.debug("dropping %d pending notifications", len(self._queue))
        self._queue.clear()

    def _fire_due(self) -> None:
        # A handler may schedule more work; re-check the head each time.
        while self._queue and self._queue[0].due <= self.clock:
            item = heapq.heappop(self._queue)
            self.event_bus.emit(item.name, **item.payload)
