"""
Event queue and priority-ordered dispatch.

Events are popped by (ts, priority, arrival): wall-clock order first, then
source priority Tick < PipeSpawned < Jump for events due at the same
instant, then insertion order. This is the only ordering guarantee of the
fold, and exact frame outcomes depend on it.
"""

import heapq
import math
from typing import Iterable, List, Tuple

from ..core.events import Event

_Entry = Tuple[float, int, int, Event]


class EventQueue:
    """
    Min-heap of pending events.

    Usage:
        queue = EventQueue()
        queue.extend(spawns)
        for ev in queue.drain_until(16):
            state = reducer.apply(state, ev)
    """

    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._heap: List[_Entry] = []
        self._arrival = 0
        self.extend(events)

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, event: Event) -> None:
        """
        Queue an event.

        Raises:
            ValueError: If the event ts is NaN
        """
        if math.isnan(event.ts):
            raise ValueError(f"{event.type} event has no usable ts")
        heapq.heappush(self._heap, (event.ts, event.priority, self._arrival, event))
        self._arrival += 1

    def extend(self, events: Iterable[Event]) -> None:
        for event in events:
            self.push(event)

    def pop(self) -> Event:
        return heapq.heappop(self._heap)[3]

    def drain_until(self, ts: float) -> List[Event]:
        """
        Pop every event due at or before ts, in dispatch order.
        """
        due = []
        while self._heap and self._heap[0][0] <= ts:
            due.append(self.pop())
        return due
