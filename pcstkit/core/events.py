"""
Time-ordered event queue for the growth simulation.

Two kinds of events share one binary heap: an edge becoming tight and a
cluster saturating. Events are never deleted in place. Each edge and cluster
owns a version counter and every event carries the version it was scheduled
with, so an outdated entry is recognised and discarded when it reaches the
front of the queue.

Ties are broken with a tolerance: among all events whose time is within
``tolerance`` of the earliest one, edge events come before saturation events
and lower target indices come first.
"""

import heapq
import math
from enum import IntEnum
from typing import List, NamedTuple, Tuple


class EventKind(IntEnum):
    EDGE_TIGHT = 0
    SATURATION = 1


class Event(NamedTuple):
    time: float
    kind: EventKind
    target: int  # edge index or cluster representative
    version: int


class EventQueue:
    """Min-heap of :class:`Event` with tolerance-aware tie-breaking.

    Events within ``tolerance`` of the earliest queued time form a batch that
    is moved to a second heap ordered by ``(kind, target)`` and served from
    there. Events pushed while a batch is open go into it when they fall
    inside its time window.
    """

    def __init__(self, tolerance: float = 1e-9):
        self.tolerance = tolerance
        self._heap: List[Event] = []
        self._batch: List[Tuple[int, int, Event]] = []
        self._horizon = -math.inf

    def __len__(self) -> int:
        return len(self._heap) + len(self._batch)

    def __bool__(self) -> bool:
        return bool(self._heap) or bool(self._batch)

    def push(self, event: Event):
        if self._batch and event.time <= self._horizon:
            heapq.heappush(self._batch, (event.kind, event.target, event))
        else:
            heapq.heappush(self._heap, event)

    def pop(self) -> Event:
        """Remove and return the next event.

        Raises:
            IndexError: if the queue is empty.
        """
        if not self._batch:
            first = heapq.heappop(self._heap)
            self._horizon = first.time + self.tolerance
            self._batch.append((first.kind, first.target, first))
            while self._heap and self._heap[0].time <= self._horizon:
                event = heapq.heappop(self._heap)
                heapq.heappush(self._batch, (event.kind, event.target, event))
        return heapq.heappop(self._batch)[2]
