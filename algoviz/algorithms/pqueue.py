"""
pqueue.py — Stable Min-Priority Queue
======================================
A heapq-backed queue whose ordering matches "append, then stable sort
by priority": equal priorities come out in the order they were pushed.
That keeps every trace reproducible.

Two push flavours, because the algorithms need different semantics:

    push(v, p)               – always adds a new entry; the same value may
                               be queued several times (Dijkstra).
    push_or_decrease(v, p)   – if v is already queued, lower its priority
                               in place when p is smaller, otherwise do
                               nothing; a fresh value is added (Prim).

A lowered entry is ordered as if it had just been pushed.
Removed entries are tombstoned and discarded lazily on pop.
"""

import heapq
import itertools
from typing import Dict, Generic, Hashable, List, Tuple, TypeVar


T = TypeVar("T", bound=Hashable)

_PRIORITY, _SEQ, _VALUE, _ALIVE = range(4)


class PriorityQueue(Generic[T]):

    def __init__(self):
        self._heap: List[list] = []
        self._seq = itertools.count()
        self._live: Dict[T, List[list]] = {}   # value → its live entries, oldest first
        self._size = 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def push(self, value: T, priority: float) -> None:
        entry = [priority, next(self._seq), value, True]
        heapq.heappush(self._heap, entry)
        self._live.setdefault(value, []).append(entry)
        self._size += 1

    def push_or_decrease(self, value: T, priority: float) -> bool:
        """Returns True if the queue changed."""
        entries = self._live.get(value)
        if entries:
            entry = entries[0]
            if priority < entry[_PRIORITY]:
                self._discard(entry)
                self.push(value, priority)
                return True
            return False
        self.push(value, priority)
        return True

    def pop(self) -> Tuple[float, T]:
        """Remove and return (priority, value) with the lowest priority."""
        while self._heap:
            entry = heapq.heappop(self._heap)
            if entry[_ALIVE]:
                self._discard(entry)
                return entry[_PRIORITY], entry[_VALUE]
        raise IndexError("pop from an empty priority queue")

    def _discard(self, entry: list) -> None:
        entry[_ALIVE] = False
        entries = self._live[entry[_VALUE]]
        entries.remove(entry)
        if not entries:
            del self._live[entry[_VALUE]]
        self._size -= 1

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    def items(self) -> List[Tuple[float, T]]:
        """Live (priority, value) pairs in extraction order."""
        alive = sorted((e for e in self._heap if e[_ALIVE]), key=lambda e: (e[_PRIORITY], e[_SEQ]))
        return [(e[_PRIORITY], e[_VALUE]) for e in alive]

    def values(self) -> List[T]:
        return [v for _, v in self.items()]

    def __contains__(self, value: T) -> bool:
        return value in self._live

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __repr__(self) -> str:
        return f"PriorityQueue({self.items()!r})"
