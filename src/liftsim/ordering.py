from __future__ import annotations

import heapq
from itertools import count
from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

from .passenger import Direction

T = TypeVar("T")


def _identity(floor):
    return floor


class FloorHeap(Generic[T]):
    """Ordered multiset of items keyed by floor, nearest-first along a direction.

    Up heaps surface the lowest floor first and down heaps the highest, which
    mirrors the order a car meets stops while sweeping in that direction.
    Items sharing a floor come out in insertion order.
    """

    def __init__(self, direction: Direction, key: Callable[[T], int] = _identity) -> None:
        self.direction = Direction(direction)
        self._key = key
        self._heap: List[Tuple[int, int, T]] = []
        self._sequence = count()

    def _sort_key(self, item: T) -> int:
        floor = self._key(item)
        return floor if self.direction is Direction.UP else -floor

    def push(self, item: T) -> None:
        heapq.heappush(self._heap, (self._sort_key(item), next(self._sequence), item))

    def peek(self) -> Optional[T]:
        if not self._heap:
            return None
        return self._heap[0][2]

    def peek_floor(self) -> Optional[int]:
        item = self.peek()
        return None if item is None else self._key(item)

    def pop(self) -> T:
        if not self._heap:
            raise IndexError("pop from empty FloorHeap")
        return heapq.heappop(self._heap)[2]

    def count(self, floor: int) -> int:
        return sum(1 for _, _, item in self._heap if self._key(item) == floor)

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[T]:
        for _, _, item in sorted(self._heap, key=lambda entry: entry[:2]):
            yield item

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        floors = [self._key(item) for item in self]
        return f"FloorHeap({self.direction.name}, {floors})"
