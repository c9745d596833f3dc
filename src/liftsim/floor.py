from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from itertools import count
from typing import Deque, Iterator, Tuple

from .passenger import Direction, Passenger


@dataclass
class Floor:
    """Represents a floor with directional queues."""

    number: int
    max_floor: int
    random_state: random.Random
    id_sequence: Iterator[int] = field(default_factory=count)
    up_waiting: Deque[Passenger] = field(default_factory=deque)
    down_waiting: Deque[Passenger] = field(default_factory=deque)
    destinations: Tuple[int, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.destinations = tuple(
            floor for floor in range(1, self.max_floor + 1) if floor != self.number
        )

    def generate_passenger(self) -> Passenger:
        destination = self.random_state.choice(self.destinations)
        return Passenger(
            passenger_id=next(self.id_sequence),
            start_floor=self.number,
            destination_floor=destination,
        )

    def enqueue(self, passenger: Passenger) -> None:
        if passenger.destination_floor > passenger.start_floor:
            self.up_waiting.append(passenger)
        else:
            self.down_waiting.append(passenger)

    def queue_for(self, direction: Direction) -> Deque[Passenger]:
        return self.up_waiting if direction == Direction.UP else self.down_waiting

    def has_waiting(self) -> bool:
        return bool(self.up_waiting or self.down_waiting)

    def waiting(self) -> Iterator[Passenger]:
        """Yield waiting passengers, up queue first, each in arrival order."""
        yield from self.up_waiting
        yield from self.down_waiting

    def __len__(self) -> int:  # pragma: no cover - convenience
        return len(self.up_waiting) + len(self.down_waiting)
