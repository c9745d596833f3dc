from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .ordering import FloorHeap
from .passenger import Direction, Passenger

MAX_FLOORS_PER_TICK = 5


def _destination(passenger: Passenger) -> int:
    return passenger.destination_floor


@dataclass
class Elevator:
    """A car that serves one travel direction at a time.

    Onboard riders and pending stops are split into an up group and a down
    group. Only the group matching ``direction`` is served; the other group
    can only be filled after the car has gone fully idle and re-committed.
    """

    elevator_id: int
    max_floor: int
    capacity: int
    current_floor: int = 1
    direction: Direction = Direction.UP
    onboard_up: FloorHeap[Passenger] = field(init=False)
    onboard_down: FloorHeap[Passenger] = field(init=False)
    pending_up: FloorHeap[int] = field(init=False)
    pending_down: FloorHeap[int] = field(init=False)

    def __post_init__(self) -> None:
        self.current_floor = min(max(self.current_floor, 1), self.max_floor)
        self.onboard_up = FloorHeap(Direction.UP, key=_destination)
        self.onboard_down = FloorHeap(Direction.DOWN, key=_destination)
        self.pending_up = FloorHeap(Direction.UP)
        self.pending_down = FloorHeap(Direction.DOWN)

    def _onboard(self, direction: Direction) -> FloorHeap[Passenger]:
        return self.onboard_up if direction == Direction.UP else self.onboard_down

    def _pending(self, direction: Direction) -> FloorHeap[int]:
        return self.pending_up if direction == Direction.UP else self.pending_down

    def is_active(self) -> bool:
        return bool(self.onboard_up or self.onboard_down or self.pending_up or self.pending_down)

    def onboard_count(self, direction: Direction) -> int:
        return len(self._onboard(direction))

    @property
    def passenger_count(self) -> int:
        return len(self.onboard_up) + len(self.onboard_down)

    def unload_at(self, floor: int, tick: int) -> List[Passenger]:
        """Drop off riders bound for ``floor`` and clear stops reached here.

        Nothing happens unless the car actually stands on ``floor``. Returned
        passengers carry ``end_tick == tick`` and come out nearest-first.
        """
        if floor != self.current_floor:
            return []

        onboard = self._onboard(self.direction)
        unloaded: List[Passenger] = []
        while onboard and onboard.peek_floor() == self.current_floor:
            passenger = onboard.pop()
            passenger.record_unload(tick)
            unloaded.append(passenger)

        pending = self._pending(self.direction)
        while pending and pending.peek_floor() == self.current_floor:
            pending.pop()
        return unloaded

    def load(self, passenger: Passenger) -> bool:
        direction = passenger.direction
        if self.is_active():
            if direction != self.direction:
                return False
            if len(self._onboard(direction)) >= self.capacity:
                return False
        else:
            self.direction = direction

        self._onboard(direction).push(passenger)
        self._pending(direction).push(passenger.destination_floor)
        return True

    def request_pickup(self, passenger: Passenger) -> bool:
        """Book a future stop at the passenger's start floor.

        An idle car always accepts and turns towards the passenger's floor,
        which may oppose the passenger's own travel direction. A busy car
        accepts only riders heading its way from a floor it has not reached.
        """
        start = passenger.start_floor
        if not self.is_active():
            self.direction = Direction.UP if self.current_floor < start else Direction.DOWN
        else:
            direction = passenger.direction
            if direction != self.direction:
                return False
            if len(self._onboard(direction)) >= self.capacity:
                return False
            if direction == Direction.UP and not self.current_floor < start:
                return False
            if direction == Direction.DOWN and not self.current_floor > start:
                return False

        self._pending(self.direction).push(start)
        return True

    def next_stop(self) -> Optional[int]:
        return self._pending(self.direction).peek_floor()

    def travel(self) -> None:
        if not self.is_active():
            return
        target = self.next_stop()
        if target is None:
            target = self.current_floor
        distance = min(abs(target - self.current_floor), MAX_FLOORS_PER_TICK)
        if target > self.current_floor:
            self.current_floor += distance
        else:
            self.current_floor -= distance
        self.current_floor = min(max(self.current_floor, 1), self.max_floor)

    def snapshot(self) -> dict:
        return {
            "id": self.elevator_id,
            "floor": self.current_floor,
            "direction": self.direction.name.lower(),
            "active": self.is_active(),
            "onboard_up": [p.destination_floor for p in self.onboard_up],
            "onboard_down": [p.destination_floor for p in self.onboard_down],
            "pending_up": list(self.pending_up),
            "pending_down": list(self.pending_down),
        }
