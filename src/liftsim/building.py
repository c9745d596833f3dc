from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from itertools import count
from typing import TYPE_CHECKING, Iterator, List, MutableSequence, Optional

from .elevator import Elevator
from .floor import Floor

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .config import SimulationSettings

CONTAINER_TYPES = {"linked": deque, "array": list}


@dataclass
class Building:
    """Container for floors and elevators built from validated parameters."""

    num_floors: int
    num_elevators: int
    capacity: int
    random_state: random.Random
    structures: str = "linked"
    floors: MutableSequence[Floor] = field(init=False)
    elevators: MutableSequence[Elevator] = field(init=False)
    passenger_ids: Iterator[int] = field(init=False, default_factory=count)

    def __post_init__(self) -> None:
        container = CONTAINER_TYPES.get(self.structures)
        if container is None:
            raise ValueError(
                f"Unknown container strategy '{self.structures}'. Available: {', '.join(CONTAINER_TYPES)}"
            )
        self.floors = container(
            Floor(
                number,
                max_floor=self.num_floors,
                random_state=self.random_state,
                id_sequence=self.passenger_ids,
            )
            for number in range(1, self.num_floors + 1)
        )
        self.elevators = container(
            Elevator(elevator_id, max_floor=self.num_floors, capacity=self.capacity)
            for elevator_id in range(self.num_elevators)
        )

    @classmethod
    def from_settings(cls, settings: "SimulationSettings", random_state: random.Random) -> "Building":
        return cls(
            num_floors=settings.num_floors,
            num_elevators=settings.num_elevators,
            capacity=settings.elevator_capacity,
            random_state=random_state,
            structures=settings.structures,
        )

    def get_floor(self, floor_number: int) -> Optional[Floor]:
        if 1 <= floor_number <= self.num_floors:
            return self.floors[floor_number - 1]
        return None

    def elevators_at(self, floor_number: int) -> List[Elevator]:
        return [elevator for elevator in self.elevators if elevator.current_floor == floor_number]

    def request_pickups(self) -> int:
        """Offer every waiting passenger to the elevators in order.

        The first elevator to accept books the stop; later elevators are not
        asked about that passenger again this tick.
        """
        accepted = 0
        for floor in self.floors:
            for passenger in floor.waiting():
                for elevator in self.elevators:
                    if elevator.request_pickup(passenger):
                        accepted += 1
                        break
        return accepted

    def waiting_count(self) -> int:
        return sum(len(floor.up_waiting) + len(floor.down_waiting) for floor in self.floors)

    def snapshot(self) -> dict:
        return {
            "floors": [
                {"up": len(floor.up_waiting), "down": len(floor.down_waiting)}
                for floor in self.floors
            ],
            "elevators": [elevator.snapshot() for elevator in self.elevators],
        }
