from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


class Direction(IntEnum):
    UP = 1
    DOWN = -1

    @classmethod
    def of(cls, start_floor: int, destination_floor: int) -> "Direction":
        return cls.UP if destination_floor > start_floor else cls.DOWN


@dataclass
class Passenger:
    """Represents a rider moving between floors."""

    passenger_id: int
    start_floor: int
    destination_floor: int
    start_tick: Optional[int] = None
    end_tick: Optional[int] = None
    metadata: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.start_floor == self.destination_floor:
            raise ValueError(
                f"Passenger {self.passenger_id} starts and ends on floor {self.start_floor}"
            )

    @property
    def direction(self) -> Direction:
        return Direction.of(self.start_floor, self.destination_floor)

    def record_arrival(self, tick: int) -> None:
        self.start_tick = tick

    def record_unload(self, tick: int) -> None:
        self.end_tick = tick

    @property
    def conveyance_time(self) -> Optional[int]:
        """Ticks between arriving at the start floor and leaving the car."""
        if self.start_tick is None or self.end_tick is None:
            return None
        return self.end_tick - self.start_tick
