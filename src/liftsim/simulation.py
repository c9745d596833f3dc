from __future__ import annotations

import logging
import random
from dataclasses import asdict
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from .building import Building
from .elevator import Elevator
from .floor import Floor
from .passenger import Direction, Passenger
from .statistics import ConveyanceStatistics, StatisticsSummary

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .config import SimulationSettings

logger = logging.getLogger(__name__)


class Simulation:
    """Tick-driven elevator simulation.

    Every tick visits floors in building order: cars standing on a floor
    unload, a passenger may arrive there, and the cars load from the queue
    matching their direction. Passengers still waiting afterwards request a
    pickup, then every car travels. The only randomness is the arrival draw
    (plus the destination choice it triggers), all taken from ``random_state``.
    """

    def __init__(
        self,
        building: Building,
        arrival_probability: float,
        random_state: random.Random,
        statistics: Optional[ConveyanceStatistics] = None,
        duration: Optional[int] = None,
        metrics_hook_interval: int = 1,
    ) -> None:
        self.building = building
        self.arrival_probability = arrival_probability
        self.random = random_state
        self.statistics = statistics if statistics is not None else ConveyanceStatistics()
        self.duration = duration
        self.current_time: int = 0
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self.metrics_hook_interval = max(1, metrics_hook_interval)

    @classmethod
    def from_settings(
        cls,
        settings: "SimulationSettings",
        statistics: Optional[ConveyanceStatistics] = None,
        metrics_hook_interval: int = 1,
    ) -> "Simulation":
        random_state = random.Random(settings.random_seed)
        building = Building.from_settings(settings, random_state)
        return cls(
            building=building,
            arrival_probability=settings.arrival_probability,
            random_state=random_state,
            statistics=statistics,
            duration=settings.duration,
            metrics_hook_interval=metrics_hook_interval,
        )

    def run(self, duration: Optional[int] = None) -> StatisticsSummary:
        ticks = duration if duration is not None else self.duration
        if ticks is None:
            raise ValueError("No duration given and none configured")
        logger.debug(
            "Running %d ticks: %d floors, %d elevators",
            ticks,
            len(self.building.floors),
            len(self.building.elevators),
        )
        for _ in range(ticks):
            self.step()
        summary = self.statistics.calculate_statistics()
        logger.debug("Finished at tick %d: %s", self.current_time, summary)
        return summary

    def step(self) -> None:
        tick = self.current_time
        for floor in self.building.floors:
            elevators = self.building.elevators_at(floor.number)
            for elevator in elevators:
                for passenger in elevator.unload_at(floor.number, tick):
                    self._complete(passenger, elevator, floor)

            if self.random.random() < self.arrival_probability:
                self._spawn_passenger(floor, tick)

            for elevator in elevators:
                self._board(elevator, floor)

        self.building.request_pickups()

        for elevator in self.building.elevators:
            elevator.travel()

        if tick % self.metrics_hook_interval == 0:
            self._emit_metrics()

        self.current_time += 1

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _spawn_passenger(self, floor: Floor, tick: int) -> None:
        passenger = floor.generate_passenger()
        passenger.record_arrival(tick)
        floor.enqueue(passenger)
        self._emit("arrival", {"time": tick, "passenger": passenger})

    def _board(self, elevator: Elevator, floor: Floor) -> None:
        if elevator.is_active():
            direction = elevator.direction
        else:
            direction = Direction.UP if floor.up_waiting else Direction.DOWN
        queue = floor.queue_for(direction)
        while queue and elevator.load(queue[0]):
            queue.popleft()

    def _complete(self, passenger: Passenger, elevator: Elevator, floor: Floor) -> None:
        counted = self.statistics.report_completion(passenger.conveyance_time)
        self._emit(
            "completion",
            {
                "time": self.current_time,
                "passenger": passenger,
                "elevator_id": elevator.elevator_id,
                "floor": floor.number,
                "counted": counted,
            },
        )

    def _emit_metrics(self) -> None:
        if not self.event_hooks.get("metrics"):
            return
        summary = self.statistics.calculate_statistics()
        self._emit(
            "metrics",
            {
                "time": self.current_time,
                "metrics": asdict(summary),
                "waiting": self.building.waiting_count(),
                "building": self.building.snapshot(),
            },
        )

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
