"""Tick-based multi-elevator dispatch simulation."""

from .building import Building
from .config import SimulationSettings, load_settings
from .elevator import MAX_FLOORS_PER_TICK, Elevator
from .floor import Floor
from .ordering import FloorHeap
from .passenger import Direction, Passenger
from .simulation import Simulation
from .statistics import ConveyanceStatistics, StatisticsSummary

__all__ = [
    "Building",
    "ConveyanceStatistics",
    "Direction",
    "Elevator",
    "Floor",
    "FloorHeap",
    "MAX_FLOORS_PER_TICK",
    "Passenger",
    "Simulation",
    "SimulationSettings",
    "StatisticsSummary",
    "load_settings",
]
