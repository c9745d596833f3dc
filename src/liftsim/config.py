from __future__ import annotations

import configparser
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

logger = logging.getLogger(__name__)

DEFAULT_STRUCTURES = "linked"
DEFAULT_FLOORS = 32
DEFAULT_ARRIVAL_PROBABILITY = 0.03
DEFAULT_ELEVATORS = 1
DEFAULT_CAPACITY = 10
DEFAULT_DURATION = 500

STRUCTURE_CHOICES = ("linked", "array")

# field name -> (minimum allowed, fallback)
_INTEGER_LIMITS: Dict[str, tuple] = {
    "num_floors": (2, DEFAULT_FLOORS),
    "num_elevators": (1, DEFAULT_ELEVATORS),
    "elevator_capacity": (1, DEFAULT_CAPACITY),
    "duration": (1, DEFAULT_DURATION),
}

_PROPERTIES_SECTION = "simulation"


class SimulationSettings(BaseModel):
    """Validated simulation parameters.

    Values outside their documented range are replaced by the default rather
    than rejected, so a partially wrong file still produces a runnable setup.
    Field aliases match the keys used in properties files.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    structures: str = Field(DEFAULT_STRUCTURES, alias="structures")
    num_floors: int = Field(DEFAULT_FLOORS, alias="floors")
    arrival_probability: float = Field(DEFAULT_ARRIVAL_PROBABILITY, alias="passengers")
    num_elevators: int = Field(DEFAULT_ELEVATORS, alias="elevators")
    elevator_capacity: int = Field(DEFAULT_CAPACITY, alias="elevatorCapacity")
    duration: int = Field(DEFAULT_DURATION, alias="duration")
    random_seed: Optional[int] = Field(None, alias="seed")

    @field_validator("structures", mode="before")
    @classmethod
    def _known_structure(cls, value: object) -> str:
        structure = str(value).strip().lower()
        if structure not in STRUCTURE_CHOICES:
            logger.warning(
                "structures=%r is not one of %s; using %r", value, STRUCTURE_CHOICES, DEFAULT_STRUCTURES
            )
            return DEFAULT_STRUCTURES
        return structure

    @field_validator("num_floors", "num_elevators", "elevator_capacity", "duration")
    @classmethod
    def _at_least_minimum(cls, value: int, info: ValidationInfo) -> int:
        minimum, fallback = _INTEGER_LIMITS[info.field_name]
        if value < minimum:
            logger.warning("%s=%d is below %d; using %d", info.field_name, value, minimum, fallback)
            return fallback
        return value

    @field_validator("arrival_probability")
    @classmethod
    def _open_unit_interval(cls, value: float) -> float:
        if not 0.0 < value < 1.0:
            logger.warning(
                "arrival_probability=%s is outside (0, 1); using %s", value, DEFAULT_ARRIVAL_PROBABILITY
            )
            return DEFAULT_ARRIVAL_PROBABILITY
        return value

    def as_properties(self) -> Dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)


def parse_properties(text: str) -> Dict[str, str]:
    """Parse ``key=value`` lines in the style of a Java properties file."""
    parser = configparser.ConfigParser(
        delimiters=("=", ":"),
        comment_prefixes=("#", "!"),
        interpolation=None,
    )
    parser.optionxform = str  # keys such as elevatorCapacity are case sensitive
    try:
        parser.read_string(f"[{_PROPERTIES_SECTION}]\n{text}")
    except configparser.Error as exc:
        raise ValueError(f"Malformed properties: {exc}") from exc
    return dict(parser[_PROPERTIES_SECTION])


def load_settings(path: Optional[Path] = None) -> SimulationSettings:
    """Read settings from ``path``, falling back to defaults when it is missing.

    ``.json`` files must hold a single object; any other file is read as a
    properties file. Malformed values raise ``ValueError``.
    """
    if path is None:
        return SimulationSettings()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not read %s (%s); using default settings", path, exc)
        return SimulationSettings()

    if path.suffix.lower() == ".json":
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object")
    else:
        data = parse_properties(text)
    return SimulationSettings.model_validate(data)
