import random
from itertools import count

import pytest

from liftsim.passenger import Passenger


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_passenger():
    ids = count(1)

    def factory(start_floor, destination_floor, start_tick=0):
        return Passenger(
            passenger_id=next(ids),
            start_floor=start_floor,
            destination_floor=destination_floor,
            start_tick=start_tick,
        )

    return factory
