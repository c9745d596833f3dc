import pytest

from liftsim.elevator import MAX_FLOORS_PER_TICK, Elevator
from liftsim.passenger import Direction


@pytest.fixture
def elevator():
    return Elevator(0, max_floor=30, capacity=3)


def test_new_elevator_waits_idle_on_ground_floor(elevator):
    assert elevator.current_floor == 1
    assert not elevator.is_active()
    assert elevator.next_stop() is None


def test_starting_floor_is_clamped_to_building():
    assert Elevator(1, max_floor=10, capacity=1, current_floor=0).current_floor == 1
    assert Elevator(2, max_floor=10, capacity=1, current_floor=14).current_floor == 10


def test_idle_elevator_does_not_travel(elevator):
    elevator.current_floor = 8
    elevator.travel()
    assert elevator.current_floor == 8


def test_load_on_idle_elevator_commits_to_passenger_direction(elevator, make_passenger):
    elevator.current_floor = 6
    rider = make_passenger(6, 2)

    assert elevator.load(rider)
    assert elevator.direction is Direction.DOWN
    assert elevator.onboard_count(Direction.DOWN) == 1
    assert elevator.next_stop() == 2
    assert elevator.is_active()


def test_load_rejects_opposite_direction_while_busy(elevator, make_passenger):
    elevator.current_floor = 5
    assert elevator.load(make_passenger(5, 9))

    assert not elevator.load(make_passenger(5, 1))
    assert elevator.onboard_count(Direction.DOWN) == 0
    assert len(elevator.pending_down) == 0
    assert elevator.direction is Direction.UP


def test_full_group_rejects_further_loads(make_passenger):
    elevator = Elevator(0, max_floor=10, capacity=2)
    assert elevator.load(make_passenger(1, 3))
    assert elevator.load(make_passenger(1, 4))

    assert not elevator.load(make_passenger(1, 5))
    assert elevator.onboard_count(Direction.UP) == 2
    assert len(elevator.pending_up) == 2


def test_passengers_unload_nearest_destination_first(elevator, make_passenger):
    far = make_passenger(1, 4)
    near = make_passenger(1, 3)
    farthest = make_passenger(1, 6)
    for rider in (far, near, farthest):
        assert elevator.load(rider)

    elevator.travel()
    assert elevator.current_floor == 3
    assert elevator.unload_at(3, tick=7) == [near]
    assert near.end_tick == 7

    elevator.travel()
    assert elevator.current_floor == 4
    assert elevator.unload_at(4, tick=8) == [far]

    elevator.travel()
    assert elevator.current_floor == 6
    assert elevator.unload_at(6, tick=9) == [farthest]
    assert not elevator.is_active()


def test_riders_sharing_a_destination_leave_together(elevator, make_passenger):
    riders = [make_passenger(1, 5), make_passenger(1, 5)]
    for rider in riders:
        elevator.load(rider)
    elevator.travel()

    assert elevator.unload_at(5, tick=2) == riders
    assert elevator.passenger_count == 0
    assert len(elevator.pending_up) == 0


def test_unload_for_another_floor_is_ignored(elevator, make_passenger):
    rider = make_passenger(1, 3)
    elevator.load(rider)
    elevator.travel()

    assert elevator.unload_at(2, tick=5) == []
    assert elevator.passenger_count == 1
    assert elevator.next_stop() == 3
    assert rider.end_tick is None


def test_reaching_a_pickup_floor_clears_the_stop(elevator, make_passenger):
    assert elevator.request_pickup(make_passenger(4, 9))
    elevator.travel()
    assert elevator.current_floor == 4

    assert elevator.unload_at(4, tick=3) == []
    assert not elevator.is_active()


def test_travel_stops_exactly_on_close_target(make_passenger):
    elevator = Elevator(0, max_floor=20, capacity=5, current_floor=10)
    assert elevator.request_pickup(make_passenger(12, 15))
    assert elevator.direction is Direction.UP

    elevator.travel()
    assert elevator.current_floor == 12

    elevator.travel()
    assert elevator.current_floor == 12


def test_travel_up_is_capped_per_tick(elevator, make_passenger):
    elevator.load(make_passenger(1, 20))
    floors = []
    for _ in range(5):
        elevator.travel()
        floors.append(elevator.current_floor)

    assert floors == [6, 11, 16, 20, 20]
    assert MAX_FLOORS_PER_TICK == 5


def test_travel_down_is_capped_per_tick(elevator, make_passenger):
    elevator.current_floor = 20
    elevator.load(make_passenger(20, 3))
    floors = []
    for _ in range(4):
        elevator.travel()
        floors.append(elevator.current_floor)

    assert floors == [15, 10, 5, 3]


def test_idle_pickup_commits_towards_the_passenger_floor(make_passenger):
    elevator = Elevator(0, max_floor=10, capacity=4, current_floor=5)
    rider = make_passenger(3, 8)

    assert elevator.request_pickup(rider)
    # The car turns down to reach floor 3 even though the rider is going up.
    assert elevator.direction is Direction.DOWN
    assert elevator.pending_down.peek() == 3
    assert elevator.passenger_count == 0


def test_idle_pickup_then_boarding_reverses_direction(make_passenger):
    elevator = Elevator(0, max_floor=10, capacity=4, current_floor=5)
    rider = make_passenger(3, 8)
    elevator.request_pickup(rider)

    elevator.travel()
    assert elevator.current_floor == 3
    elevator.unload_at(3, tick=1)
    assert not elevator.is_active()

    assert elevator.load(rider)
    assert elevator.direction is Direction.UP
    elevator.travel()
    assert elevator.current_floor == 8
    assert elevator.unload_at(8, tick=2) == [rider]


def test_busy_pickup_up_requires_unpassed_floor(elevator, make_passenger):
    elevator.current_floor = 5
    elevator.load(make_passenger(5, 12))

    assert elevator.request_pickup(make_passenger(7, 9))
    assert not elevator.request_pickup(make_passenger(5, 8))
    assert not elevator.request_pickup(make_passenger(3, 9))
    assert not elevator.request_pickup(make_passenger(8, 2))
    assert list(elevator.pending_up) == [7, 12]


def test_busy_pickup_down_requires_unpassed_floor(elevator, make_passenger):
    elevator.current_floor = 10
    elevator.load(make_passenger(10, 1))

    assert elevator.request_pickup(make_passenger(7, 2))
    assert not elevator.request_pickup(make_passenger(10, 3))
    assert not elevator.request_pickup(make_passenger(12, 4))
    assert not elevator.request_pickup(make_passenger(6, 9))
    assert list(elevator.pending_down) == [7, 1]


def test_full_elevator_refuses_pickups(make_passenger):
    elevator = Elevator(0, max_floor=10, capacity=1)
    elevator.load(make_passenger(1, 9))

    assert not elevator.request_pickup(make_passenger(4, 8))
    assert list(elevator.pending_up) == [9]


def test_snapshot_lists_groups_in_service_order(elevator, make_passenger):
    elevator.load(make_passenger(1, 9))
    elevator.load(make_passenger(1, 4))
    elevator.request_pickup(make_passenger(2, 6))

    snapshot = elevator.snapshot()
    assert snapshot["floor"] == 1
    assert snapshot["direction"] == "up"
    assert snapshot["onboard_up"] == [4, 9]
    assert snapshot["pending_up"] == [2, 4, 9]
    assert snapshot["active"] is True
