import pytest

from rustgl_viewer.ecs import (
    Position,
    Schedule,
    Velocity,
    World,
    main,
    movement,
    print_system,
)


def test_spawn_returns_distinct_ids():
    world = World()
    first = world.spawn(Position(0.0, 0.0))
    second = world.spawn(Position(1.0, 1.0))
    assert first != second
    assert len(world) == 2


def test_duplicate_component_rejected():
    world = World()
    with pytest.raises(ValueError):
        world.spawn(Position(0.0, 0.0), Position(1.0, 1.0))


def test_query_filters_and_orders_components():
    world = World()
    world.spawn(Position(0.0, 0.0))
    world.spawn(Velocity(2.0, 3.0), Position(4.0, 5.0))
    results = list(world.query(Position, Velocity))
    assert results == [(Position(4.0, 5.0), Velocity(2.0, 3.0))]
    assert len(list(world.query(Position))) == 2


def test_movement_adds_velocity():
    world = World()
    world.spawn(Position(1.5, -2.0), Velocity(0.5, 4.0))
    still = Position(7.0, 7.0)
    world.spawn(still)
    movement(world)
    movement(world)
    (position, _), = world.query(Position, Velocity)
    assert position == Position(2.5, 6.0)
    assert still == Position(7.0, 7.0)


def test_schedule_runs_systems_in_order():
    calls = []
    world = World()
    schedule = Schedule()
    schedule.add_systems(lambda w: calls.append("a"))
    schedule.add_systems(lambda w: calls.append("b"), lambda w: calls.append("c"))
    schedule.run(world)
    assert calls == ["a", "b", "c"]


def test_print_system_output(capsys):
    world = World()
    world.spawn(Position(0.5, 2.0), Velocity(-1.0, 0.25))
    print_system(world)
    assert capsys.readouterr().out == "Position: 0.5 2 Velocity: -1 0.25\n"


def test_main_moves_and_prints(capsys):
    assert main() == 0
    assert capsys.readouterr().out == "Position: 1 0 Velocity: 1 0\n"