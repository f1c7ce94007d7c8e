"""A minimal entity-component store with systems run on a schedule."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterator


@dataclass
class Position:
    x: float
    y: float


@dataclass
class Velocity:
    x: float
    y: float


class World:
    """Entities, each a set of components with at most one of every type."""

    def __init__(self):
        self._entities: dict[int, dict[type, Any]] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._entities)

    def spawn(self, *args) -> int:
        """Create an entity holding the given components and return its id."""
        components: dict[type, Any] = {}
        for component in args:
            kind = type(component)
            if kind in components:
                raise ValueError(f"duplicate component of type {kind.__name__}")
            components[kind] = component
        entity = self._next_id
        self._next_id += 1
        self._entities[entity] = components
        return entity

    def query(self, *args) -> Iterator[tuple]:
        """Yield, per entity holding all given types, its components in that order."""
        for components in self._entities.values():
            if all(kind in components for kind in args):
                yield tuple(components[kind] for kind in args)


class Schedule:
    """Systems run one after another, in the order they were added."""

    def __init__(self):
        self._systems: list[Callable[[World], Any]] = []

    def add_systems(self, *args) -> "Schedule":
        self._systems.extend(args)
        return self

    def run(self, world: World) -> None:
        for system in self._systems:
            system(world)


def movement(world: World) -> None:
    """Move every entity that has a position by its velocity."""
    for position, velocity in world.query(Position, Velocity):
        position.x += velocity.x
        position.y += velocity.y


def _format_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        sign = "-" if math.copysign(1.0, value) < 0 else ""
        return f"{sign}{abs(int(value))}"
    return repr(value)


def print_system(world: World) -> None:
    """Print position and velocity of every moving entity."""
    for position, velocity in world.query(Position, Velocity):
        print(
            f"Position: {_format_number(position.x)} {_format_number(position.y)} "
            f"Velocity: {_format_number(velocity.x)} {_format_number(velocity.y)}"
        )


def main(argv=None) -> int:
    """Spawn one moving entity, run the schedule once and print the result."""
    world = World()
    world.spawn(Position(0.0, 0.0), Velocity(1.0, 0.0))
    schedule = Schedule()
    schedule.add_systems(movement)
    schedule.add_systems(print_system)
    schedule.run(world)
    return 0