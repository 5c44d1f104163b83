"""Coordinate models: grid positions and axis directions.

Usage:
    origin = Coordinate("world", 0, 64, 0)
    above = origin.relative(Direction.UP)
    for neighbor in origin.neighbors():
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

PARTITION_SHIFT = 4
"""Partitions (chunks) span 16 cells along x and z."""


class Direction(Enum):
    """The six axis-aligned directions, in neighbour iteration order."""

    NORTH = (0, 0, -1)
    EAST = (1, 0, 0)
    SOUTH = (0, 0, 1)
    WEST = (-1, 0, 0)
    UP = (0, 1, 0)
    DOWN = (0, -1, 0)

    @property
    def offset(self) -> tuple[int, int, int]:
        return self.value

    @property
    def opposite(self) -> Direction:
        dx, dy, dz = self.value
        return Direction((-dx, -dy, -dz))


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Immutable cell position inside a named world."""

    world: str
    x: int
    y: int
    z: int

    def relative(self, direction: Direction, distance: int = 1) -> Coordinate:
        """Get the coordinate `distance` cells away in `direction`.

        Args:
            direction: Direction to move in.
            distance: Number of cells to move (default 1).

        Returns:
            New Coordinate in the same world.
        """
        dx, dy, dz = direction.offset
        return Coordinate(
            self.world,
            self.x + dx * distance,
            self.y + dy * distance,
            self.z + dz * distance,
        )

    def neighbors(self) -> tuple[Coordinate, ...]:
        """All six adjacent coordinates, in Direction order."""
        return tuple(self.relative(direction) for direction in Direction)

    @property
    def partition(self) -> tuple[str, int, int]:
        """Key of the grid partition enclosing this coordinate."""
        return (self.world, self.x >> PARTITION_SHIFT, self.z >> PARTITION_SHIFT)

    def __str__(self) -> str:
        return f"{self.world}:{self.x},{self.y},{self.z}"
