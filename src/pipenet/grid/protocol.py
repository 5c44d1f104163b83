"""Protocols for the collaborators that own the world.

The grid itself, the rules that tell cell kinds apart and the item mover
all live outside this package. Implementations are passed to
NetworkCache at construction.

Usage:
    cache = NetworkCache(grid=my_grid, provider=my_provider, scheduler=mover)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from pipenet.core.coordinate import Coordinate
from pipenet.core.part import PartKind
from pipenet.grid.models import Cell


@runtime_checkable
class Grid(Protocol):
    """Read access to the mutable spatial grid."""

    def cell_at(self, coordinate: Coordinate) -> Cell:
        """Get the raw cell at a coordinate."""
        ...

    def is_partition_resident(self, coordinate: Coordinate) -> bool:
        """Check if the partition enclosing the coordinate is loaded."""
        ...

    def neighbors_of(self, coordinate: Coordinate) -> Iterable[Coordinate]:
        """The six axis-aligned neighbours of a coordinate."""
        ...


@runtime_checkable
class CellKindProvider(Protocol):
    """Classifies raw cells into segments, parts and receivers."""

    def segment_type(self, cell: Cell) -> str | None:
        """Get the segment subtype (type tag) of a cell, or None if not a segment."""
        ...

    def part_kind(self, cell: Cell) -> PartKind | None:
        """Get the part kind of a cell, or None if not a pipe part."""
        ...

    def is_receiver(self, cell: Cell) -> bool:
        """Check if an output can deliver into this cell (inventory or composter)."""
        ...


@runtime_checkable
class TransportScheduler(Protocol):
    """Moves items once a network is known."""

    def network_ready(self, coordinate: Coordinate) -> None:
        """Called when an installed network has a non-empty input at `coordinate`."""
        ...
