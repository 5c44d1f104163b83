"""Local in-memory grid implementation.

Dict-based grid suitable for single-process use and testing. Every
partition is resident unless explicitly unloaded.

Usage:
    grid = LocalGrid()
    grid.set_cell(Coordinate("world", 0, 64, 0), Cell("red_stained_glass"))
    cache = NetworkCache(grid=grid, provider=LocalCellKindProvider())
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from pipenet.core.coordinate import Coordinate
from pipenet.core.part import PartKind
from pipenet.grid.models import EMPTY, Cell

SEGMENT_SUFFIX = "_stained_glass"
RECEIVER_MATERIALS = frozenset({"composter"})


class LocalGrid:
    """Simple in-memory grid.

    Structure:
        _cells[coordinate] = cell
        _unloaded = {partition, ...}
    """

    def __init__(self) -> None:
        self._cells: dict[Coordinate, Cell] = {}
        self._unloaded: set[tuple[str, int, int]] = set()

    def cell_at(self, coordinate: Coordinate) -> Cell:
        """Get the cell at a coordinate.

        Args:
            coordinate: Position to read.

        Returns:
            The stored cell, or an empty (air) cell.
        """
        return self._cells.get(coordinate, EMPTY)

    def set_cell(self, coordinate: Coordinate, cell: Cell) -> None:
        """Place a cell, replacing whatever was there."""
        self._cells[coordinate] = cell

    def remove_cell(self, coordinate: Coordinate) -> bool:
        """Clear a coordinate. Returns True if a cell was there."""
        return self._cells.pop(coordinate, None) is not None

    def is_partition_resident(self, coordinate: Coordinate) -> bool:
        return coordinate.partition not in self._unloaded

    def unload_partition(self, coordinate: Coordinate) -> None:
        """Mark the partition enclosing `coordinate` as not resident."""
        self._unloaded.add(coordinate.partition)

    def load_partition(self, coordinate: Coordinate) -> None:
        """Mark the partition enclosing `coordinate` as resident again."""
        self._unloaded.discard(coordinate.partition)

    def neighbors_of(self, coordinate: Coordinate) -> Iterator[Coordinate]:
        yield from coordinate.neighbors()

    def __len__(self) -> int:
        return len(self._cells)


class LocalCellKindProvider:
    """Classifies LocalGrid cells by material name and part tag.

    Args:
        segment_suffix: Materials ending with this suffix conduct; the full
            material name is the segment's type tag.
        receiver_materials: Materials that accept output without holding
            an inventory.
    """

    def __init__(
        self,
        segment_suffix: str = SEGMENT_SUFFIX,
        receiver_materials: frozenset[str] = RECEIVER_MATERIALS,
    ):
        self._segment_suffix = segment_suffix
        self._receiver_materials = receiver_materials

    def segment_type(self, cell: Cell) -> str | None:
        if cell.part is None and cell.material.endswith(self._segment_suffix):
            return cell.material
        return None

    def part_kind(self, cell: Cell) -> PartKind | None:
        return cell.part

    def is_receiver(self, cell: Cell) -> bool:
        return cell.holder is not None or cell.material in self._receiver_materials


@dataclass
class SimpleHolder:
    """List-backed inventory for inputs and outputs."""

    items: list[Any] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.items
