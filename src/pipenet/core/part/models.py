"""Pipe part models: inputs, outputs and chunk loaders.

Parts are frozen value objects. Holders (the inventories behind inputs and
outputs) are opaque to this package and excluded from equality, so two
parts at the same coordinate with the same facing compare equal.

Usage:
    part = InputPart(Coordinate("world", 0, 64, 0), Direction.EAST, holder=chest)
    part.target  # Coordinate("world", 1, 64, 0)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Protocol, runtime_checkable

from pipenet.core.coordinate import Coordinate, Direction


class PartKind(Enum):
    """The classified kinds of pipe parts."""

    INPUT = auto()
    OUTPUT = auto()
    CHUNK_LOADER = auto()


@runtime_checkable
class Holder(Protocol):
    """Inventory-like object behind an input or output."""

    def is_empty(self) -> bool:
        """Check whether the holder has nothing to move."""
        ...


@dataclass(frozen=True, slots=True)
class InputPart:
    """Feeds items from its holder into the adjoining network cell."""

    coordinate: Coordinate
    facing: Direction
    holder: Holder | None = field(default=None, compare=False, repr=False)

    kind: ClassVar[PartKind] = PartKind.INPUT

    @property
    def target(self) -> Coordinate:
        """The network cell this input connects to."""
        return self.coordinate.relative(self.facing)

    def has_items(self) -> bool:
        return self.holder is not None and not self.holder.is_empty()


@dataclass(frozen=True, slots=True)
class OutputPart:
    """Delivers items out of the network into the cell it faces."""

    coordinate: Coordinate
    facing: Direction
    holder: Holder | None = field(default=None, compare=False, repr=False)

    kind: ClassVar[PartKind] = PartKind.OUTPUT

    @property
    def target(self) -> Coordinate:
        """The receiving cell outside the network."""
        return self.coordinate.relative(self.facing)


@dataclass(frozen=True, slots=True)
class ChunkLoaderPart:
    """Keeps its partition resident so discovery may pass unloaded partitions."""

    coordinate: Coordinate

    kind: ClassVar[PartKind] = PartKind.CHUNK_LOADER


Part = InputPart | OutputPart | ChunkLoaderPart
"""Any classified pipe part."""
