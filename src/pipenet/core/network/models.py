"""Network models: identifiers and the pipe network aggregate.

Usage:
    network = Network(id=NetworkId(1), type_tag="red_stained_glass")
    network.segments.add(Coordinate("world", 0, 64, 0))
    network.is_complete()  # False until it has an input and an output too
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pipenet.core.coordinate import Coordinate
from pipenet.core.part import ChunkLoaderPart, InputPart, OutputPart


@dataclass(frozen=True, slots=True, order=True)
class NetworkId:
    """Lightweight network identifier.

    Indices are handed out in increasing order, so ordering ids orders
    networks by when they were discovered or merged.
    """

    index: int = 0

    def __str__(self) -> str:
        return f"network#{self.index}"


@dataclass(eq=False)
class Network:
    """A connected pipe network.

    Networks compare and hash by identity: two discoveries of the same
    cells are still two networks until one of them is torn down.

    Attributes:
        id: Allocation-ordered identifier.
        type_tag: Segment subtype (colour/material) shared by every member.
        segments: Coordinates of conducting segment cells.
        inputs: Input parts keyed by their coordinate.
        outputs: Output parts keyed by their coordinate.
        chunk_loaders: Chunk loader parts keyed by their coordinate.
    """

    id: NetworkId
    type_tag: str
    segments: set[Coordinate] = field(default_factory=set)
    inputs: dict[Coordinate, InputPart] = field(default_factory=dict)
    outputs: dict[Coordinate, OutputPart] = field(default_factory=dict)
    chunk_loaders: dict[Coordinate, ChunkLoaderPart] = field(default_factory=dict)

    def is_complete(self) -> bool:
        """Check the shape every cached network must have.

        Returns:
            True if the network has at least one input, output and segment.
        """
        return bool(self.inputs) and bool(self.outputs) and bool(self.segments)

    def __repr__(self) -> str:
        return (
            f"Network({self.id}, type_tag={self.type_tag!r}, "
            f"segments={len(self.segments)}, inputs={len(self.inputs)}, "
            f"outputs={len(self.outputs)}, chunk_loaders={len(self.chunk_loaders)})"
        )
