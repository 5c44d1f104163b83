"""Bounded flood fill that turns grid cells into a pipe network.

Discovery starts at one coordinate and walks outwards breadth-first,
classifying each cell as a segment, an input, an output, a chunk loader
or nothing. All intermediate state is local: a failed discovery leaves
no trace anywhere.

Usage:
    network = discover_network(
        start,
        grid=grid,
        provider=provider,
        new_id=allocator.allocate,
        max_length=settings.max_pipe_length,
        max_outputs=settings.max_pipe_outputs,
    )
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from typing import TYPE_CHECKING

from pipenet.core.coordinate import Coordinate, Direction
from pipenet.core.network import (
    ChunkNotLoadedError,
    Network,
    NetworkId,
    PipeTooLongError,
    TooManyOutputsError,
)
from pipenet.core.part import (
    ChunkLoaderPart,
    InputPart,
    OutputPart,
    Part,
    materialize_part,
)

if TYPE_CHECKING:
    from pipenet.grid.protocol import CellKindProvider, Grid

logger = logging.getLogger(__name__)

Classifier = Callable[[Coordinate], Part | None]
"""Signature: (coordinate) -> part at that coordinate, or None"""


def _seed_from_output(
    output: OutputPart,
    grid: Grid,
    provider: CellKindProvider,
    type_tag: str | None,
) -> Coordinate | None:
    """Find the one neighbour an output-first discovery continues through.

    Probes every direction except the output's facing, in Direction order,
    and returns the first neighbour whose segment type matches the bound
    tag (or any segment while the tag is unbound).
    """
    for direction in Direction:
        if direction is output.facing:
            continue
        neighbor = output.coordinate.relative(direction)
        subtype = provider.segment_type(grid.cell_at(neighbor))
        if subtype is not None and (type_tag is None or subtype == type_tag):
            return neighbor
    return None


def discover_network(
    start: Coordinate,
    grid: Grid,
    provider: CellKindProvider,
    new_id: Callable[[], NetworkId],
    classify: Classifier | None = None,
    max_length: int = 0,
    max_outputs: int = 0,
) -> Network | None:
    """Discover the network reachable from `start`.

    Args:
        start: Coordinate believed to be part of a network.
        grid: Grid to read cells and partition residency from.
        provider: Classifier for raw cells.
        new_id: Factory for the id of a successfully discovered network.
        classify: Part lookup; defaults to materialising from the grid.
        max_length: Maximum segment count (0 = unlimited).
        max_outputs: Maximum output count (0 = unlimited).

    Returns:
        A complete Network, or None if the reachable cells do not form one.

    Raises:
        ChunkNotLoadedError: A non-resident partition was reached before
            any chunk loader was found.
        PipeTooLongError: More than `max_length` segments were reached.
        TooManyOutputsError: More than `max_outputs` outputs were reached.
    """
    if classify is None:

        def classify(coordinate: Coordinate) -> Part | None:
            return materialize_part(coordinate, grid, provider)

    queue: deque[Coordinate] = deque([start])
    found: set[Coordinate] = set()

    inputs: dict[Coordinate, InputPart] = {}
    outputs: dict[Coordinate, OutputPart] = {}
    chunk_loaders: dict[Coordinate, ChunkLoaderPart] = {}
    segments: set[Coordinate] = set()
    type_tag: str | None = None

    while queue:
        location = queue.popleft()
        if location in found:
            continue
        if not chunk_loaders and not grid.is_partition_resident(location):
            raise ChunkNotLoadedError(location)

        subtype = provider.segment_type(grid.cell_at(location))
        if subtype is not None:
            if type_tag is None:
                type_tag = subtype
            if subtype != type_tag:
                continue
            if max_length > 0 and len(segments) >= max_length:
                raise PipeTooLongError(location)
            segments.add(location)
            found.add(location)
            queue.extend(grid.neighbors_of(location))
            continue

        part = classify(location)
        if isinstance(part, InputPart):
            connected = provider.segment_type(grid.cell_at(part.target))
            if type_tag is None and connected is not None:
                type_tag = connected
            if connected is not None and connected == type_tag:
                inputs[location] = part
                found.add(location)
                queue.append(part.target)
        elif isinstance(part, OutputPart):
            if max_outputs > 0 and len(outputs) >= max_outputs:
                raise TooManyOutputsError(location)
            outputs[location] = part
            if not found:
                seed = _seed_from_output(part, grid, provider, type_tag)
                if seed is not None:
                    queue.append(seed)
            found.add(location)
            # Keep the fill from wrapping back through a downstream receiver.
            if provider.is_receiver(grid.cell_at(part.target)):
                found.add(part.target)
        elif isinstance(part, ChunkLoaderPart):
            chunk_loaders[location] = part
            found.add(location)

    outputs = {
        location: output for location, output in outputs.items() if output.target not in inputs
    }

    if not (inputs and outputs and segments) or type_tag is None:
        logger.debug(
            "No network at %s (inputs=%d, outputs=%d, segments=%d)",
            start,
            len(inputs),
            len(outputs),
            len(segments),
        )
        return None

    network = Network(
        id=new_id(),
        type_tag=type_tag,
        segments=segments,
        inputs=inputs,
        outputs=outputs,
        chunk_loaders=chunk_loaders,
    )
    logger.debug("Discovered %r from %s", network, start)
    return network
