"""Pure functions for materialising parts from classified cells."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipenet.core.coordinate import Coordinate, Direction
from pipenet.core.part.models import (
    ChunkLoaderPart,
    Holder,
    InputPart,
    OutputPart,
    Part,
    PartKind,
)

if TYPE_CHECKING:
    from pipenet.grid.protocol import CellKindProvider, Grid


def build_part(
    kind: PartKind | None,
    coordinate: Coordinate,
    facing: Direction | None = None,
    holder: Holder | None = None,
) -> Part | None:
    """Construct the part variant for a classified cell.

    Args:
        kind: Classified part kind, or None for cells that are not parts.
        coordinate: Where the part sits.
        facing: Facing direction; required for inputs and outputs.
        holder: Inventory behind an input or output.

    Returns:
        The matching Part, or None if the cell is not a part or an
        input/output lacks a facing.
    """
    if kind is None:
        return None
    if kind is PartKind.CHUNK_LOADER:
        return ChunkLoaderPart(coordinate)
    if facing is None:
        return None
    if kind is PartKind.INPUT:
        return InputPart(coordinate, facing, holder)
    return OutputPart(coordinate, facing, holder)


def materialize_part(
    coordinate: Coordinate,
    grid: Grid,
    provider: CellKindProvider,
) -> Part | None:
    """Read the grid cell at `coordinate` and build its part, if it is one.

    Nothing is cached here; callers decide whether the part is kept.

    Args:
        coordinate: Position to classify.
        grid: Grid to read the raw cell from.
        provider: Classifier for raw cells.

    Returns:
        The materialised part, or None.
    """
    cell = grid.cell_at(coordinate)
    return build_part(provider.part_kind(cell), coordinate, cell.facing, cell.holder)
