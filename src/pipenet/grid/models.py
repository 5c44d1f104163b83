"""Raw grid cell model."""

from __future__ import annotations

from dataclasses import dataclass, field

from pipenet.core.coordinate import Direction
from pipenet.core.part import Holder, PartKind


@dataclass(frozen=True, slots=True)
class Cell:
    """What the grid holds at one coordinate, before classification.

    Attributes:
        material: Material name, e.g. "red_stained_glass" or "chest".
        facing: Facing direction for directional cells.
        holder: Inventory behind the cell, if it has one.
        part: Persisted part tag, if the cell was placed as a pipe part.
    """

    material: str
    facing: Direction | None = None
    holder: Holder | None = field(default=None, compare=False, repr=False)
    part: PartKind | None = None


EMPTY = Cell("air")
