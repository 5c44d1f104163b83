"""Coordinate model: value-typed grid positions and directions."""

from pipenet.core.coordinate.models import PARTITION_SHIFT, Coordinate, Direction

__all__ = [
    "Coordinate",
    "Direction",
    "PARTITION_SHIFT",
]
