"""Grid collaborators: protocols and the local in-memory implementation."""

from pipenet.grid.local import LocalCellKindProvider, LocalGrid, SimpleHolder
from pipenet.grid.models import EMPTY, Cell
from pipenet.grid.protocol import CellKindProvider, Grid, TransportScheduler

__all__ = [
    "Cell",
    "EMPTY",
    "Grid",
    "CellKindProvider",
    "TransportScheduler",
    "LocalGrid",
    "LocalCellKindProvider",
    "SimpleHolder",
]
