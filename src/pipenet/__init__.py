"""pipenet: discovery and caching of pipe networks in a mutable grid.

Usage:
    from pipenet import Coordinate, LocalCellKindProvider, LocalGrid, NetworkCache

    grid = LocalGrid()
    ...  # place segments, inputs and outputs

    cache = NetworkCache(grid=grid, provider=LocalCellKindProvider())
    networks = cache.lookup(Coordinate("world", 0, 64, 0))
"""

__version__ = "0.1.0"

# Configuration
from pipenet.config import PipeSettings

# Core primitives
from pipenet.core import (
    ChunkLoaderPart,
    ChunkNotLoadedError,
    Coordinate,
    Direction,
    Holder,
    InputPart,
    Network,
    NetworkId,
    OutputPart,
    Part,
    PartKind,
    PipeError,
    PipeTooLongError,
    TooManyOutputsError,
    discover_network,
)

# Cache
from pipenet.cache import CacheStats, NetworkCache

# Grid collaborators
from pipenet.grid import (
    Cell,
    CellKindProvider,
    Grid,
    LocalCellKindProvider,
    LocalGrid,
    SimpleHolder,
    TransportScheduler,
)

# Storage
from pipenet.storage import ExpiringIndex, NetworkIdAllocator, RemovalCause

__all__ = [
    # Version
    "__version__",
    # Core
    "Coordinate",
    "Direction",
    "PartKind",
    "Holder",
    "InputPart",
    "OutputPart",
    "ChunkLoaderPart",
    "Part",
    "Network",
    "NetworkId",
    "discover_network",
    # Errors
    "PipeError",
    "ChunkNotLoadedError",
    "PipeTooLongError",
    "TooManyOutputsError",
    # Cache
    "NetworkCache",
    "CacheStats",
    # Grid
    "Cell",
    "Grid",
    "CellKindProvider",
    "TransportScheduler",
    "LocalGrid",
    "LocalCellKindProvider",
    "SimpleHolder",
    # Storage
    "ExpiringIndex",
    "RemovalCause",
    "NetworkIdAllocator",
    # Config
    "PipeSettings",
]
