"""Core functionalities: value models and stateless algorithms.

Architecture Note:
    core/ holds immutable value types, the network aggregate and the
    discovery algorithm. Nothing here keeps state between calls.
    For stateful services, see cache/ and storage/.
"""

from pipenet.core.coordinate import Coordinate, Direction
from pipenet.core.discovery import Classifier, discover_network
from pipenet.core.network import (
    ChunkNotLoadedError,
    Network,
    NetworkId,
    PipeError,
    PipeTooLongError,
    TooManyOutputsError,
)
from pipenet.core.part import (
    ChunkLoaderPart,
    Holder,
    InputPart,
    OutputPart,
    Part,
    PartKind,
    build_part,
    materialize_part,
)

__all__ = [
    # Coordinates
    "Coordinate",
    "Direction",
    # Parts
    "PartKind",
    "Holder",
    "InputPart",
    "OutputPart",
    "ChunkLoaderPart",
    "Part",
    "build_part",
    "materialize_part",
    # Networks
    "Network",
    "NetworkId",
    "PipeError",
    "ChunkNotLoadedError",
    "PipeTooLongError",
    "TooManyOutputsError",
    # Discovery
    "Classifier",
    "discover_network",
]
