"""Network aggregate, identifiers and failure types."""

from pipenet.core.network.errors import (
    ChunkNotLoadedError,
    PipeError,
    PipeTooLongError,
    TooManyOutputsError,
)
from pipenet.core.network.models import Network, NetworkId

__all__ = [
    "Network",
    "NetworkId",
    "PipeError",
    "ChunkNotLoadedError",
    "PipeTooLongError",
    "TooManyOutputsError",
]
