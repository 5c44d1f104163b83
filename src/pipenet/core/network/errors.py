"""Failures raised by discovery and network mutation.

Every error carries the coordinate where the limit or condition was hit.
"""

from __future__ import annotations

from pipenet.core.coordinate import Coordinate


class PipeError(Exception):
    """Base class for network discovery and mutation failures."""

    def __init__(self, coordinate: Coordinate, message: str | None = None):
        self.coordinate = coordinate
        super().__init__(message or f"{type(self).__name__} at {coordinate}")


class ChunkNotLoadedError(PipeError):
    """Discovery reached an unloaded partition before any chunk loader.

    Recoverable: retry once the partition is resident, or place a chunk
    loader first.
    """


class PipeTooLongError(PipeError):
    """Segment count exceeded the configured maximum."""


class TooManyOutputsError(PipeError):
    """Output count exceeded the configured maximum."""
