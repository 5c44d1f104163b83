"""Pipe parts: variants, holder protocol and construction."""

from pipenet.core.part.models import (
    ChunkLoaderPart,
    Holder,
    InputPart,
    OutputPart,
    Part,
    PartKind,
)
from pipenet.core.part.operations import build_part, materialize_part

__all__ = [
    "PartKind",
    "Holder",
    "InputPart",
    "OutputPart",
    "ChunkLoaderPart",
    "Part",
    "build_part",
    "materialize_part",
]
