"""Network discovery: bounded breadth-first classification of grid cells."""

from pipenet.core.discovery.flood_fill import Classifier, discover_network

__all__ = [
    "Classifier",
    "discover_network",
]
