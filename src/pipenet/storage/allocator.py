"""Network identifier allocation service.

NetworkIdAllocator is a stateful service that hands out NetworkIds.
"""

from __future__ import annotations

from pipenet.core.network import NetworkId


class NetworkIdAllocator:
    """Allocates strictly increasing network IDs.

    Indices are never recycled, so comparing two ids tells which network
    was created first. Merge relies on this ordering to break ties.

    Args:
        start: First index to hand out (default 1).
    """

    def __init__(self, start: int = 1):
        self._next_index = start

    def allocate(self) -> NetworkId:
        """Allocate a new network ID.

        Returns:
            NetworkId with the next unused index.
        """
        index = self._next_index
        self._next_index += 1
        return NetworkId(index=index)

    def peek(self) -> NetworkId:
        """The id the next allocate() call will return."""
        return NetworkId(index=self._next_index)
