"""Storage services: the expiring primary index and id allocation."""

from pipenet.storage.allocator import NetworkIdAllocator
from pipenet.storage.expiring import ExpiringIndex, RemovalCause, RemovalListener

__all__ = [
    "ExpiringIndex",
    "RemovalCause",
    "RemovalListener",
    "NetworkIdAllocator",
]
