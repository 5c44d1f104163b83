"""Network cache: the four tiers, the removal cascade and all mutations.

Architecture Note:
    cache/ is the stateful service layer. It owns the tiers and the
    registry of live networks, and calls into core/ for discovery.
"""

from pipenet.cache.network_cache import CacheStats, NetworkCache

__all__ = [
    "NetworkCache",
    "CacheStats",
]
