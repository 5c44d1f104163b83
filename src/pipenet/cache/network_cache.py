"""NetworkCache: four-tier cache of discovered pipe networks.

Tiers:
    primary:  input coordinate -> Network (bounded, expire-after-write)
    single:   segment coordinate -> Network (one owner per segment)
    multi:    output / chunk loader coordinate -> {NetworkId, ...}
    parts:    coordinate -> Part

The primary and single-owner tiers own networks. The multi-owner tier only
stores ids, resolved through the registry of live networks. Whenever the
last live primary entry of a network disappears, for whatever reason, the
removal cascade purges the network from every other tier.

Usage:
    cache = NetworkCache(grid=grid, provider=provider, settings=PipeSettings())

    # Find (or discover and cache) the networks at a coordinate
    networks = cache.lookup(coordinate)

    # Keep the cache in step with grid edits
    cache.add_segment(network, placed)
    cache.remove_part(network, broken_output)

    # Expire stale entries from the host's periodic tick
    cache.sweep()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from pipenet.config import PipeSettings
from pipenet.core.coordinate import Coordinate
from pipenet.core.discovery import discover_network
from pipenet.core.network import (
    Network,
    NetworkId,
    PipeError,
    PipeTooLongError,
    TooManyOutputsError,
)
from pipenet.core.part import (
    ChunkLoaderPart,
    InputPart,
    OutputPart,
    Part,
    materialize_part,
)
from pipenet.grid.protocol import CellKindProvider, Grid, TransportScheduler
from pipenet.storage.allocator import NetworkIdAllocator
from pipenet.storage.expiring import ExpiringIndex, RemovalCause

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Entry counts per tier."""

    networks: int
    primary: int
    single: int
    multi: int
    parts: int

    def is_empty(self) -> bool:
        """Check if no tier holds anything."""
        return not (self.networks or self.primary or self.single or self.multi or self.parts)


class NetworkCache:
    """Discovers networks on demand and keeps every tier consistent.

    Owns the four tiers and the registry of live networks. Reads the grid
    through the injected collaborators and never mutates it.

    Removal cascade:
        Expiry or eviction of one input's primary entry does not purge the
        network while another of its inputs is still cached. Only the
        network's last primary entry, removed for any cause, purges it from
        every tier. Hosts that want one stale input to drop the whole
        network call teardown() themselves.

    Mutations (add_part, remove_part, add_segment) ignore networks that are
    no longer cached.

    Args:
        grid: Grid to discover networks in.
        provider: Classifier for raw grid cells.
        settings: Limits and primary index sizing (default PipeSettings()).
        scheduler: Notified when an installed input has items to move.
        clock: Time source for primary index expiry.
        allocator: Source of network ids.
    """

    def __init__(
        self,
        grid: Grid,
        provider: CellKindProvider,
        settings: PipeSettings | None = None,
        scheduler: TransportScheduler | None = None,
        clock: Callable[[], float] = time.monotonic,
        allocator: NetworkIdAllocator | None = None,
    ):
        self._grid = grid
        self._provider = provider
        self._settings = settings or PipeSettings()
        self._scheduler = scheduler
        self._allocator = allocator or NetworkIdAllocator()

        self._networks: dict[NetworkId, Network] = {}
        self._primary: ExpiringIndex[Coordinate, Network] = ExpiringIndex(
            maximum_size=self._settings.pipe_cache_size,
            expire_after_write=self._settings.pipe_cache_duration,
            on_removal=self._on_primary_removal,
            clock=clock,
        )
        self._single: dict[Coordinate, Network] = {}
        self._multi: dict[Coordinate, set[NetworkId]] = {}
        self._parts: dict[Coordinate, Part] = {}

    @property
    def settings(self) -> PipeSettings:
        return self._settings

    # --- Lookup ---

    def lookup(self, coordinate: Coordinate, cache_only: bool = False) -> set[Network]:
        """Get the networks that include a coordinate.

        Consults the primary, then the single-owner, then the multi-owner
        tier. On a miss, discovers and installs a network unless
        `cache_only` is set.

        Args:
            coordinate: Any coordinate of a network.
            cache_only: Never run discovery.

        Returns:
            The networks at the coordinate; empty if there are none.

        Raises:
            PipeError: Discovery failed (never raised with cache_only).
        """
        cached = self._cached(coordinate)
        if cached or cache_only:
            return cached

        network = self.discover(coordinate)
        if network is None:
            return set()
        self.install(network)
        return {network}

    def lookup_safe(self, coordinate: Coordinate, cache_only: bool = False) -> set[Network]:
        """Same as lookup(), but a discovery failure yields an empty set."""
        try:
            return self.lookup(coordinate, cache_only)
        except PipeError as e:
            logger.debug("Lookup at %s found no network: %s", coordinate, e)
            return set()

    def network_by_input(self, coordinate: Coordinate) -> Network | None:
        """Get the network fed by the input at `coordinate`.

        Only the primary tier is consulted. On a miss, discovery runs only
        when the cell at the coordinate is an input part.

        Raises:
            PipeError: Discovery failed.
        """
        network = self._primary.get(coordinate)
        if network is not None:
            return network
        if not isinstance(self.classify(coordinate), InputPart):
            return None

        network = self.discover(coordinate)
        if network is not None:
            self.install(network)
        return network

    def discover(self, coordinate: Coordinate) -> Network | None:
        """Run discovery from `coordinate` without touching any tier.

        Raises:
            PipeError: Discovery failed.
        """
        return discover_network(
            coordinate,
            grid=self._grid,
            provider=self._provider,
            new_id=self._allocator.allocate,
            classify=self.classify,
            max_length=self._settings.max_pipe_length,
            max_outputs=self._settings.max_pipe_outputs,
        )

    def _cached(self, coordinate: Coordinate) -> set[Network]:
        network = self._primary.get(coordinate)
        if network is None:
            network = self._single.get(coordinate)
        if network is not None:
            return {network}
        owners = self._multi.get(coordinate, ())
        return {self._networks[owner] for owner in owners if owner in self._networks}

    # --- Parts ---

    def classify(self, coordinate: Coordinate) -> Part | None:
        """Get the part at a coordinate, from the part tier or the grid.

        Parts read from the grid are not cached; only install() and
        add_part() write the part tier.
        """
        part = self._parts.get(coordinate)
        if part is not None:
            return part
        return materialize_part(coordinate, self._grid, self._provider)

    def cached_part(self, coordinate: Coordinate) -> Part | None:
        """Get the part at a coordinate from the part tier only."""
        return self._parts.get(coordinate)

    # --- Install / teardown ---

    def install(self, network: Network) -> None:
        """Write a network into every tier.

        Inputs whose holder has items are reported to the scheduler.

        Args:
            network: Complete network to cache.
        """
        self._networks[network.id] = network
        for location, part in network.inputs.items():
            self._primary.put(location, network)
            self._parts[location] = part
            if self._scheduler is not None and part.has_items():
                self._scheduler.network_ready(location)
        for location in network.segments:
            self._single[location] = network
        for location, part in self._shared_parts(network):
            self._add_owner(location, network)
            self._parts[location] = part
        logger.debug("Installed %r", network)

    def teardown(self, network: Network) -> None:
        """Remove a network from every tier.

        Inputs are removed from the network one by one, each invalidating
        its primary entry; the last one triggers the removal cascade.

        Args:
            network: Network to drop.
        """
        for location in list(network.inputs):
            part = network.inputs.pop(location)
            self._discard_part(location, part)
            self._primary.discard(location, network)
        # No-op when the last invalidation already cascaded.
        self._purge(network)
        logger.debug("Tore down %r", network)

    def _on_primary_removal(
        self, location: Coordinate, network: Network, cause: RemovalCause
    ) -> None:
        if self._has_live_input(network, excluding=location):
            logger.debug(
                "Primary entry %s of %s removed (%s), other inputs still cached",
                location,
                network.id,
                cause.name,
            )
            return
        self._purge(network)

    def _has_live_input(self, network: Network, excluding: Coordinate) -> bool:
        return any(
            self._primary.peek(location) is network
            for location in network.inputs
            if location != excluding
        )

    def _purge(self, network: Network) -> None:
        """Drop every trace of a network. Idempotent per network."""
        if self._networks.get(network.id) is not network:
            return
        del self._networks[network.id]

        for location, part in list(network.inputs.items()):
            self._primary.discard(location, network)
            if location not in self._primary:
                self._discard_part(location, part)
        for location in network.segments:
            if self._single.get(location) is network:
                del self._single[location]
        for location, part in self._shared_parts(network):
            self._remove_owner(location, network)
            if location not in self._multi:
                self._discard_part(location, part)
        logger.debug("Purged %s from every tier", network.id)

    # --- Mutation ---

    def add_part(self, network: Network, part: Part) -> None:
        """Attach a newly placed part to a cached network.

        Networks that are no longer cached are left untouched.

        Args:
            network: Network the part connects to.
            part: The new part.

        Raises:
            TooManyOutputsError: The network would exceed the output limit;
                it has been torn down.
        """
        if not self._is_live(network):
            return
        location = part.coordinate
        if isinstance(part, InputPart):
            network.inputs[location] = part
            for input_location in list(network.inputs):
                self._primary.put(input_location, network)
        elif isinstance(part, OutputPart):
            if location not in network.outputs and self._settings.exceeds_outputs(
                len(network.outputs) + 1
            ):
                logger.info("Output at %s exceeds the limit of %s", location, network.id)
                self.teardown(network)
                raise TooManyOutputsError(location)
            network.outputs[location] = part
            self._add_owner(location, network)
        else:
            network.chunk_loaders[location] = part
            self._add_owner(location, network)
        self._parts[location] = part

    def remove_part(self, network: Network, part: Part) -> None:
        """Detach a removed part from a cached network.

        Removing the last output tears the network down. Networks that are
        no longer cached are left untouched.

        Args:
            network: Network the part belonged to.
            part: The removed part.
        """
        if not self._is_live(network):
            return
        location = part.coordinate
        if isinstance(part, InputPart):
            network.inputs.pop(location, None)
            self._primary.discard(location, network)
            if not network.inputs:
                self._purge(network)
        elif isinstance(part, OutputPart):
            network.outputs.pop(location, None)
            self._remove_owner(location, network)
            if not network.outputs:
                self.teardown(network)
        else:
            network.chunk_loaders.pop(location, None)
            self._remove_owner(location, network)
        self._discard_part(location, part)

    def add_segment(self, network: Network, coordinate: Coordinate) -> None:
        """Extend a cached network by one segment cell.

        Networks that are no longer cached are left untouched.

        Args:
            network: Network the segment joins.
            coordinate: The new segment.

        Raises:
            PipeTooLongError: The network would exceed the length limit;
                it has been torn down.
        """
        if not self._is_live(network):
            return
        if coordinate not in network.segments and self._settings.exceeds_length(
            len(network.segments) + 1
        ):
            logger.info("Segment at %s exceeds the length limit of %s", coordinate, network.id)
            self.teardown(network)
            raise PipeTooLongError(coordinate)
        network.segments.add(coordinate)
        self._single[coordinate] = network

    def _is_live(self, network: Network) -> bool:
        if network in self:
            return True
        logger.debug("Ignoring edit of %s: no longer cached", network.id)
        return False

    def merge(self, networks: Iterable[Network]) -> Network | None:
        """Join networks that a new segment connected into one.

        Members are combined in ascending id order, so at a shared
        coordinate the most recently created network's part wins. Every
        original is torn down before the limits are checked.

        Args:
            networks: Networks to join.

        Returns:
            The merged, installed network; None if there was nothing to
            merge, the type tags differ (originals stay cached), or the
            combined network is not complete.

        Raises:
            PipeTooLongError: Combined segments exceed the length limit.
            TooManyOutputsError: Combined outputs exceed the output limit.
        """
        ordered = sorted(set(networks), key=lambda network: network.id)
        if not ordered:
            return None
        type_tag = ordered[0].type_tag
        if any(network.type_tag != type_tag for network in ordered):
            logger.debug("Not merging %s: type tags differ", [n.id for n in ordered])
            return None

        inputs: dict[Coordinate, InputPart] = {}
        outputs: dict[Coordinate, OutputPart] = {}
        chunk_loaders: dict[Coordinate, ChunkLoaderPart] = {}
        segments: dict[Coordinate, None] = {}
        for network in ordered:
            inputs.update(network.inputs)
            outputs.update(network.outputs)
            chunk_loaders.update(network.chunk_loaders)
            segments.update(dict.fromkeys(network.segments))

        for network in ordered:
            self.teardown(network)

        if self._settings.exceeds_length(len(segments)):
            raise PipeTooLongError(next(iter(segments)))
        if self._settings.exceeds_outputs(len(outputs)):
            raise TooManyOutputsError(next(iter(outputs)))

        outputs = {
            location: output for location, output in outputs.items() if output.target not in inputs
        }
        merged = Network(
            id=self._allocator.allocate(),
            type_tag=type_tag,
            segments=set(segments),
            inputs=inputs,
            outputs=outputs,
            chunk_loaders=chunk_loaders,
        )
        if not merged.is_complete():
            logger.debug("Merge of %s left no complete network", [n.id for n in ordered])
            return None
        self.install(merged)
        logger.debug("Merged %s into %r", [n.id for n in ordered], merged)
        return merged

    # --- Multi-owner tier ---

    def _add_owner(self, location: Coordinate, network: Network) -> None:
        self._multi.setdefault(location, set()).add(network.id)

    def _remove_owner(self, location: Coordinate, network: Network) -> None:
        owners = self._multi.get(location)
        if owners is None:
            return
        owners.discard(network.id)
        if not owners:
            del self._multi[location]

    def _discard_part(self, location: Coordinate, part: Part) -> None:
        if self._parts.get(location) == part:
            del self._parts[location]

    @staticmethod
    def _shared_parts(network: Network) -> list[tuple[Coordinate, OutputPart | ChunkLoaderPart]]:
        return [*network.outputs.items(), *network.chunk_loaders.items()]

    # --- Maintenance ---

    def sweep(self) -> int:
        """Expire stale primary entries, cascading as needed.

        Returns:
            Number of primary entries that expired.
        """
        return self._primary.sweep()

    def clear(self) -> None:
        """Tear down every live network."""
        for network in list(self._networks.values()):
            self.teardown(network)

    def networks(self) -> list[Network]:
        """All live networks, oldest first."""
        return [self._networks[network_id] for network_id in sorted(self._networks)]

    def stats(self) -> CacheStats:
        """Count the entries in every tier."""
        return CacheStats(
            networks=len(self._networks),
            primary=len(self._primary),
            single=len(self._single),
            multi=len(self._multi),
            parts=len(self._parts),
        )

    def __contains__(self, network: object) -> bool:
        return isinstance(network, Network) and self._networks.get(network.id) is network
