import logging

from pipenet import (
    Cell,
    Coordinate,
    Direction,
    LocalCellKindProvider,
    LocalGrid,
    NetworkCache,
    PartKind,
    PipeSettings,
    PipeTooLongError,
    SimpleHolder,
)


class PrintingScheduler:
    """Announces networks with items waiting to move."""

    def network_ready(self, coordinate: Coordinate) -> None:
        print(f"Items waiting at {coordinate}")


def build_pipe(grid: LocalGrid, length: int, z: int = 0) -> Coordinate:
    """Lay out hopper -> glass segments -> dropper -> chest. Returns the hopper."""
    source = Coordinate("world", 0, 64, z)
    holder = SimpleHolder(["iron_ingot"])
    grid.set_cell(source, Cell("hopper", Direction.EAST, holder, PartKind.INPUT))
    for x in range(1, length + 1):
        grid.set_cell(Coordinate("world", x, 64, z), Cell("red_stained_glass"))
    grid.set_cell(
        Coordinate("world", length + 1, 64, z),
        Cell("dropper", Direction.EAST, SimpleHolder(), PartKind.OUTPUT),
    )
    grid.set_cell(Coordinate("world", length + 2, 64, z), Cell("chest", holder=SimpleHolder()))
    return source


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    grid = LocalGrid()
    cache = NetworkCache(
        grid=grid,
        provider=LocalCellKindProvider(),
        settings=PipeSettings(max_pipe_length=8),
        scheduler=PrintingScheduler(),
    )

    source = build_pipe(grid, length=5)
    (network,) = cache.lookup(source)
    print(f"Discovered {network!r}")
    print(f"Cache: {cache.stats()}")

    # Growing the pipe past its limit tears the network down.
    try:
        for x in range(1, 5):
            placed = Coordinate("world", x, 64, 1)
            grid.set_cell(placed, Cell("red_stained_glass"))
            cache.add_segment(network, placed)
    except PipeTooLongError as e:
        print(f"Too long at {e.coordinate}")

    print(f"Cache after teardown: {cache.stats()}")

    # Anything too long is rejected at discovery as well.
    print(f"Lookup: {cache.lookup_safe(source)}")


if __name__ == "__main__":
    main()
