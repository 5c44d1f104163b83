"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from pipenet import (
    Cell,
    Coordinate,
    Direction,
    LocalCellKindProvider,
    LocalGrid,
    NetworkCache,
    PartKind,
    PipeSettings,
    SimpleHolder,
)

WORLD = "world"
Y = 64


class PipeLayout:
    """Places pipe cells on a LocalGrid along the x axis at a fixed height."""

    def __init__(self, grid: LocalGrid | None = None):
        self.grid = grid or LocalGrid()

    @staticmethod
    def at(x: int, z: int = 0, y: int = Y) -> Coordinate:
        return Coordinate(WORLD, x, y, z)

    def glass(self, coordinate: Coordinate, color: str = "red") -> Coordinate:
        self.grid.set_cell(coordinate, Cell(f"{color}_stained_glass"))
        return coordinate

    def run(self, start_x: int, end_x: int, z: int = 0, color: str = "red") -> list[Coordinate]:
        """Place segments from start_x to end_x inclusive."""
        step = 1 if end_x >= start_x else -1
        return [self.glass(self.at(x, z), color) for x in range(start_x, end_x + step, step)]

    def input(
        self, coordinate: Coordinate, facing: Direction, items: tuple[str, ...] = ()
    ) -> Coordinate:
        cell = Cell("dispenser", facing, SimpleHolder(list(items)), PartKind.INPUT)
        self.grid.set_cell(coordinate, cell)
        return coordinate

    def output(self, coordinate: Coordinate, facing: Direction) -> Coordinate:
        self.grid.set_cell(coordinate, Cell("dropper", facing, SimpleHolder(), PartKind.OUTPUT))
        return coordinate

    def chest(self, coordinate: Coordinate) -> Coordinate:
        self.grid.set_cell(coordinate, Cell("chest", holder=SimpleHolder()))
        return coordinate

    def chunk_loader(self, coordinate: Coordinate) -> Coordinate:
        self.grid.set_cell(coordinate, Cell("beacon", part=PartKind.CHUNK_LOADER))
        return coordinate

    def line(
        self,
        length: int,
        z: int = 0,
        color: str = "red",
        start_x: int = 0,
        items: tuple[str, ...] = (),
    ) -> tuple[Coordinate, list[Coordinate], Coordinate]:
        """Input, `length` segments and an output into a chest, left to right.

        Returns:
            (input coordinate, segment coordinates, output coordinate)
        """
        source = self.input(self.at(start_x, z), Direction.EAST, items)
        segments = self.run(start_x + 1, start_x + length, z, color)
        sink = self.output(self.at(start_x + length + 1, z), Direction.EAST)
        self.chest(self.at(start_x + length + 2, z))
        return source, segments, sink


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingScheduler:
    """TransportScheduler that remembers every notification."""

    def __init__(self) -> None:
        self.ready: list[Coordinate] = []

    def network_ready(self, coordinate: Coordinate) -> None:
        self.ready.append(coordinate)


@pytest.fixture
def layout() -> PipeLayout:
    """Fresh grid with layout helpers."""
    return PipeLayout()


@pytest.fixture
def layout_cls() -> type[PipeLayout]:
    return PipeLayout


@pytest.fixture
def provider() -> LocalCellKindProvider:
    return LocalCellKindProvider()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> RecordingScheduler:
    return RecordingScheduler()


@pytest.fixture
def make_cache(layout, provider, clock, scheduler):
    """Build a NetworkCache over the layout's grid with optional settings overrides."""

    def _make(**overrides) -> NetworkCache:
        settings = PipeSettings(**overrides)
        return NetworkCache(
            grid=layout.grid,
            provider=provider,
            settings=settings,
            scheduler=scheduler,
            clock=clock,
        )

    return _make


@pytest.fixture
def cache(make_cache) -> NetworkCache:
    """NetworkCache with default settings over the layout's grid."""
    return make_cache()
