"""Tests for the in-memory grid and its cell classifier."""

import pytest

from pipenet import (
    Cell,
    CellKindProvider,
    Coordinate,
    Direction,
    Grid,
    LocalCellKindProvider,
    LocalGrid,
    PartKind,
    SimpleHolder,
)


@pytest.fixture
def grid():
    return LocalGrid()


def test_missing_cells_are_air(grid):
    assert grid.cell_at(Coordinate("world", 0, 0, 0)).material == "air"
    assert len(grid) == 0


def test_set_and_remove(grid):
    at = Coordinate("world", 1, 2, 3)
    grid.set_cell(at, Cell("red_stained_glass"))

    assert grid.cell_at(at).material == "red_stained_glass"
    assert grid.remove_cell(at) is True
    assert grid.remove_cell(at) is False
    assert grid.cell_at(at).material == "air"


def test_partitions_load_and_unload(grid):
    inside = Coordinate("world", 17, 64, 31)
    same_partition = Coordinate("world", 31, 0, 16)
    elsewhere = Coordinate("world", 0, 64, 0)

    grid.unload_partition(inside)

    assert not grid.is_partition_resident(same_partition)
    assert grid.is_partition_resident(elsewhere)

    grid.load_partition(inside)
    assert grid.is_partition_resident(same_partition)


def test_neighbors_follow_direction_order(grid):
    at = Coordinate("world", 0, 64, 0)

    assert list(grid.neighbors_of(at)) == [at.relative(d) for d in Direction]


def test_protocols_are_satisfied(grid):
    assert isinstance(grid, Grid)
    assert isinstance(LocalCellKindProvider(), CellKindProvider)


class TestLocalCellKindProvider:
    @pytest.fixture
    def provider(self):
        return LocalCellKindProvider()

    def test_segment_type_is_the_material(self, provider):
        assert provider.segment_type(Cell("lime_stained_glass")) == "lime_stained_glass"

    @pytest.mark.parametrize(
        "cell",
        [Cell("stone"), Cell("air"), Cell("red_stained_glass", part=PartKind.INPUT)],
    )
    def test_non_segments(self, provider, cell):
        assert provider.segment_type(cell) is None

    def test_part_kind_comes_from_the_cell(self, provider):
        assert provider.part_kind(Cell("dropper", part=PartKind.OUTPUT)) is PartKind.OUTPUT
        assert provider.part_kind(Cell("stone")) is None

    @pytest.mark.parametrize(
        ("cell", "receives"),
        [
            (Cell("chest", holder=SimpleHolder()), True),
            (Cell("composter"), True),
            (Cell("stone"), False),
        ],
    )
    def test_receivers(self, provider, cell, receives):
        assert provider.is_receiver(cell) is receives

    def test_custom_suffix(self):
        provider = LocalCellKindProvider(segment_suffix="_pipe")

        assert provider.segment_type(Cell("copper_pipe")) == "copper_pipe"
        assert provider.segment_type(Cell("red_stained_glass")) is None


def test_simple_holder():
    assert SimpleHolder().is_empty()
    assert not SimpleHolder(["stick"]).is_empty()
