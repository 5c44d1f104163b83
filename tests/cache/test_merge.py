"""Tests for merging networks joined by a new segment."""

import pytest

from pipenet import (
    Direction,
    InputPart,
    Network,
    NetworkId,
    OutputPart,
    PipeTooLongError,
)


@pytest.fixture
def two_lines(cache, layout):
    """Two cached red lines, oldest first."""
    first_source, _, _ = layout.line(3)
    second_source, _, _ = layout.line(3, z=4)
    (first,) = cache.lookup(first_source)
    (second,) = cache.lookup(second_source)
    return first, second


def test_merge_unions_every_member(cache, two_lines):
    first, second = two_lines
    inputs = {*first.inputs, *second.inputs}
    outputs = {*first.outputs, *second.outputs}
    segments = first.segments | second.segments

    merged = cache.merge([second, first])

    assert merged is not None
    assert set(merged.inputs) == inputs
    assert set(merged.outputs) == outputs
    assert merged.segments == segments
    assert merged.id > second.id


def test_merge_replaces_the_originals(cache, two_lines):
    first, second = two_lines

    merged = cache.merge(two_lines)

    assert first not in cache
    assert second not in cache
    assert cache.networks() == [merged]
    for location in [*merged.inputs, *merged.segments, *merged.outputs]:
        assert cache.lookup(location, cache_only=True) == {merged}
    stats = cache.stats()
    assert stats.primary == 2
    assert stats.single == 6
    assert stats.multi == 2


def test_mismatched_type_tags_do_not_merge(cache, layout):
    red_source, _, _ = layout.line(3)
    blue_source, _, _ = layout.line(3, z=4, color="blue")
    (red,) = cache.lookup(red_source)
    (blue,) = cache.lookup(blue_source)

    assert cache.merge([red, blue]) is None

    assert red in cache
    assert blue in cache


def test_merge_of_nothing(cache):
    assert cache.merge([]) is None


def test_merge_at_the_length_limit_is_accepted(make_cache, layout):
    cache = make_cache(max_pipe_length=5)
    first_source, _, _ = layout.line(3)
    second_source, _, _ = layout.line(2, z=4)
    (first,) = cache.lookup(first_source)
    (second,) = cache.lookup(second_source)

    merged = cache.merge([first, second])

    assert merged is not None
    assert len(merged.segments) == 5


def test_merge_over_the_length_limit_raises(make_cache, layout):
    cache = make_cache(max_pipe_length=3)
    first_source, _, _ = layout.line(3)
    second_source, _, _ = layout.line(1, z=4)
    (first,) = cache.lookup(first_source)
    (second,) = cache.lookup(second_source)

    with pytest.raises(PipeTooLongError):
        cache.merge([first, second])

    assert first not in cache
    assert second not in cache
    assert cache.stats().is_empty()


def test_newer_network_wins_shared_coordinates(cache, layout):
    """Where two members disagree about a part, the newest network's part is kept."""
    shared = layout.at(9)
    older = Network(
        id=NetworkId(101),
        type_tag="red_stained_glass",
        segments={layout.at(1)},
        inputs={layout.at(0): InputPart(layout.at(0), Direction.EAST)},
        outputs={shared: OutputPart(shared, Direction.EAST)},
    )
    newer = Network(
        id=NetworkId(102),
        type_tag="red_stained_glass",
        segments={layout.at(1, z=1)},
        inputs={layout.at(0, z=1): InputPart(layout.at(0, z=1), Direction.EAST)},
        outputs={shared: OutputPart(shared, Direction.UP)},
    )
    cache.install(older)
    cache.install(newer)

    merged = cache.merge([newer, older])

    assert merged is not None
    assert merged.outputs[shared].facing == Direction.UP


def test_merge_prunes_outputs_feeding_merged_inputs(cache, layout):
    """An output of one member that feeds another member's input is dropped."""
    feeding = OutputPart(layout.at(5), Direction.EAST)
    first = Network(
        id=NetworkId(101),
        type_tag="red_stained_glass",
        segments={layout.at(4)},
        inputs={layout.at(3): InputPart(layout.at(3), Direction.EAST)},
        outputs={
            feeding.coordinate: feeding,
            layout.at(5, z=2): OutputPart(layout.at(5, z=2), Direction.EAST),
        },
    )
    second = Network(
        id=NetworkId(102),
        type_tag="red_stained_glass",
        segments={layout.at(7)},
        inputs={layout.at(6): InputPart(layout.at(6), Direction.EAST)},
        outputs={layout.at(8): OutputPart(layout.at(8), Direction.EAST)},
    )
    cache.install(first)
    cache.install(second)

    merged = cache.merge([first, second])

    assert merged is not None
    assert feeding.coordinate not in merged.outputs
    assert set(merged.outputs) == {layout.at(5, z=2), layout.at(8)}


def test_merge_without_surviving_outputs_yields_nothing(cache, layout):
    loop = OutputPart(layout.at(2), Direction.EAST)
    first = Network(
        id=NetworkId(101),
        type_tag="red_stained_glass",
        segments={layout.at(1)},
        inputs={layout.at(0): InputPart(layout.at(0), Direction.EAST)},
        outputs={loop.coordinate: loop},
    )
    second = Network(
        id=NetworkId(102),
        type_tag="red_stained_glass",
        segments={layout.at(4)},
        inputs={layout.at(3): InputPart(layout.at(3), Direction.EAST)},
        outputs={layout.at(-1): OutputPart(layout.at(-1), Direction.EAST)},
    )
    cache.install(first)
    cache.install(second)

    assert cache.merge([first, second]) is None
    assert cache.stats().is_empty()
