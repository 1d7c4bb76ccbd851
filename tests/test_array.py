import copy
from collections.abc import MutableSequence, Sequence

import pytest

from enum_containers import (
    FixedArray,
    FrozenFixedArray,
    MutableSlots,
    Slots,
    get,
    slot,
    to_array,
)
from enum_core.errors import EnumArityError, EnumDomainError, EnumIndexError
from tests.harness import COLOR_MAX, PRIMARY, RGB, Direction, Empty, Other, TColor


def test_initializer_maps_values_in_domain_order():
    table = to_array(TColor, PRIMARY)
    assert table.at(TColor.RED) == RGB(COLOR_MAX, 0, 0)
    assert table.at(TColor.GREEN) == RGB(0, COLOR_MAX, 0)
    assert table.at(TColor.BLUE) == RGB(0, 0, COLOR_MAX)


def test_sort_moves_values_not_slots():
    colors = FixedArray.from_values(TColor, [1, 4, 2])
    before = to_array(TColor, [1, 4, 2])
    assert colors == before
    assert [(key, colors[key]) for key in colors.keys()] == [
        (TColor.RED, 1),
        (TColor.GREEN, 4),
        (TColor.BLUE, 2),
    ]

    colors.slots().sort()

    assert colors == to_array(TColor, [1, 2, 4])
    assert colors.at(TColor.RED) == 1
    assert colors.at(TColor.GREEN) == 2
    assert colors.at(TColor.BLUE) == 4


def test_default_construction_value_initializes_slots():
    colors = FixedArray(TColor, RGB)
    assert not colors.empty()
    assert colors.size() == 3
    assert len(colors) == 3
    assert all(colors.at(key).empty() for key in TColor)


def test_default_construction_without_factory_is_none():
    assert FixedArray(Direction).to_list() == [None, None, None, None]


def test_factory_is_called_per_slot():
    lists = FixedArray(TColor, list)
    lists.at(TColor.RED).append(1)
    assert lists.at(TColor.GREEN) == []


def test_at_rejects_combined_flags():
    colors = FixedArray(TColor, RGB)
    with pytest.raises(EnumIndexError):
        colors.at(TColor.BLUE | TColor.GREEN)
    with pytest.raises(EnumIndexError):
        colors.set_at(TColor.RED | TColor.GREEN, RGB())
    with pytest.raises(IndexError):
        colors.at(TColor(0))


def test_at_rejects_foreign_enum():
    colors = FixedArray(TColor, RGB)
    with pytest.raises(EnumDomainError):
        colors.at(Other.RED)


def test_unchecked_write_then_checked_read():
    colors = FixedArray(TColor, RGB)
    for key, value in zip(TColor, PRIMARY):
        colors[key] = value
    assert colors.at(TColor.RED) == RGB(COLOR_MAX, 0, 0)
    assert colors.at(TColor.BLUE) == RGB(0, 0, COLOR_MAX)
    assert colors.front() == RGB(COLOR_MAX, 0, 0)
    assert colors.back() == RGB(0, 0, COLOR_MAX)


def test_set_at_writes_slot():
    headings = FixedArray(Direction, int)
    headings.set_at(Direction.SOUTH, 180)
    assert headings.to_list() == [0, 0, 180, 0]
    assert headings[Direction.SOUTH] == 180


def test_fill_and_equality():
    colors = FixedArray(TColor, RGB)
    for key, value in zip(TColor, PRIMARY):
        colors[key] = value

    compare = FixedArray(TColor, RGB)
    compare.fill(RGB(COLOR_MAX, COLOR_MAX, COLOR_MAX))
    assert colors != compare

    for key, value in zip(TColor, PRIMARY):
        compare[key] = value
    assert colors == compare


def test_fill_gives_each_slot_its_own_copy():
    rows = FixedArray(TColor)
    rows.fill([])
    rows.at(TColor.RED).append(1)
    assert rows.to_list() == [[1], [], []]


def test_arrays_over_different_enums_are_not_equal():
    assert FixedArray.from_values(TColor, [1, 2, 4]) != FixedArray.from_values(
        Other, [1, 2, 4]
    )


def test_from_values_requires_exact_length():
    with pytest.raises(EnumArityError, match=r"expected 3 values, got 2"):
        FixedArray.from_values(TColor, [1, 2])
    with pytest.raises(ValueError):
        to_array(TColor, [1, 2, 3, 4])


def test_empty_enum_array():
    nothing = FixedArray(Empty, int)
    assert nothing.size() == 0
    assert nothing.empty()
    assert list(nothing) == []
    with pytest.raises(EnumIndexError):
        nothing.front()
    with pytest.raises(EnumIndexError):
        nothing.back()
    assert to_array(Empty, []).empty()


def test_iteration_is_ordinal_order():
    headings = FixedArray.from_values(Direction, [0, 90, 180, 270])
    assert list(headings) == [0, 90, 180, 270]
    assert list(reversed(headings)) == [270, 180, 90, 0]
    assert list(headings.items()) == [
        (Direction.NORTH, 0),
        (Direction.EAST, 90),
        (Direction.SOUTH, 180),
        (Direction.WEST, 270),
    ]


def test_mutable_and_read_only_views_differ_by_type():
    colors = FixedArray.from_values(TColor, [3, 1, 2])
    mutable = colors.slots()
    read_only = colors.cslots()
    assert isinstance(mutable, MutableSlots)
    assert isinstance(mutable, MutableSequence)
    assert isinstance(read_only, Slots)
    assert isinstance(read_only, Sequence)
    assert not isinstance(read_only, MutableSequence)
    assert not hasattr(read_only, "__setitem__")
    assert list(read_only) == [3, 1, 2]


def test_mutable_view_writes_through_but_cannot_resize():
    colors = FixedArray.from_values(TColor, [3, 1, 2])
    view = colors.slots()
    view[0] = 9
    view.reverse()
    assert colors.to_list() == [2, 1, 9]
    view[0:2] = [5, 6]
    assert colors.to_list() == [5, 6, 9]
    with pytest.raises(EnumArityError):
        view[0:2] = [1]
    with pytest.raises(TypeError):
        view.append(4)
    with pytest.raises(TypeError):
        del view[0]
    assert colors.size() == 3


def test_copy_duplicates_storage():
    original = FixedArray.from_values(TColor, [[1], [2], [3]])
    shallow = original.copy()
    shallow[TColor.RED] = [7]
    assert original.at(TColor.RED) == [1]

    deep = copy.deepcopy(original)
    deep.at(TColor.GREEN).append(5)
    assert original.at(TColor.GREEN) == [2]
    assert copy.copy(original) == original


def test_frozen_array_is_hashable_and_round_trips():
    colors = FixedArray.from_values(TColor, [1, 2, 4])
    frozen = colors.freeze()
    assert isinstance(frozen, FrozenFixedArray)
    assert frozen == colors
    assert hash(frozen) == hash(to_array(TColor, [1, 2, 4]))
    assert not hasattr(frozen, "fill")
    thawed = frozen.thaw()
    thawed[TColor.RED] = 0
    assert frozen.at(TColor.RED) == 1


def test_mutable_array_is_unhashable():
    with pytest.raises(TypeError):
        hash(FixedArray(TColor))


def test_get_by_ordinal_and_by_value():
    table = to_array(TColor, [1, 4, 2])
    assert [get(table, ordinal) for ordinal in range(3)] == [1, 4, 2]
    assert get(table, TColor.GREEN) == 4
    with pytest.raises(EnumIndexError):
        get(table, 3)
    with pytest.raises(EnumIndexError):
        get(table, -1)
    with pytest.raises(EnumIndexError):
        get(table, TColor.RED | TColor.BLUE)
    with pytest.raises(TypeError):
        get(table, True)
    with pytest.raises(EnumDomainError):
        get(table, "RED")


def test_slot_validates_when_built():
    blue = slot(TColor, TColor.BLUE)
    assert blue.ordinal == 2
    assert blue.key is TColor.BLUE
    assert slot(TColor, 0).key is TColor.RED
    with pytest.raises(EnumIndexError):
        slot(TColor, 3)
    with pytest.raises(EnumIndexError):
        slot(TColor, TColor.RED | TColor.GREEN)


def test_slot_reads_and_writes_matching_arrays():
    red = slot(TColor, TColor.RED)
    colors = FixedArray(TColor, RGB)
    red.set(colors, RGB(COLOR_MAX, 0, 0))
    assert red.get(colors) == RGB(COLOR_MAX, 0, 0)
    assert red.get(to_array(TColor, PRIMARY)) == RGB(COLOR_MAX, 0, 0)
    with pytest.raises(EnumDomainError):
        red.get(FixedArray(Other))


def test_repr_names_keys():
    table = to_array(TColor, [1, 2, 4])
    assert repr(table) == "FrozenFixedArray[TColor](RED=1, GREEN=2, BLUE=4)"


def test_unchecked_access_with_guard(index_guard):
    colors = FixedArray(TColor, int)
    with pytest.raises(EnumIndexError):
        colors[TColor.RED | TColor.GREEN]
    with pytest.raises(EnumIndexError):
        colors[TColor.RED | TColor.GREEN] = 1
