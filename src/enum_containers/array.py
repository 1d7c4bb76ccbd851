"""Dense arrays with one slot per value of an enum domain.

``FixedArray`` is the mutable form; ``FrozenFixedArray`` (built by
``to_array`` or ``FixedArray.freeze``) is the immutable, hashable form used for
constant tables. Both address slots by enum value:

  - ``at(key)`` / ``set_at(key, value)`` validate the key
  - ``array[key]`` skips validation; the caller guarantees ``key`` is canonical
"""

from __future__ import annotations

import copy
import enum
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Iterator, TypeVar

from enum_core.errors import EnumArityError, EnumDomainError, EnumIndexError
from enum_core.ordinal import OrdinalIndex, ordinal_index

E = TypeVar("E", bound=enum.Enum)
V = TypeVar("V")


def _check_arity(index: OrdinalIndex, values: Sequence, label: str) -> None:
    if len(values) != index.domain.count:
        raise EnumArityError(
            expected=index.domain.count, got=len(values), label=label
        )


class Slots(Sequence):
    """Read-only positional view of an array's slots, in ordinal order."""

    __slots__ = ("_owner",)

    def __init__(self, owner: "_ArrayBase"):
        self._owner = owner

    def __len__(self) -> int:
        return len(self._owner._slots)

    def __getitem__(self, position):
        return self._owner._slots[position]

    def __iter__(self):
        return iter(self._owner._slots)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class MutableSlots(Slots, MutableSequence):
    """Writable view. Values move between slots; the slots stay fixed."""

    __slots__ = ()

    def __setitem__(self, position, value) -> None:
        slots = self._owner._slots
        if isinstance(position, slice):
            value = list(value)
            width = len(range(*position.indices(len(slots))))
            if len(value) != width:
                raise EnumArityError(expected=width, got=len(value), label="slots")
        slots[position] = value

    def __delitem__(self, position) -> None:
        raise TypeError("array slots cannot be removed")

    def insert(self, position, value) -> None:
        raise TypeError("array slots cannot be added")

    def sort(self, *, key=None, reverse: bool = False) -> None:
        self._owner._slots.sort(key=key, reverse=reverse)


class _ArrayBase(Generic[E, V]):
    __slots__ = ("_index", "_slots")

    @property
    def enum_type(self) -> type[E]:
        return self._index.domain.enum_type

    def at(self, key: E) -> V:
        return self._slots[self._index.require(key, "at")]

    def __getitem__(self, key: E) -> V:
        return self._slots[self._index.unchecked(key, "getitem")]

    def front(self) -> V:
        if not self._slots:
            raise EnumIndexError(value=0, enum_type=self.enum_type, label="front")
        return self._slots[0]

    def back(self) -> V:
        if not self._slots:
            raise EnumIndexError(value=-1, enum_type=self.enum_type, label="back")
        return self._slots[-1]

    def size(self) -> int:
        return len(self._slots)

    def empty(self) -> bool:
        return not self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[V]:
        return iter(self._slots)

    def __reversed__(self) -> Iterator[V]:
        return reversed(self._slots)

    def keys(self) -> Iterator[E]:
        return iter(self._index.domain.values)

    def items(self) -> Iterator[tuple[E, V]]:
        return zip(self._index.domain.values, self._slots)

    def cslots(self) -> Slots:
        return Slots(self)

    def to_list(self) -> list[V]:
        return list(self._slots)

    def __eq__(self, other) -> bool:
        if not isinstance(other, _ArrayBase):
            return NotImplemented
        return self.enum_type is other.enum_type and tuple(self._slots) == tuple(
            other._slots
        )

    def __repr__(self) -> str:
        body = ", ".join(f"{key.name}={value!r}" for key, value in self.items())
        return f"{type(self).__name__}[{self.enum_type.__qualname__}]({body})"


class FixedArray(_ArrayBase[E, V]):
    """Mutable array with exactly one slot per domain value.

    Slots start as ``factory()`` (one call per slot), or ``None`` without a
    factory.
    """

    __slots__ = ()
    __hash__ = None

    def __init__(self, enum_type: type[E], factory: Callable[[], V] | None = None):
        self._index = ordinal_index(enum_type)
        count = self._index.domain.count
        if factory is None:
            self._slots = [None] * count
        else:
            self._slots = [factory() for _ in range(count)]

    @classmethod
    def from_values(cls, enum_type: type[E], values: Iterable[V]) -> "FixedArray[E, V]":
        array = cls(enum_type)
        values = list(values)
        _check_arity(array._index, values, "from_values")
        array._slots = values
        return array

    def __setitem__(self, key: E, value: V) -> None:
        self._slots[self._index.unchecked(key, "setitem")] = value

    def set_at(self, key: E, value: V) -> None:
        self._slots[self._index.require(key, "set_at")] = value

    def fill(self, value: V) -> None:
        """Assign a shallow copy of ``value`` to every slot."""
        self._slots[:] = [copy.copy(value) for _ in self._slots]

    def slots(self) -> MutableSlots:
        return MutableSlots(self)

    def copy(self) -> "FixedArray[E, V]":
        clone = type(self).__new__(type(self))
        clone._index = self._index
        clone._slots = list(self._slots)
        return clone

    __copy__ = copy

    def __deepcopy__(self, memo) -> "FixedArray[E, V]":
        clone = self.copy()
        clone._slots = copy.deepcopy(clone._slots, memo)
        return clone

    def freeze(self) -> "FrozenFixedArray[E, V]":
        return FrozenFixedArray(self.enum_type, self._slots)


class FrozenFixedArray(_ArrayBase[E, V]):
    """Immutable, hashable array; built without side effects."""

    __slots__ = ()

    def __init__(self, enum_type: type[E], values: Iterable[V]):
        self._index = ordinal_index(enum_type)
        values = tuple(values)
        _check_arity(self._index, values, "FrozenFixedArray")
        self._slots = values

    def __hash__(self) -> int:
        return hash((self.enum_type, self._slots))

    def thaw(self) -> FixedArray[E, V]:
        return FixedArray.from_values(self.enum_type, self._slots)


def to_array(enum_type: type[E], values: Iterable[V]) -> FrozenFixedArray[E, V]:
    """Build a constant table from ``values`` given in domain order."""
    return FrozenFixedArray(enum_type, values)


def _resolve_ordinal(index: OrdinalIndex, key, label: str) -> int:
    if isinstance(key, bool):
        raise TypeError(f"{label}: ordinal must be an int or enum value, not bool")
    if isinstance(key, enum.Enum):
        return index.require(key, label)
    if isinstance(key, int):
        if not 0 <= key < index.domain.count:
            raise EnumIndexError(value=key, enum_type=index.domain.enum_type, label=label)
        return key
    raise EnumDomainError(expected=index.domain.enum_type, got=key, label=label)


@dataclass(frozen=True, slots=True)
class Slot:
    """Accessor for one slot, validated once when built by ``slot()``."""

    enum_type: type
    ordinal: int

    @property
    def key(self):
        return ordinal_index(self.enum_type).value_at(self.ordinal)

    def _require_array(self, array: _ArrayBase) -> None:
        if array.enum_type is not self.enum_type:
            raise EnumDomainError(expected=self.enum_type, got=array.enum_type, label="slot")

    def get(self, array: _ArrayBase):
        self._require_array(array)
        return array._slots[self.ordinal]

    def set(self, array: FixedArray, value) -> None:
        self._require_array(array)
        array._slots[self.ordinal] = value


def slot(enum_type: type[E], key) -> Slot:
    """Validate ``key`` (an ordinal or a canonical value) and bind it."""
    index = ordinal_index(enum_type)
    return Slot(index.domain.enum_type, _resolve_ordinal(index, key, "slot"))


def get(array: _ArrayBase[E, V], key) -> V:
    return array._slots[_resolve_ordinal(array._index, key, "get")]


__all__ = [
    "FixedArray",
    "FrozenFixedArray",
    "Slots",
    "MutableSlots",
    "Slot",
    "to_array",
    "slot",
    "get",
]
