"""Sets over the canonical values of an enum domain.

Presence is one bit per ordinal, the same representation ``Bitset`` uses, so
iteration is always in ordinal order and capacity is bounded by the domain.
"""

from __future__ import annotations

import enum
from collections.abc import MutableSet, Set
from typing import Generic, Iterable, Iterator, TypeVar

from enum_core.ordinal import OrdinalIndex, ordinal_index
from enum_containers.bitset import Bitset

E = TypeVar("E", bound=enum.Enum)


class _EnumSetBase(Set, Generic[E]):
    __slots__ = ("_index", "_bits")

    def __init__(self, enum_type: type[E], values: Iterable[E] = ()):
        self._index = ordinal_index(enum_type)
        self._bits = 0
        for value in values:
            self._insert(value)

    @classmethod
    def _wrap(cls, index: OrdinalIndex, bits: int):
        enum_set = cls.__new__(cls)
        enum_set._index = index
        enum_set._bits = bits
        return enum_set

    @classmethod
    def of(cls, first: E, *rest: E):
        """Build a set typed after ``first``."""
        return cls(type(first), (first, *rest))

    def _from_iterable(self, iterable):
        return type(self)(self.enum_type, iterable)

    def _insert(self, value) -> bool:
        # Decomposition validates every bit before any of them is inserted.
        before = self._bits
        for ordinal in self._index.decompose(value, "insert"):
            self._bits |= 1 << ordinal
        return self._bits != before

    @property
    def enum_type(self) -> type[E]:
        return self._index.domain.enum_type

    def contains(self, value) -> bool:
        ordinal = self._index.index_of(value)
        return ordinal is not None and bool(self._bits >> ordinal & 1)

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def count(self, value) -> int:
        return 1 if self.contains(value) else 0

    def __iter__(self) -> Iterator[E]:
        values = self._index.domain.values
        bits = self._bits
        for ordinal in range(len(values)):
            if bits >> ordinal & 1:
                yield values[ordinal]

    def __len__(self) -> int:
        return self._bits.bit_count()

    def size(self) -> int:
        return self._bits.bit_count()

    def empty(self) -> bool:
        return self._bits == 0

    def to_bitset(self) -> Bitset[E]:
        return Bitset.from_int(self.enum_type, self._bits)

    def __eq__(self, other) -> bool:
        if isinstance(other, _EnumSetBase):
            return self.enum_type is other.enum_type and self._bits == other._bits
        return Set.__eq__(self, other)

    def __repr__(self) -> str:
        body = ", ".join(value.name for value in self)
        return f"{type(self).__name__}[{self.enum_type.__qualname__}]({{{body}}})"


class EnumSet(_EnumSetBase[E], MutableSet):
    """Mutable set of canonical enum values.

    ``insert`` of a flags combination inserts each constituent flag and
    returns True when at least one of them was not already present.
    """

    __slots__ = ()

    def insert(self, value: E) -> bool:
        return self._insert(value)

    def add(self, value: E) -> None:
        self._insert(value)

    def update(self, values: Iterable[E]) -> None:
        for value in values:
            self._insert(value)

    def erase(self, value: E) -> int:
        bit = 1 << self._index.require(value, "erase")
        present = self._bits & bit
        self._bits &= ~bit
        return 1 if present else 0

    def discard(self, value: E) -> None:
        if self.contains(value):
            self.erase(value)

    def clear(self) -> None:
        self._bits = 0

    def copy(self) -> "EnumSet[E]":
        return self._wrap(self._index, self._bits)

    __copy__ = copy

    def freeze(self) -> "FrozenEnumSet[E]":
        return FrozenEnumSet._wrap(self._index, self._bits)


class FrozenEnumSet(_EnumSetBase[E]):
    """Immutable, hashable set; built without side effects."""

    __slots__ = ()

    def __hash__(self) -> int:
        return self._hash()

    def thaw(self) -> EnumSet[E]:
        return EnumSet._wrap(self._index, self._bits)


__all__ = ["EnumSet", "FrozenEnumSet"]
