from __future__ import annotations

import enum
from typing import Generic, Iterable, TypeVar

from enum_core.errors import (
    EnumDomainError,
    EnumOverflowError,
    EnumParseError,
)
from enum_core.ordinal import OrdinalIndex, ordinal_index

E = TypeVar("E", bound=enum.Enum)

ULONG_BITS = 32
ULLONG_BITS = 64


class Bitset(Generic[E]):
    """N-bit vector with one bit per value of an enum domain.

    Bit ``i`` belongs to ordinal ``i``. Constructing from a flags combination
    sets the bit of every constituent flag; bits outside the declared flags
    raise ``EnumIndexError``.
    """

    __slots__ = ("_index", "_bits")
    __hash__ = None

    def __init__(self, enum_type: type[E], value: E | None = None):
        self._index = ordinal_index(enum_type)
        self._bits = 0
        if value is not None:
            self._bits = self._bits_of(value, "Bitset")

    @classmethod
    def _wrap(cls, index: OrdinalIndex, bits: int) -> "Bitset[E]":
        bitset = cls.__new__(cls)
        bitset._index = index
        bitset._bits = bits
        return bitset

    @classmethod
    def from_values(cls, enum_type: type[E], values: Iterable[E]) -> "Bitset[E]":
        bitset = cls(enum_type)
        for value in values:
            bitset._bits |= bitset._bits_of(value, "from_values")
        return bitset

    @classmethod
    def from_int(cls, enum_type: type[E], bits: int) -> "Bitset[E]":
        index = ordinal_index(enum_type)
        count = index.domain.count
        if bits < 0:
            raise ValueError(f"from_int: negative bit pattern {bits}")
        if bits >> count:
            raise EnumOverflowError(count=bits.bit_length(), width=count, label="from_int")
        return cls._wrap(index, bits)

    @classmethod
    def from_string(
        cls,
        enum_type: type[E],
        text: str,
        separator: str = "|",
        zero_char: str | None = None,
        one_char: str | None = None,
    ) -> "Bitset[E]":
        """Parse the output of ``to_string`` back into a bitset."""
        index = ordinal_index(enum_type)
        domain = index.domain
        bits = 0
        if domain.is_flags and zero_char is None and one_char is None:
            if not text:
                return cls._wrap(index, 0)
            by_name = {
                domain.name_of(value): ordinal
                for ordinal, value in enumerate(domain.values)
            }
            for name in text.split(separator):
                ordinal = by_name.get(name.strip())
                if ordinal is None:
                    raise EnumParseError(text=text, enum_type=enum_type, label="from_string")
                bits |= 1 << ordinal
            return cls._wrap(index, bits)
        zero = "0" if zero_char is None else zero_char
        one = "1" if one_char is None else one_char
        if len(text) != domain.count:
            raise EnumParseError(text=text, enum_type=enum_type, label="from_string")
        for ordinal, char in enumerate(text):
            if char == one:
                bits |= 1 << ordinal
            elif char != zero:
                raise EnumParseError(text=text, enum_type=enum_type, label="from_string")
        return cls._wrap(index, bits)

    @property
    def enum_type(self) -> type[E]:
        return self._index.domain.enum_type

    def _bits_of(self, value, label: str) -> int:
        bits = 0
        for ordinal in self._index.decompose(value, label):
            bits |= 1 << ordinal
        return bits

    def _full(self) -> int:
        return (1 << self._index.domain.count) - 1

    def _operand(self, other, label: str) -> int | None:
        if isinstance(other, Bitset):
            if other.enum_type is not self.enum_type:
                raise EnumDomainError(expected=self.enum_type, got=other.enum_type, label=label)
            return other._bits
        if isinstance(other, self.enum_type):
            return self._bits_of(other, label)
        return None

    def set(self, key: E | None = None, value: bool = True) -> "Bitset[E]":
        if key is None:
            self._bits = self._full() if value else 0
            return self
        bit = 1 << self._index.require(key, "set")
        if value:
            self._bits |= bit
        else:
            self._bits &= ~bit
        return self

    def reset(self, key: E | None = None) -> "Bitset[E]":
        if key is None:
            self._bits = 0
            return self
        self._bits &= ~(1 << self._index.require(key, "reset"))
        return self

    def flip(self, key: E | None = None) -> "Bitset[E]":
        if key is None:
            self._bits ^= self._full()
            return self
        self._bits ^= 1 << self._index.require(key, "flip")
        return self

    def test(self, key: E) -> bool:
        return bool(self._bits >> self._index.require(key, "test") & 1)

    def __getitem__(self, key: E) -> bool:
        return bool(self._bits >> self._index.unchecked(key, "getitem") & 1)

    def __setitem__(self, key: E, value: bool) -> None:
        bit = 1 << self._index.unchecked(key, "setitem")
        if value:
            self._bits |= bit
        else:
            self._bits &= ~bit

    def count(self) -> int:
        return self._bits.bit_count()

    def size(self) -> int:
        return self._index.domain.count

    def __len__(self) -> int:
        return self._index.domain.count

    def any(self) -> bool:
        return self._bits != 0

    def all(self) -> bool:
        return self._bits == self._full()

    def none(self) -> bool:
        return self._bits == 0

    def __bool__(self) -> bool:
        return self._bits != 0

    def _to_width(self, width: int, label: str) -> int:
        count = self._index.domain.count
        if count > width:
            raise EnumOverflowError(count=count, width=width, label=label)
        return self._bits

    def to_ulong(self) -> int:
        return self._to_width(ULONG_BITS, "to_ulong")

    def to_ullong(self) -> int:
        return self._to_width(ULLONG_BITS, "to_ullong")

    def to_int(self) -> int:
        return self._bits

    def to_enum(self) -> E | int:
        """Combine the set flags back into a single value of the flags type.

        ``enum.Flag`` types always yield a member. Other enums opted in as
        flags yield the member when exactly one flag (or a declared value)
        matches, and the plain ``int`` their ``|`` produces otherwise.
        """
        domain = self._index.domain
        if not domain.is_flags:
            raise TypeError(f"{domain.enum_type.__qualname__} is not a flags enumeration")
        bits = 0
        for ordinal, mask in enumerate(domain.masks):
            if self._bits >> ordinal & 1:
                bits |= mask
        if issubclass(domain.enum_type, enum.Flag):
            return domain.enum_type(bits)
        try:
            return domain.enum_type(bits)
        except ValueError:
            return bits

    def to_string(
        self,
        separator: str = "|",
        zero_char: str | None = None,
        one_char: str | None = None,
    ) -> str:
        domain = self._index.domain
        bits = self._bits
        if domain.is_flags and zero_char is None and one_char is None:
            return separator.join(
                domain.name_of(value)
                for ordinal, value in enumerate(domain.values)
                if bits >> ordinal & 1
            )
        zero = "0" if zero_char is None else zero_char
        one = "1" if one_char is None else one_char
        return "".join(
            one if bits >> ordinal & 1 else zero for ordinal in range(domain.count)
        )

    def __and__(self, other) -> "Bitset[E]":
        bits = self._operand(other, "and")
        if bits is None:
            return NotImplemented
        return self._wrap(self._index, self._bits & bits)

    def __or__(self, other) -> "Bitset[E]":
        bits = self._operand(other, "or")
        if bits is None:
            return NotImplemented
        return self._wrap(self._index, self._bits | bits)

    def __xor__(self, other) -> "Bitset[E]":
        bits = self._operand(other, "xor")
        if bits is None:
            return NotImplemented
        return self._wrap(self._index, self._bits ^ bits)

    __rand__ = __and__
    __ror__ = __or__
    __rxor__ = __xor__

    def __iand__(self, other) -> "Bitset[E]":
        bits = self._operand(other, "and")
        if bits is None:
            return NotImplemented
        self._bits &= bits
        return self

    def __ior__(self, other) -> "Bitset[E]":
        bits = self._operand(other, "or")
        if bits is None:
            return NotImplemented
        self._bits |= bits
        return self

    def __ixor__(self, other) -> "Bitset[E]":
        bits = self._operand(other, "xor")
        if bits is None:
            return NotImplemented
        self._bits ^= bits
        return self

    def __invert__(self) -> "Bitset[E]":
        return self._wrap(self._index, self._full() & ~self._bits)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bitset):
            return NotImplemented
        return self.enum_type is other.enum_type and self._bits == other._bits

    def copy(self) -> "Bitset[E]":
        return self._wrap(self._index, self._bits)

    __copy__ = copy

    def __deepcopy__(self, memo) -> "Bitset[E]":
        return self.copy()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Bitset[{self.enum_type.__qualname__}]({self.to_string()!r})"


__all__ = ["Bitset", "ULONG_BITS", "ULLONG_BITS"]
