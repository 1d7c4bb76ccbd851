from __future__ import annotations

from dataclasses import dataclass


def _type_name(value: object) -> str:
    if value is None:
        return "?"
    if isinstance(value, type):
        return value.__qualname__
    return type(value).__qualname__


@dataclass(eq=False)
class EnumIndexError(IndexError):
    value: object
    enum_type: type | None = None
    label: str | None = None

    def __str__(self) -> str:
        where = f"{self.label}: " if self.label else ""
        return f"{where}{self.value!r} has no ordinal in {_type_name(self.enum_type)}"


@dataclass(eq=False)
class EnumOverflowError(OverflowError):
    count: int
    width: int
    label: str | None = None

    def __str__(self) -> str:
        where = f"{self.label}: " if self.label else ""
        return f"{where}{self.count} bits do not fit in {self.width}"


@dataclass(eq=False)
class EnumDomainError(TypeError):
    expected: object
    got: object
    label: str | None = None

    def __str__(self) -> str:
        where = f"{self.label}: " if self.label else ""
        return (
            f"{where}expected {_type_name(self.expected)}, "
            f"got {_type_name(self.got)}"
        )


@dataclass(eq=False)
class EnumArityError(ValueError):
    expected: int
    got: int
    label: str | None = None

    def __str__(self) -> str:
        where = f"{self.label}: " if self.label else ""
        return f"{where}expected {self.expected} values, got {self.got}"


@dataclass(eq=False)
class EnumRegistrationError(ValueError):
    message: str
    enum_type: type | None = None

    def __str__(self) -> str:
        return f"{_type_name(self.enum_type)}: {self.message}"


@dataclass(eq=False)
class EnumParseError(ValueError):
    text: str
    enum_type: type | None = None
    label: str | None = None

    def __str__(self) -> str:
        where = f"{self.label}: " if self.label else ""
        return f"{where}cannot parse {self.text!r} as {_type_name(self.enum_type)}"


__all__ = [
    "EnumIndexError",
    "EnumOverflowError",
    "EnumDomainError",
    "EnumArityError",
    "EnumRegistrationError",
    "EnumParseError",
]
