"""Enumeration domains: the ordered declared values of an enum type.

A domain is discovered from the class the first time it is asked for, or
registered explicitly with ``register_domain`` (or the ``flags`` decorator).
Containers only ever see the resulting ``EnumDomain``.

Discovery rules:
  - non-flags: every member in declaration order, aliases collapsed
  - flags: every member whose value is a single bit, in declaration order;
    zero and named multi-bit combinations stay valid values but are not
    domain members
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable

from enum_core.errors import EnumDomainError, EnumRegistrationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EnumDomain:
    enum_type: type
    values: tuple
    is_flags: bool = False
    # Bit of each flag value, in ordinal order. Empty for non-flags domains.
    masks: tuple[int, ...] = ()
    all_bits: int = 0

    @property
    def count(self) -> int:
        return len(self.values)

    def name_of(self, value) -> str:
        return value.name


_REGISTRY: dict[type, EnumDomain] = {}


def _is_single_bit(bits: int) -> bool:
    return bits > 0 and bits & (bits - 1) == 0


def _require_enum_type(enum_type, label: str) -> type:
    if not (isinstance(enum_type, type) and issubclass(enum_type, enum.Enum)):
        raise EnumDomainError(expected=enum.Enum, got=enum_type, label=label)
    return enum_type


def _require_enum_domain(value, enum_type: type, label: str):
    if not isinstance(value, enum_type):
        raise EnumDomainError(expected=enum_type, got=value, label=label)
    return value


def _discover_values(enum_type: type, is_flags: bool) -> tuple:
    members = tuple(dict.fromkeys(enum_type.__members__.values()))
    if not is_flags:
        return members
    selected = []
    for member in members:
        if not isinstance(member.value, int):
            raise EnumRegistrationError(
                f"flag {member.name} has non-integer value {member.value!r}",
                enum_type,
            )
        if _is_single_bit(member.value):
            selected.append(member)
    return tuple(selected)


def _build_domain(enum_type: type, values: tuple, is_flags: bool) -> EnumDomain:
    if not is_flags:
        return EnumDomain(enum_type, values, False)
    masks = []
    for value in values:
        bits = value.value
        if not isinstance(bits, int) or not _is_single_bit(bits):
            raise EnumRegistrationError(
                f"flag {value.name}={bits!r} is not a single bit", enum_type
            )
        masks.append(bits)
    if len(set(masks)) != len(masks):
        raise EnumRegistrationError("flag values share a bit", enum_type)
    all_bits = 0
    for bits in masks:
        all_bits |= bits
    return EnumDomain(enum_type, values, True, tuple(masks), all_bits)


def register_domain(
    enum_type: type,
    *,
    values: Iterable | None = None,
    is_flags: bool | None = None,
) -> EnumDomain:
    """Register the domain of ``enum_type``, replacing any earlier one.

    ``values`` fixes the ordinal order (and may subset the members); when
    omitted the declared members are discovered. ``is_flags`` defaults to
    whether ``enum_type`` subclasses ``enum.Flag``.
    """
    enum_type = _require_enum_type(enum_type, "register_domain")
    if is_flags is None:
        is_flags = issubclass(enum_type, enum.Flag)
    if values is None:
        values = _discover_values(enum_type, is_flags)
    else:
        values = tuple(values)
        for value in values:
            if not isinstance(value, enum_type):
                raise EnumRegistrationError(
                    f"{value!r} is not a member", enum_type
                )
        if len(set(values)) != len(values):
            raise EnumRegistrationError("duplicate values", enum_type)
    domain = _build_domain(enum_type, values, bool(is_flags))
    previous = _REGISTRY.get(enum_type)
    _REGISTRY[enum_type] = domain
    if previous is not None and previous != domain:
        logger.info("replaced domain of %s", enum_type.__qualname__)
    logger.debug(
        "domain %s: count=%d flags=%s",
        enum_type.__qualname__,
        domain.count,
        domain.is_flags,
    )
    return domain


def flags(enum_type: type) -> type:
    """Class decorator marking ``enum_type`` as a flags enumeration."""
    register_domain(enum_type, is_flags=True)
    return enum_type


def domain_of(enum_type: type) -> EnumDomain:
    enum_type = _require_enum_type(enum_type, "domain_of")
    domain = _REGISTRY.get(enum_type)
    if domain is None:
        domain = register_domain(enum_type)
    return domain


def values(enum_type: type) -> tuple:
    return domain_of(enum_type).values


def count(enum_type: type) -> int:
    return domain_of(enum_type).count


def is_flags(enum_type: type) -> bool:
    return domain_of(enum_type).is_flags


def name_of(value) -> str:
    return domain_of(type(value)).name_of(value)


__all__ = [
    "EnumDomain",
    "register_domain",
    "flags",
    "domain_of",
    "values",
    "count",
    "is_flags",
    "name_of",
    "_require_enum_type",
    "_require_enum_domain",
]
