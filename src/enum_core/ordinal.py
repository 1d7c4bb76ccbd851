from __future__ import annotations

from enum_core import guards
from enum_core.domains import EnumDomain, _require_enum_domain, domain_of
from enum_core.errors import EnumIndexError


def _is_int_combination(value, enum_type: type) -> bool:
    return (
        issubclass(enum_type, int)
        and isinstance(value, int)
        and not isinstance(value, (bool, enum_type))
    )


class OrdinalIndex:
    """Maps the canonical values of one enum domain to ordinals in [0, N)."""

    __slots__ = ("domain", "_ordinals")

    def __init__(self, domain: EnumDomain):
        self.domain = domain
        self._ordinals = {value: ordinal for ordinal, value in enumerate(domain.values)}

    @property
    def enum_type(self) -> type:
        return self.domain.enum_type

    def index_of(self, value) -> int | None:
        if not isinstance(value, self.domain.enum_type):
            return None
        return self._ordinals.get(value)

    def contains(self, value) -> bool:
        return self.index_of(value) is not None

    def require(self, value, label: str = "index") -> int:
        _require_enum_domain(value, self.domain.enum_type, label)
        ordinal = self._ordinals.get(value)
        if ordinal is None:
            raise EnumIndexError(value=value, enum_type=self.domain.enum_type, label=label)
        return ordinal

    def unchecked(self, value, label: str = "unchecked") -> int:
        # Non-canonical keys surface as KeyError unless the index guard is on.
        if guards.index_guard_enabled():
            return self.require(value, label)
        return self._ordinals[value]

    def decompose(self, value, label: str = "decompose") -> tuple[int, ...]:
        """Ordinals of every declared flag present in ``value``.

        Non-flags domains accept only a single canonical value. Int-valued
        enums opted in as flags (``IntEnum`` under ``@flags``) combine to
        plain ``int``, so a bare int is accepted for them. Bits that match no
        declared flag raise ``EnumIndexError``.
        """
        domain = self.domain
        if not domain.is_flags:
            return (self.require(value, label),)
        if _is_int_combination(value, domain.enum_type):
            bits = int(value)
        else:
            _require_enum_domain(value, domain.enum_type, label)
            bits = int(value.value)
        if bits & ~domain.all_bits:
            raise EnumIndexError(value=value, enum_type=domain.enum_type, label=label)
        return tuple(
            ordinal for ordinal, mask in enumerate(domain.masks) if bits & mask
        )

    def value_at(self, ordinal: int):
        return self.domain.values[ordinal]


_INDEXES: dict[type, OrdinalIndex] = {}


def ordinal_index(enum_type: type) -> OrdinalIndex:
    domain = domain_of(enum_type)
    index = _INDEXES.get(domain.enum_type)
    # Re-registration swaps the domain object; rebuild against the new one.
    if index is None or index.domain is not domain:
        index = OrdinalIndex(domain)
        _INDEXES[domain.enum_type] = index
    return index


def index_of(enum_type: type, value) -> int | None:
    return ordinal_index(enum_type).index_of(value)


def contains(enum_type: type, value) -> bool:
    return ordinal_index(enum_type).contains(value)


__all__ = [
    "OrdinalIndex",
    "ordinal_index",
    "index_of",
    "contains",
]
