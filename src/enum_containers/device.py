"""jax interop: enum containers as device masks and lookup tables.

Host-side conversions resolve keys through the same checked ordinal path as
the containers. ``take`` is the jit-safe side: it works on ordinals that are
already on device and can only bounds-check them through a debug callback.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp

from enum_core import guards
from enum_core.errors import EnumArityError
from enum_core.ordinal import ordinal_index
from enum_containers.array import FixedArray, _ArrayBase
from enum_containers.bitset import Bitset

logger = logging.getLogger(__name__)


def _host(value):
    # SYNC: pulls device values to the host.
    return jax.device_get(jnp.asarray(value))


def _leading(host, count: int, label: str) -> None:
    got = host.shape[0] if host.ndim else 0
    if got != count:
        raise EnumArityError(expected=count, got=got, label=label)


def mask_of(bitset: Bitset) -> jax.Array:
    """Bool vector of shape (N,); element ``i`` is the bit at ordinal ``i``."""
    bits = bitset.to_int()
    return jnp.asarray(
        [bool(bits >> ordinal & 1) for ordinal in range(bitset.size())],
        dtype=jnp.bool_,
    )


def bitset_from_mask(enum_type: type, mask) -> Bitset:
    count = ordinal_index(enum_type).domain.count
    host = _host(mask)
    _leading(host, count, "bitset_from_mask")
    if host.ndim != 1:
        raise EnumArityError(expected=1, got=host.ndim, label="bitset_from_mask.ndim")
    bits = 0
    for ordinal, flag in enumerate(host.tolist()):
        if flag:
            bits |= 1 << ordinal
    return Bitset.from_int(enum_type, bits)


def table_of(array: _ArrayBase, dtype=None) -> jax.Array:
    """Stack the slots of ``array`` along a leading ordinal axis."""
    return jnp.asarray(array.to_list(), dtype=dtype)


def array_from_table(enum_type: type, table) -> FixedArray:
    count = ordinal_index(enum_type).domain.count
    host = _host(table)
    _leading(host, count, "array_from_table")
    logger.debug(
        "array_from_table %s shape=%s", enum_type.__qualname__, tuple(host.shape)
    )
    return FixedArray.from_values(enum_type, host.tolist())


def ordinals_of(enum_type: type, keys) -> jax.Array:
    index = ordinal_index(enum_type)
    return jnp.asarray(
        [index.require(key, "ordinals_of") for key in keys], dtype=jnp.int32
    )


def _report_outside(ordinals, count: int, label: str) -> None:
    # count is the static table length, so only the ordinals are traced.
    flat = ordinals.ravel()
    outside = (flat < 0) | (flat >= count)

    def _report(any_outside, first, total):
        if any_outside:
            raise RuntimeError(
                f"{label}: {int(total)} enum ordinal(s) outside [0, {count}), "
                f"first {int(first)}"
            )

    first = flat[jnp.argmax(outside)]
    jax.debug.callback(_report, jnp.any(outside), first, jnp.sum(outside))


def take(table, ordinals, label: str = "take") -> jax.Array:
    """Gather rows of ``table`` by ordinal; out-of-range ordinals are clipped."""
    table = jnp.asarray(table)
    count = table.shape[0]
    idx = jnp.asarray(ordinals, dtype=jnp.int32)
    if guards.device_guard_enabled() and idx.size:
        _report_outside(idx, count, label)
    return jnp.take(table, idx, axis=0, mode="clip")


def lookup(table, enum_type: type, keys) -> jax.Array:
    return take(table, ordinals_of(enum_type, keys), "lookup")


__all__ = [
    "mask_of",
    "bitset_from_mask",
    "table_of",
    "array_from_table",
    "ordinals_of",
    "take",
    "lookup",
]
