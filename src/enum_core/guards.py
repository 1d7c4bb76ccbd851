"""Guard switches for the unchecked and device access paths.

Switches are read from the environment once, at import. Call sites go through
the ``*_enabled`` helpers so the module attributes can be patched in tests.
"""

from __future__ import annotations

import os

import jax

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


TEST_GUARDS = _env_flag("ENUM_CONTAINERS_TEST_GUARDS")
# Unchecked container[key] access validates the key.
INDEX_GUARD = TEST_GUARDS or _env_flag("ENUM_CONTAINERS_INDEX_GUARD")
# device.take bounds-checks ordinals through jax.debug.callback.
DEVICE_GUARD = TEST_GUARDS or _env_flag("ENUM_CONTAINERS_DEVICE_GUARD")
HAS_DEBUG_CALLBACK = hasattr(jax, "debug") and hasattr(jax.debug, "callback")


def index_guard_enabled() -> bool:
    return INDEX_GUARD


def device_guard_enabled() -> bool:
    return DEVICE_GUARD and HAS_DEBUG_CALLBACK


__all__ = [
    "TEST_GUARDS",
    "INDEX_GUARD",
    "DEVICE_GUARD",
    "HAS_DEBUG_CALLBACK",
    "index_guard_enabled",
    "device_guard_enabled",
]
