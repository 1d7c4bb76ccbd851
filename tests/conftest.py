import os
import sys

import pytest

# Enable strict index/device guards in tests unless explicitly overridden.
os.environ.setdefault("ENUM_CONTAINERS_TEST_GUARDS", "1")

import jax

# Ensure repo root (for tests.harness) and src/ are importable without an
# editable install.
ROOT = os.path.dirname(os.path.dirname(__file__))
for path in (os.path.join(ROOT, "src"), ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

_MARKER_DESCRIPTIONS = {
    "device": "exercises jax device interop",
}


def pytest_configure(config):
    for name, desc in _MARKER_DESCRIPTIONS.items():
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _set_default_device():
    with jax.default_device(jax.devices("cpu")[0]):
        yield


@pytest.fixture
def index_guard(monkeypatch):
    from enum_core import guards

    monkeypatch.setattr(guards, "INDEX_GUARD", True)
    return guards


@pytest.fixture
def no_index_guard(monkeypatch):
    from enum_core import guards

    monkeypatch.setattr(guards, "INDEX_GUARD", False)
    return guards


@pytest.fixture
def device_guard(monkeypatch):
    from enum_core import guards

    monkeypatch.setattr(guards, "DEVICE_GUARD", True)
    if not guards.HAS_DEBUG_CALLBACK:
        pytest.skip("jax.debug.callback not available")
    return guards
