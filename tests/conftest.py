"""
Pytest configuration and shared fixtures for chunkproof tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates tests from CHUNKPROOF_* environment and config files
"""

import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from chunkproof.config.runtime import ENV_PREFIX, set_default_config  # noqa: E402
from fixtures.common import make_bytes  # noqa: E402


# =============================================================================
# Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Clear CHUNKPROOF_* variables, run from an empty directory, reset default config."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def write_file(tmp_path):
    """Factory writing bytes to a file under tmp_path and returning its path."""
    def _write(name: str, content: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture
def sample_bytes() -> bytes:
    """Three full 64-byte chunks plus a 10-byte tail."""
    return make_bytes(64 * 3 + 10)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
