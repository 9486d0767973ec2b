"""
Pytest configuration and shared fixtures for airdrop claim engine tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_scenario_allocations = _common.make_scenario_allocations
make_merkle_airdrop = _common.make_merkle_airdrop
make_signature_airdrop = _common.make_signature_airdrop
make_domain = _common.make_domain


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def scenario_allocations():
    """Provide the three-record scenario distribution input."""
    return make_scenario_allocations()


@pytest.fixture
def merkle_setup():
    """Provide (MerkleAirdrop, vault, distribution) over the scenario records."""
    return make_merkle_airdrop()


@pytest.fixture
def signature_setup():
    """Provide (SignatureAirdrop, vault) on the default test domain."""
    return make_signature_airdrop()


@pytest.fixture
def domain():
    return make_domain()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep AIRDROP_* variables from the developer's shell out of tests."""
    import os
    for key in list(os.environ):
        if key.startswith("AIRDROP_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
