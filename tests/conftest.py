"""
Pytest configuration and shared fixtures for chainproof tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Resets the global default config around every test
"""

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

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_proofs = importlib.import_module("fixtures.proof_fixtures")

make_parsed_proof = _proofs.make_parsed_proof
make_btc_anchored_proof = _proofs.make_btc_anchored_proof
make_raw_chainpoint_proof = _proofs.make_raw_chainpoint_proof
make_submit_response = _proofs.make_submit_response

from chainproof.config import set_default_config  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _reset_default_config(monkeypatch):
    """Isolate tests from CHAINPROOF_* env vars and the config singleton."""
    for var in (
        "CHAINPROOF_LEDGER_LABEL",
        "CHAINPROOF_LEDGER_ANCHOR_TYPE",
        "CHAINPROOF_PROOF_TYPE",
        "CHAINPROOF_LOG_LEVEL",
        "CHAINPROOF_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def parsed_proof():
    """Provide a ParsedProof anchored to btc."""
    return make_btc_anchored_proof()


@pytest.fixture
def raw_proof():
    """Provide a raw Chainpoint proof object with cal and btc branches."""
    return make_raw_chainpoint_proof()


@pytest.fixture
def submit_responses():
    """Provide submit responses from two nodes for the same two hashes."""
    return [
        make_submit_response("http://node-a.example.com", [("aa" * 32, "id-a-0"), ("bb" * 32, "id-a-1")]),
        make_submit_response("http://node-b.example.com", [("aa" * 32, "id-b-0"), ("bb" * 32, "id-b-1")]),
    ]


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
