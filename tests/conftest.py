"""
Pytest configuration and shared fixtures for the Battleship proof API tests.

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

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fastapi.testclient import TestClient  # noqa: E402

from core.access_log import MemoryAccessLog  # noqa: E402
from core.config.runtime import AccessLogConfig, ProverConfig, RuntimeConfig  # noqa: E402
from fixtures.common import FakeProofGenerator, make_payload  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def runtime_config(tmp_path):
    """A RuntimeConfig isolated from the environment and the working directory."""
    return RuntimeConfig(
        prover=ProverConfig(
            command=["prove-stub"],
            working_dir=str(tmp_path),
            timeout_s=5.0,
            max_concurrent=1,
        ),
        access_log=AccessLogConfig(path=str(tmp_path / "battleship_access.log")),
    )


@pytest.fixture
def fake_prover():
    """A prover that always succeeds."""
    return FakeProofGenerator()


@pytest.fixture
def access_log():
    """An in-memory access log."""
    return MemoryAccessLog()


@pytest.fixture
def app(runtime_config, fake_prover, access_log):
    """Application wired to the fake prover and in-memory access log."""
    from api.app import create_app
    return create_app(runtime_config, proof_generator=fake_prover, access_log=access_log)


@pytest.fixture
def client(app):
    """TestClient for the application."""
    return TestClient(app)


@pytest.fixture
def payload():
    """A valid generate-proof request body."""
    return make_payload()


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
