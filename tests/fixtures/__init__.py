"""
Test fixtures package for the Battleship proof API tests.

This package provides factory functions and test doubles:
- common.py: request payloads, a fake prover, a failing access log

Usage:
    from fixtures import make_payload, FakeProofGenerator

    def test_something():
        payload = make_payload(ships_sunk=5)
"""

from .common import (
    FailingAccessLog,
    FakeProofGenerator,
    make_payload,
)

__all__ = [
    "FailingAccessLog",
    "FakeProofGenerator",
    "make_payload",
]
