"""
Core cryptographic utilities.

Hashing helpers for user and proof identifiers.
"""
from .hashing import (
    PROOF_HASH_PREFIX,
    sha256,
    sha256_hex,
    user_hash,
    proof_hash,
)

__all__ = [
    "PROOF_HASH_PREFIX",
    "sha256",
    "sha256_hex",
    "user_hash",
    "proof_hash",
]
