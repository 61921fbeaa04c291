"""
Hashing Utilities

Identifiers derived from a submitted game result.

This module provides:
- SHA-256 hashing for raw bytes
- The user hash handed to the prover (hex digest of the username)
- The display proof hash returned to clients

Notes:
- The user hash is deterministic for a given username
- The proof hash mixes in the current time in milliseconds, so two
  identical submissions produce different tokens. It is not a commitment
  to the proof content.
"""
from __future__ import annotations

import hashlib


PROOF_HASH_PREFIX = "0xBS"
PROOF_HASH_HEX_LENGTH = 32


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha256_hex(text: str) -> str:
    """SHA-256 of the UTF-8 encoding of ``text``, as lowercase hex."""
    return sha256(text.encode("utf-8")).hex()


def user_hash(username: str) -> str:
    """
    Compute the user hash passed to the prover as ``--user-hash``.

    Args:
        username: Player name exactly as submitted

    Returns:
        64-character lowercase hex digest
    """
    return sha256_hex(username)


def proof_hash(username: str, ships_sunk: int, total_shots: int, now_ms: int) -> str:
    """
    Build the display token returned as ``proofHash``.

    The digest covers ``f"{username}{ships_sunk}{total_shots}{now_ms}"``
    and is truncated to 32 hex characters.

    Args:
        username: Player name
        ships_sunk: Normalized ships sunk
        total_shots: Normalized total shots
        now_ms: Current Unix time in milliseconds

    Returns:
        ``0xBS`` followed by 32 lowercase hex characters

    Example:
        >>> proof_hash("alice", 3, 20, 0).startswith("0xBS")
        True
    """
    digest = sha256_hex(f"{username}{ships_sunk}{total_shots}{now_ms}")
    return PROOF_HASH_PREFIX + digest[:PROOF_HASH_HEX_LENGTH]


__all__ = [
    "PROOF_HASH_PREFIX",
    "sha256",
    "sha256_hex",
    "user_hash",
    "proof_hash",
]
