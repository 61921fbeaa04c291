"""
Prover Command

Immutable arguments for one prover invocation and the argument vector
built from them.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import user_hash
from core.schemas.game import GameResultRequest


REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class ProofCommandArgs:
    """Validated fields handed to the prover, plus the user hash."""
    username: str
    ships_sunk: int
    total_shots: int
    hit_percentage: int
    winner: bool
    user_hash: str

    @classmethod
    def from_request(cls, request: GameResultRequest) -> "ProofCommandArgs":
        result = request.game_result
        return cls(
            username=request.username,
            ships_sunk=result.ships_sunk,
            total_shots=result.total_shots,
            hit_percentage=result.hit_percentage,
            winner=result.winner,
            user_hash=user_hash(request.username),
        )

    def to_flags(self, *, redact: bool = False) -> list[str]:
        """
        Prover flags in the order the binary documents them.

        ``--winner`` is always passed with an explicit value; the prover
        treats an absent flag differently from ``false``.
        """
        username = REDACTED if redact else self.username
        digest = REDACTED if redact else self.user_hash
        return [
            "--prove",
            "--username", username,
            "--ships-sunk", str(self.ships_sunk),
            "--total-shots", str(self.total_shots),
            "--hit-percentage", str(self.hit_percentage),
            "--winner", "true" if self.winner else "false",
            "--user-hash", digest,
        ]


def build_argv(prefix: Sequence[str], args: ProofCommandArgs, *, redact: bool = False) -> list[str]:
    """Full argument vector: configured command prefix followed by prover flags."""
    return [*prefix, *args.to_flags(redact=redact)]


def format_command(prefix: Sequence[str], args: ProofCommandArgs, *, redact: bool = True) -> str:
    """Shell-quoted command line, for logs and error payloads."""
    return shlex.join(build_argv(prefix, args, redact=redact))
