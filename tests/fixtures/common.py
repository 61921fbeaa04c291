"""
Common test fixtures: game payloads and test doubles for the prover.
"""

from __future__ import annotations

import asyncio
from typing import Any

from core.access_log import AccessLog, AccessLogEntry
from core.prover.command import ProofCommandArgs
from core.prover.generator import ProcessOutput, ProofGenerator
from core.schemas.errors import ProofSpawnError


def make_payload(
    username: Any = "alice",
    ships_sunk: Any = 3,
    total_shots: Any = 20,
    **extra: Any,
) -> dict[str, Any]:
    """Create a generate-proof request body."""
    game_result: dict[str, Any] = {"ships_sunk": ships_sunk, "total_shots": total_shots}
    game_result.update(extra)
    return {"username": username, "game_result": game_result}


class FakeProofGenerator(ProofGenerator):
    """Records calls and returns a canned ProcessOutput."""

    def __init__(
        self,
        returncode: int = 0,
        stdout: str = "Proof successfully generated!\nProof successfully verified!\n",
        stderr: str = "",
        spawn_error: str | None = None,
        delay_s: float = 0.0,
    ):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.spawn_error = spawn_error
        self.delay_s = delay_s
        self.calls: list[ProofCommandArgs] = []

    async def run(self, args: ProofCommandArgs) -> ProcessOutput:
        self.calls.append(args)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.spawn_error is not None:
            raise ProofSpawnError(self.spawn_error)
        return ProcessOutput(
            returncode=self.returncode,
            stdout=self.stdout,
            stderr=self.stderr,
            duration_ms=1.0,
        )


class FailingAccessLog(AccessLog):
    """Access log whose writes always fail."""

    def __init__(self):
        self.attempts = 0

    def record(self, entry: AccessLogEntry) -> None:
        self.attempts += 1
        raise OSError("disk full")
