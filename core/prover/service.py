"""
Proof Dispatch

Runs the prover for a validated game result and derives the values
returned to the client. Shared by the HTTP route and the CLI.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from core.crypto.hashing import proof_hash
from core.prover.command import ProofCommandArgs
from core.prover.generator import ProcessOutput, ProofGenerator
from core.schemas.errors import ProofGenerationException
from core.schemas.game import GameResultRequest


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProofOutcome:
    """A successful prover run."""
    request: GameResultRequest
    proof_hash: str
    timestamp: int
    output: ProcessOutput


async def generate_proof(
    request: GameResultRequest,
    generator: ProofGenerator,
    *,
    expose_command: bool = False,
    clock: Callable[[], float] = time.time,
) -> ProofOutcome:
    """
    Run the prover for ``request``.

    Raises:
        ProofGenerationException: the prover could not start, timed out or
            exited non-zero. ``details`` always carries ``stderr`` and
            ``command`` (redacted unless ``expose_command``).
    """
    args = ProofCommandArgs.from_request(request)
    command = generator.describe(args, redact=not expose_command)
    logger.info(f"Command to run: {command}")

    try:
        output = await generator.run(args)
    except ProofGenerationException as e:
        logger.error(f"Proof generation error: {e.message}")
        e.details.setdefault("stderr", e.message)
        e.details["command"] = command
        raise

    if not output.ok:
        logger.error(f"Proof generation error: prover exited with code {output.returncode}")
        raise ProofGenerationException(
            f"Prover exited with code {output.returncode}",
            details={
                "returncode": output.returncode,
                "stderr": output.stderr,
                "command": command,
            },
        )

    now = clock()
    token = proof_hash(
        request.username,
        request.game_result.ships_sunk,
        request.game_result.total_shots,
        int(now * 1000),
    )
    logger.info(f"Battleship proof generated and verified in {output.duration_ms:.0f}ms")
    return ProofOutcome(
        request=request,
        proof_hash=token,
        timestamp=int(now),
        output=output,
    )
