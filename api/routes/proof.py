"""
Proof Route

Validate a finished game, run the external prover and return a
confirmation record.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Any, Awaitable, TypeVar

from fastapi import APIRouter, Depends, Request

from api.deps import get_proof_generator, get_runtime_config
from api.errors import APIError, InvalidRequestError, ProofGenerationFailedError
from api.models.responses import ErrorResponse, ProofGameResult, ProofResult
from core.config.runtime import RuntimeConfig
from core.game.validation import validate_game_payload
from core.prover.generator import ProofGenerator
from core.prover.service import ProofOutcome, generate_proof
from core.schemas.errors import GameValidationException, ProofGenerationException


logger = logging.getLogger(__name__)

router = APIRouter(tags=["proof"])

# How often a pending prover run checks whether the client went away
DISCONNECT_POLL_S = 1.0

T = TypeVar("T")


class ClientDisconnectedError(APIError):
    """The client closed the connection before the proof was ready."""

    def __init__(self):
        super().__init__(
            code="CLIENT_DISCONNECTED",
            message="Client closed request",
            status_code=499,
        )


def build_proof_result(outcome: ProofOutcome) -> ProofResult:
    """Build the client-facing ProofResult from a successful prover run."""
    game = outcome.request.game_result
    return ProofResult(
        success=True,
        proof_hash=outcome.proof_hash,
        username=outcome.request.username,
        game_result=ProofGameResult(
            ships_sunk=game.ships_sunk,
            total_shots=game.total_shots,
            hit_percentage=game.hit_percentage,
            winner=game.winner,
        ),
        timestamp=outcome.timestamp,
        verified=True,
    )


async def _read_json(request: Request) -> Any:
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError:
        raise InvalidRequestError("Invalid JSON payload", code="INVALID_JSON")


async def _run_until_disconnect(request: Request, work: Awaitable[T]) -> T:
    """Await ``work``, cancelling it if the client disconnects first."""
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_S)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.warning("Client disconnected, cancelling proof generation")
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                raise ClientDisconnectedError()
    finally:
        if not task.done():
            task.cancel()


@router.post(
    "/api/battleship/generate-proof",
    response_model=ProofResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_battleship_proof(
    request: Request,
    generator: ProofGenerator = Depends(get_proof_generator),
    config: RuntimeConfig = Depends(get_runtime_config),
) -> ProofResult:
    """
    Generate a proof for a finished Battleship game.

    Body: ``{"username": str, "game_result": {"ships_sunk": int,
    "total_shots": int, "hit_percentage"?: int, "winner"?: bool}}``
    """
    client = request.client.host if request.client else "unknown"
    logger.info(f"New battleship proof request from IP: {client}")

    payload = await _read_json(request)
    logger.debug(f"Received game data: {payload!r}")

    try:
        game = validate_game_payload(payload)
    except GameValidationException as e:
        logger.error(f"{e.message} (IP: {client})")
        raise InvalidRequestError(e.message, code=e.code)

    try:
        outcome = await _run_until_disconnect(
            request,
            generate_proof(game, generator, expose_command=config.prover.expose_command),
        )
    except ProofGenerationException as e:
        raise ProofGenerationFailedError(
            details=e.details.get("stderr", ""),
            command=e.details.get("command"),
            code=e.code,
        )

    return build_proof_result(outcome)
