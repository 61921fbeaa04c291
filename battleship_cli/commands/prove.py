"""
CLI Prove Command

Validate a game result and run the prover once, without the HTTP server.

Usage:
    battleship prove --username alice --ships-sunk 3 --total-shots 20
    battleship prove --username bob --ships-sunk 9 --total-shots 40 --winner --json
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from argparse import Namespace
from typing import Any

from api.routes.proof import build_proof_result
from core.config.runtime import RuntimeConfig
from core.game.validation import validate_game_payload
from core.prover.generator import ProofGenerator, SubprocessProofGenerator
from core.prover.service import generate_proof
from core.schemas.errors import GameValidationException, ProofGenerationException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VALIDATION_FAILED = 2


def payload_from_args(args: Namespace) -> dict[str, Any]:
    """Shape CLI flags like the HTTP request body."""
    game_result: dict[str, Any] = {
        "ships_sunk": args.ships_sunk,
        "total_shots": args.total_shots,
        "winner": args.winner,
    }
    if args.hit_percentage is not None:
        game_result["hit_percentage"] = args.hit_percentage
    return {"username": args.username, "game_result": game_result}


def print_result_human(result: dict[str, Any]) -> None:
    """Print a proof result in human-readable format."""
    game = result["game_result"]
    print(f"proof_hash: {result['proofHash']}")
    print(f"username: {result['username']}")
    print(f"ships_sunk: {game['ships_sunk']}")
    print(f"total_shots: {game['total_shots']}")
    print(f"hit_percentage: {game['hit_percentage']}%")
    print(f"winner: {str(game['winner']).lower()}")
    print(f"verified: {str(result['verified']).lower()}")


def prove_cmd(args: Namespace, generator: ProofGenerator | None = None) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments
        generator: Prover override, defaults to the configured subprocess

    Returns:
        Exit code
    """
    config: RuntimeConfig = getattr(args, "runtime_config", None) or RuntimeConfig()
    output_json = args.json

    try:
        game = validate_game_payload(payload_from_args(args))
    except GameValidationException as e:
        if output_json:
            print(json.dumps({"success": False, "error": e.message, "code": e.code}, indent=2))
        else:
            print(f"Validation error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_FAILED

    generator = generator or SubprocessProofGenerator.from_config(config.prover)

    try:
        outcome = asyncio.run(
            generate_proof(game, generator, expose_command=config.prover.expose_command)
        )
    except ProofGenerationException as e:
        if output_json:
            print(json.dumps({
                "success": False,
                "error": "Could not generate proof",
                "code": e.code,
                "details": e.details.get("stderr", ""),
                "command": e.details.get("command"),
            }, indent=2))
        else:
            print(f"Could not generate proof: {e.message}", file=sys.stderr)
            stderr = e.details.get("stderr")
            if stderr and stderr != e.message:
                print(stderr, file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    result = build_proof_result(outcome).model_dump(by_alias=True)
    if output_json:
        print(json.dumps(result, indent=2))
    else:
        print_result_human(result)
    return EXIT_SUCCESS
