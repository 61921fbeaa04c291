"""
Schemas

Game result models and the error taxonomy shared by the core and API layers.
"""

from .errors import (
    BattleshipException,
    ErrorCodes,
    GameValidationException,
    ProofGenerationException,
    ProofSpawnError,
    ProofTimeoutError,
)
from .game import (
    HIT_PERCENTAGE_MAX,
    HIT_PERCENTAGE_MIN,
    SHIPS_SUNK_MAX,
    SHIPS_SUNK_MIN,
    TOTAL_SHOTS_MAX,
    TOTAL_SHOTS_MIN,
    GameResult,
    GameResultRequest,
)

__all__ = [
    "BattleshipException",
    "ErrorCodes",
    "GameValidationException",
    "ProofGenerationException",
    "ProofSpawnError",
    "ProofTimeoutError",
    "HIT_PERCENTAGE_MAX",
    "HIT_PERCENTAGE_MIN",
    "SHIPS_SUNK_MAX",
    "SHIPS_SUNK_MIN",
    "TOTAL_SHOTS_MAX",
    "TOTAL_SHOTS_MIN",
    "GameResult",
    "GameResultRequest",
]
