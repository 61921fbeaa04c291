"""
Game Result Schemas

Validated, normalized representation of a submitted Battleship game.
"""

from pydantic import BaseModel, ConfigDict, Field


SHIPS_SUNK_MIN = 0
SHIPS_SUNK_MAX = 9
TOTAL_SHOTS_MIN = 10
TOTAL_SHOTS_MAX = 100
HIT_PERCENTAGE_MIN = 0
HIT_PERCENTAGE_MAX = 100


class GameResult(BaseModel):
    """Normalized outcome of a single game."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ships_sunk: int = Field(..., ge=SHIPS_SUNK_MIN, le=SHIPS_SUNK_MAX)
    total_shots: int = Field(..., ge=TOTAL_SHOTS_MIN, le=TOTAL_SHOTS_MAX)
    hit_percentage: int = Field(..., ge=HIT_PERCENTAGE_MIN, le=HIT_PERCENTAGE_MAX)
    winner: bool = False


class GameResultRequest(BaseModel):
    """A player's submission after validation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: str = Field(..., min_length=1)
    game_result: GameResult
