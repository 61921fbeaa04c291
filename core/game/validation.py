"""
Game Result Validation

Turns a raw JSON payload into a GameResultRequest.

Checks run in a fixed order and stop at the first failure:
1. username, game_result.ships_sunk and game_result.total_shots are present
2. ships_sunk is an integer in [0, 9]
3. total_shots is an integer in [10, 100]
4. hit_percentage, when given, is an integer in [0, 100]

Both snake_case and camelCase keys are accepted.
"""

from __future__ import annotations

import math
import re
from typing import Any

from core.schemas.errors import ErrorCodes, GameValidationException
from core.schemas.game import (
    HIT_PERCENTAGE_MAX,
    HIT_PERCENTAGE_MIN,
    SHIPS_SUNK_MAX,
    SHIPS_SUNK_MIN,
    TOTAL_SHOTS_MAX,
    TOTAL_SHOTS_MIN,
    GameResult,
    GameResultRequest,
)


MISSING_FIELDS_MESSAGE = (
    "Missing required fields: username, ships_sunk, and total_shots are required"
)
INVALID_SHIPS_SUNK_MESSAGE = (
    f"Invalid ships sunk: must be a number between {SHIPS_SUNK_MIN} and {SHIPS_SUNK_MAX}"
)
INVALID_TOTAL_SHOTS_MESSAGE = (
    f"Invalid total shots: must be a number between {TOTAL_SHOTS_MIN} and {TOTAL_SHOTS_MAX}"
)
INVALID_HIT_PERCENTAGE_MESSAGE = (
    f"Invalid hit percentage: must be a number between {HIT_PERCENTAGE_MIN} and {HIT_PERCENTAGE_MAX}"
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_MISSING = object()


def parse_int(value: Any) -> int | None:
    """
    Leniently parse an integer the way web clients tend to send them.

    - ints pass through (bools are rejected)
    - finite floats are truncated toward zero
    - strings yield their leading signed digit run ("7 ships" -> 7)

    Returns None when no integer can be extracted.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return None
        try:
            return int(match.group(1))
        except ValueError:
            # digit run longer than the interpreter's int conversion limit
            return None
    return None


def derive_hit_percentage(ships_sunk: int, total_shots: int) -> int:
    """round(ships_sunk / total_shots * 100), halves rounded up."""
    return math.floor(ships_sunk / total_shots * 100 + 0.5)


def is_truthy(value: Any) -> bool:
    """
    Truthiness as web clients mean it: only null, false, 0, NaN and ""
    are falsy. Empty lists and objects count as true.
    """
    if value is None or value is False:
        return False
    if isinstance(value, float):
        return value != 0 and not math.isnan(value)
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


def _is_encodable(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _lookup(mapping: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in mapping:
            return mapping[key]
    return _MISSING


def _parse_in_range(value: Any, low: int, high: int) -> int | None:
    parsed = parse_int(value)
    if parsed is None or parsed < low or parsed > high:
        return None
    return parsed


def validate_game_payload(payload: Any) -> GameResultRequest:
    """
    Validate and normalize a proof request payload.

    Args:
        payload: Decoded JSON body

    Returns:
        The normalized GameResultRequest

    Raises:
        GameValidationException: on the first failed check
    """
    if not isinstance(payload, dict):
        raise GameValidationException(MISSING_FIELDS_MESSAGE, ErrorCodes.MISSING_FIELDS)

    username = payload.get("username")
    game_result = _lookup(payload, "game_result", "gameResult")

    if (
        not isinstance(username, str)
        or not username
        or not _is_encodable(username)
        or not isinstance(game_result, dict)
    ):
        raise GameValidationException(MISSING_FIELDS_MESSAGE, ErrorCodes.MISSING_FIELDS)

    raw_ships_sunk = _lookup(game_result, "ships_sunk", "shipsSunk")
    raw_total_shots = _lookup(game_result, "total_shots", "totalShots")
    if raw_ships_sunk is _MISSING or raw_total_shots is _MISSING:
        raise GameValidationException(MISSING_FIELDS_MESSAGE, ErrorCodes.MISSING_FIELDS)

    ships_sunk = _parse_in_range(raw_ships_sunk, SHIPS_SUNK_MIN, SHIPS_SUNK_MAX)
    if ships_sunk is None:
        raise GameValidationException(
            INVALID_SHIPS_SUNK_MESSAGE,
            ErrorCodes.INVALID_SHIPS_SUNK,
            field_path="game_result.ships_sunk",
        )

    total_shots = _parse_in_range(raw_total_shots, TOTAL_SHOTS_MIN, TOTAL_SHOTS_MAX)
    if total_shots is None:
        raise GameValidationException(
            INVALID_TOTAL_SHOTS_MESSAGE,
            ErrorCodes.INVALID_TOTAL_SHOTS,
            field_path="game_result.total_shots",
        )

    raw_hit_percentage = _lookup(game_result, "hit_percentage", "hitPercentage")
    if raw_hit_percentage is _MISSING or raw_hit_percentage is None:
        hit_percentage = derive_hit_percentage(ships_sunk, total_shots)
    else:
        hit_percentage = _parse_in_range(raw_hit_percentage, HIT_PERCENTAGE_MIN, HIT_PERCENTAGE_MAX)
        if hit_percentage is None:
            raise GameValidationException(
                INVALID_HIT_PERCENTAGE_MESSAGE,
                ErrorCodes.INVALID_HIT_PERCENTAGE,
                field_path="game_result.hit_percentage",
            )

    winner = _lookup(game_result, "winner")
    return GameResultRequest(
        username=username,
        game_result=GameResult(
            ships_sunk=ships_sunk,
            total_shots=total_shots,
            hit_percentage=hit_percentage,
            winner=winner is not _MISSING and is_truthy(winner),
        ),
    )
