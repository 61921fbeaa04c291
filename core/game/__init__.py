"""Game result validation."""

from .validation import (
    INVALID_HIT_PERCENTAGE_MESSAGE,
    INVALID_SHIPS_SUNK_MESSAGE,
    INVALID_TOTAL_SHOTS_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    derive_hit_percentage,
    is_truthy,
    parse_int,
    validate_game_payload,
)

__all__ = [
    "INVALID_HIT_PERCENTAGE_MESSAGE",
    "INVALID_SHIPS_SUNK_MESSAGE",
    "INVALID_TOTAL_SHOTS_MESSAGE",
    "MISSING_FIELDS_MESSAGE",
    "derive_hit_percentage",
    "is_truthy",
    "parse_int",
    "validate_game_payload",
]
