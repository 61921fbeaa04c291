"""
Error Taxonomy

Stable error codes and the exceptions raised by the core layer.
The API layer maps these onto HTTP responses.
"""

from typing import Any


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Request validation
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_SHIPS_SUNK = "INVALID_SHIPS_SUNK"
    INVALID_TOTAL_SHOTS = "INVALID_TOTAL_SHOTS"
    INVALID_HIT_PERCENTAGE = "INVALID_HIT_PERCENTAGE"

    # Prover subprocess
    PROOF_GENERATION_FAILED = "PROOF_GENERATION_FAILED"
    PROOF_SPAWN_FAILED = "PROOF_SPAWN_FAILED"
    PROOF_TIMEOUT = "PROOF_TIMEOUT"


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class BattleshipException(Exception):
    """
    Base exception for all proof API errors.

    Carries a stable code and optional structured details.
    """

    def __init__(
        self,
        message: str,
        code: str = "BATTLESHIP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class GameValidationException(BattleshipException):
    """Raised when a submitted game result fails validation."""

    def __init__(self, message: str, code: str, field_path: str | None = None) -> None:
        super().__init__(message, code=code, details={"field": field_path} if field_path else None)
        self.field_path = field_path


class ProofGenerationException(BattleshipException):
    """Raised when the external prover cannot produce a proof."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.PROOF_GENERATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class ProofSpawnError(ProofGenerationException):
    """The prover process could not be started (missing binary, bad cwd)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCodes.PROOF_SPAWN_FAILED)


class ProofTimeoutError(ProofGenerationException):
    """The prover process exceeded its time budget and was killed."""

    def __init__(self, timeout_s: float) -> None:
        super().__init__(
            f"Proof generation timed out after {timeout_s:g}s",
            code=ErrorCodes.PROOF_TIMEOUT,
            details={"timeout_s": timeout_s},
        )
        self.timeout_s = timeout_s
