"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for GET /battleship/health."""

    status: str = "ok"
    timestamp: str = Field(..., description="Server time, ISO-8601 UTC")


class DebugResponse(HealthResponse):
    """Response for GET /api/battleship/debug."""

    message: str = "Battleship ZK Proof API is working"


class ProofGameResult(BaseModel):
    """Normalized game values echoed back to the client."""

    ships_sunk: int
    total_shots: int
    hit_percentage: int
    winner: bool


class ProofResult(BaseModel):
    """Response for POST /api/battleship/generate-proof."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    proof_hash: str = Field(
        ...,
        alias="proofHash",
        description="Display token: 0xBS followed by 32 hex characters",
    )
    username: str
    game_result: ProofGameResult
    timestamp: int = Field(..., description="Unix time in seconds")
    verified: bool = True


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    error: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Error code")
    details: Any = Field(default=None, description="Diagnostic output, when available")
    command: str | None = Field(default=None, description="Prover command line (redacted)")
