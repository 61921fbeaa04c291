"""API response models."""

from api.models.responses import (
    DebugResponse,
    ErrorResponse,
    HealthResponse,
    ProofGameResult,
    ProofResult,
)

__all__ = [
    "DebugResponse",
    "ErrorResponse",
    "HealthResponse",
    "ProofGameResult",
    "ProofResult",
]
