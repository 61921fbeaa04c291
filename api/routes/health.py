"""
Health Check Routes

Liveness and debug endpoints. Neither validates input nor touches the
prover.
"""

from fastapi import APIRouter

from api.models.responses import DebugResponse, HealthResponse
from core.access_log import iso_timestamp


router = APIRouter(tags=["health"])


@router.get("/api/battleship/debug", response_model=DebugResponse)
async def debug() -> DebugResponse:
    """
    Debug endpoint.

    Confirms the API is reachable through any proxy in front of it.
    """
    return DebugResponse(timestamp=iso_timestamp())


@router.get("/battleship/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service status for liveness probes.
    """
    return HealthResponse(timestamp=iso_timestamp())
