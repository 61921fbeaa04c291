"""
API Error Handling

Standardized error handling for the API. Every error body has the shape
``{"success": false, "error": "<message>", "code": "<CODE>", ...}``.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models.responses import ErrorResponse


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Any = None,
        command: str | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.command = command
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            success=False,
            error=self.message,
            code=self.code,
            details=self.details,
            command=self.command,
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, code: str = "INVALID_REQUEST", details: Any = None):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details,
        )


class ProofGenerationFailedError(APIError):
    """The external prover did not produce a proof."""

    def __init__(self, details: Any = None, command: str | None = None, code: str = "PROOF_GENERATION_FAILED"):
        super().__init__(
            code=code,
            message="Could not generate proof",
            status_code=500,
            details=details,
            command=command,
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error", details: Any = None):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


def _render(status_code: int, body: ErrorResponse, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return _render(exc.status_code, exc.to_response())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle routing errors (404, 405) in the same envelope."""
    return _render(
        exc.status_code,
        ErrorResponse(success=False, error=str(exc.detail), code=f"HTTP_{exc.status_code}"),
        headers=getattr(exc, "headers", None),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return _render(
        500,
        ErrorResponse(
            success=False,
            error="An unexpected error occurred",
            code="INTERNAL_ERROR",
            details={"type": type(exc).__name__},
        ),
    )
