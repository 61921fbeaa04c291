"""API route handlers."""

from api.routes import health, proof

__all__ = ["health", "proof"]
