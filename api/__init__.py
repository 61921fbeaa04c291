"""
Battleship Proof API (FastAPI)

HTTP API that turns a finished Battleship game into a zero-knowledge proof
by invoking the external prover:
- POST /api/battleship/generate-proof - Validate a game and run the prover
- GET /api/battleship/debug - Debug status
- GET /battleship/health - Health check

Usage:
    uvicorn api.main:app --port 4001
"""

__version__ = "0.1.0"
